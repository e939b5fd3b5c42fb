"""profanity-masker: detect and mask obfuscated profanity in several languages."""

from .cache import ExpressionCache
from .config import create_detector, load_config, load_from_yaml
from .detector import Detector, DetectorConfig
from .errors import (
    ConfigurationError,
    InvalidInput,
    MalformedLexicon,
    MalformedSubstitutionTable,
    ProfanityMaskerError,
    UnknownLanguage,
)
from .language_data import LanguageData, available_languages, load_language
from .lexicon import CompiledLexicon, compile_lexicon
from .normalizers import normalize
from .patterns import compile_expression
from .types import DetectionMode, DetectionResult, Match

__all__ = [
    "Detector", "DetectorConfig", "DetectionMode",
    "DetectionResult", "Match",
    "ExpressionCache",
    "CompiledLexicon", "compile_lexicon", "compile_expression",
    "normalize",
    "LanguageData", "available_languages", "load_language",
    "create_detector", "load_config", "load_from_yaml",
    "ProfanityMaskerError", "InvalidInput", "ConfigurationError",
    "UnknownLanguage", "MalformedSubstitutionTable", "MalformedLexicon",
    "check",
]
__version__ = "0.1.0"


def check(text: str, language: str = "english") -> DetectionResult:
    """One-shot check with bundled data."""
    return Detector(DetectorConfig(language=language)).check(text)
