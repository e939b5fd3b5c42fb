"""Detector: the main API.  Normalize, scan longest term first, mask, repeat.

Usage:
    from profanity_masker import Detector

    detector = Detector()                     # english, mask "*"
    result = detector.check("This is f-u-c-k-i-n-g great")
    print(result.masked_text)                 # "This is ************* great"
    print(result.unique_terms_found)          # ("fucking",)

    detector.all_languages().mask_with("#").check("merde")
    detector.configure(["darn"], []).check("darn it")

A Detector is immutable: every configuration method returns a new one, and
check() keeps all of its state local, so one instance can be shared across
threads.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass, replace
from typing import Callable, Sequence

from .cache import ExpressionCache, default_cache
from .errors import InvalidInput, MalformedLexicon
from .language_data import LanguageData, load_language
from .lexicon import CompiledLexicon, cache_key, compile_lexicon
from .normalizers import ALL_LANGUAGES, DEFAULT_LANGUAGE, NormalizerRegistry, default_registry
from .types import DetectionMode, DetectionResult, Match

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_WORD_CHAR = re.compile(r"\w")

DEFAULT_MASK = "*"
DEFAULT_DENSITY_THRESHOLD = 0.5


@dataclass(frozen=True)
class DetectorConfig:
    """Configuration for the Detector."""
    language: str = DEFAULT_LANGUAGE      # or "all"
    mask: str = DEFAULT_MASK
    mode: DetectionMode = DetectionMode.NORMAL
    # Minimum matched-length / full-word-length ratio (NORMAL mode)
    density_threshold: float = DEFAULT_DENSITY_THRESHOLD
    # Track unique matched substrings instead of lexicon terms
    unique_by_match: bool = False
    # Custom overrides of the language's lists; None = use language data
    profanities: tuple[str, ...] | None = None
    false_positives: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.mask, str) or len(self.mask) != 1 or self.mask.isspace():
            raise InvalidInput(f"Mask must be a single non-space character, got {self.mask!r}")
        if not 0 < self.density_threshold <= 1:
            raise MalformedLexicon(
                f"density_threshold must be in (0, 1], got {self.density_threshold}"
            )


class Detector:
    """Obfuscation-tolerant profanity detector and masker."""

    __slots__ = ("config", "_data", "_cache", "_registry", "_loader", "_normalizer", "_lexicon")

    def __init__(
        self,
        config: DetectorConfig | None = None,
        *,
        data: LanguageData | None = None,
        cache: ExpressionCache | None = None,
        registry: NormalizerRegistry | None = None,
        loader: Callable[[str], LanguageData] = load_language,
    ) -> None:
        self.config = config or DetectorConfig()
        self._data = data
        self._cache = cache if cache is not None else default_cache()
        self._registry = registry or default_registry()
        self._loader = loader
        # Both raise UnknownLanguage for unregistered names
        self._normalizer = self._registry.get(self.config.language)
        self._lexicon = self._load_lexicon()

    @classmethod
    def from_raw(
        cls,
        profanities: Sequence[str],
        false_positives: Sequence[str],
        substitutions: dict[str, Sequence[str]],
        separators: Sequence[str],
        *,
        language: str = DEFAULT_LANGUAGE,
        cache: ExpressionCache | None = None,
        **options,
    ) -> "Detector":
        """Build a detector from caller-supplied raw configuration."""
        data = LanguageData.from_raw(
            language,
            profanities=profanities,
            false_positives=false_positives,
            substitutions=substitutions,
            separators=separators,
        )
        config = DetectorConfig(language=language, **options)
        return cls(config, data=data, cache=cache if cache is not None else ExpressionCache())

    # ------------------------------------------------------------------
    # Fluent configuration, each returns a new Detector
    # ------------------------------------------------------------------

    def _with(self, *, keep_data: bool = True, **changes) -> "Detector":
        return Detector(
            replace(self.config, **changes),
            data=self._data if keep_data else None,
            cache=self._cache,
            registry=self._registry,
            loader=self._loader,
        )

    def language(self, language: str) -> "Detector":
        return self._with(keep_data=False, language=language.lower())

    def english(self) -> "Detector":
        return self.language("english")

    def spanish(self) -> "Detector":
        return self.language("spanish")

    def german(self) -> "Detector":
        return self.language("german")

    def french(self) -> "Detector":
        return self.language("french")

    def russian(self) -> "Detector":
        return self.language("russian")

    def all_languages(self) -> "Detector":
        return self.language(ALL_LANGUAGES)

    def mask_with(self, mask: str) -> "Detector":
        """Use another mask character; only the first character counts."""
        if not mask:
            raise InvalidInput("Mask character must not be empty")
        return self._with(mask=mask[0])

    def strict(self) -> "Detector":
        return self._with(mode=DetectionMode.STRICT)

    def lenient(self) -> "Detector":
        return self._with(mode=DetectionMode.LENIENT)

    def configure(
        self,
        profanities: Sequence[str] | None = None,
        false_positives: Sequence[str] | None = None,
    ) -> "Detector":
        """Replace the lexicon and/or false positives, keeping everything else."""
        return self._with(
            profanities=tuple(profanities) if profanities is not None else None,
            false_positives=tuple(false_positives) if false_positives is not None else None,
        )

    # ------------------------------------------------------------------
    # Lexicon
    # ------------------------------------------------------------------

    def _load_lexicon(self) -> CompiledLexicon:
        data = self._data or self._loader(self.config.language)
        profanities = self.config.profanities
        if profanities is None:
            profanities = data.profanities
        false_positives = self.config.false_positives
        if false_positives is None:
            false_positives = data.false_positives

        key = cache_key(
            profanities,
            false_positives,
            data.substitutions,
            data.separators,
            language=self.config.language,
        )
        return self._cache.get_or_compile(key, lambda: compile_lexicon(
            profanities,
            data.substitutions,
            data.separators,
            false_positives=false_positives,
            normalizer=self._normalizer,
        ))

    @property
    def lexicon(self) -> CompiledLexicon:
        return self._lexicon

    def clear_cache(self) -> None:
        """Drop every compiled lexicon from this detector's cache."""
        self._cache.invalidate_all()

    # ------------------------------------------------------------------
    # Scan-mask loop
    # ------------------------------------------------------------------

    def check(self, text: str) -> DetectionResult:
        """Detect and mask profanity in text.

        Raises InvalidInput for empty (or non-string) input.
        """
        if not isinstance(text, str) or not text:
            raise InvalidInput("No string to check")

        mask = self.config.mask
        working = text
        count = 0
        unique: list[str] = []
        seen: set[str] = set()
        accepted: list[Match] = []

        while True:
            working = _WHITESPACE.sub(" ", working)
            mapping = self._normalizer.normalize_with_offsets(working)
            normalized = mapping.text
            changed = False

            for term, pattern in self._lexicon.items():
                # finditer walks the buffer as it was before this term's masks
                for m in pattern.finditer(normalized):
                    match = self._accept(term, m, normalized)
                    if match is None:
                        continue

                    start, end = m.span()
                    src_start, src_end = mapping.source_span(start, end)
                    normalized = normalized[:start] + mask * (end - start) + normalized[end:]
                    working = (
                        working[:src_start] + mask * (src_end - src_start) + working[src_end:]
                    )

                    changed = True
                    count += 1
                    accepted.append(match)
                    label = match.text if self.config.unique_by_match else term
                    if label not in seen:
                        seen.add(label)
                        unique.append(label)

            if not changed:
                break

        if count:
            logger.debug(f"Masked {count} match(es): {', '.join(unique)}")

        return DetectionResult(
            source_text=text,
            masked_text=working,
            has_profanity=count > 0,
            match_count=count,
            unique_terms_found=tuple(unique),
            matches=tuple(accepted),
            language=self.config.language,
        )

    def _accept(self, term: str, m: "re.Match[str]", normalized: str) -> Match | None:
        """Run the acceptance filters; None means rejected."""
        matched = m.group()
        if all(c == self.config.mask for c in matched):
            return None  # already masked

        start, end = m.span()
        if _spans_word_boundary(normalized, start, end):
            logger.debug(f"Rejected {matched!r} for {term!r}: spans a word boundary")
            return None

        full_word = _full_word(normalized, start, end)

        if len(term) == 2 and full_word.casefold() != self._lexicon.form(term).casefold():
            logger.debug(f"Rejected {matched!r} for {term!r}: two-letter term inside {full_word!r}")
            return None

        threshold = self._density_threshold()
        if threshold and len(matched) / len(full_word) < threshold:
            logger.debug(f"Rejected {matched!r} for {term!r}: too small a part of {full_word!r}")
            return None

        if self._lexicon.is_false_positive(full_word):
            logger.debug(f"Rejected {matched!r} for {term!r}: {full_word!r} is a false positive")
            return None

        return Match(term=term, text=matched, start=start, length=end - start, full_word=full_word)

    def _density_threshold(self) -> float:
        if self.config.mode is DetectionMode.STRICT:
            return 0.0
        if self.config.mode is DetectionMode.LENIENT:
            return 1.0
        return self.config.density_threshold

    def __repr__(self) -> str:
        c = self.config
        return f"Detector(language={c.language!r}, mask={c.mask!r}, mode={c.mode.value})"


def _spans_word_boundary(text: str, start: int, end: int) -> bool:
    """True if a match containing whitespace absorbed part of a neighbouring word.

    "fuck me" inside "fuck merde" cuts into "merde"; "as s" inside "has sex"
    cuts into both neighbours.  A single-letter edge part ("fuck a") is also
    rejected unless every part is a single letter, which is how "f u c k" is
    spelled out.
    """
    matched = text[start:end]
    if not _WHITESPACE.search(matched):
        return False
    parts = matched.split()
    if len(parts) < 2:
        return False
    if start > 0 and _WORD_CHAR.match(text[start - 1]):
        return True
    if end < len(text) and _WORD_CHAR.match(text[end]):
        return True
    if all(len(p) == 1 for p in parts):
        return False
    return any(len(p) == 1 and p.isalpha() for p in (parts[0], parts[-1]))


def _full_word(text: str, start: int, end: int) -> str:
    """Expand [start, end) outward to the enclosing run of word characters."""
    left, right = start, end
    while left > 0 and _WORD_CHAR.match(text[left - 1]):
        left -= 1
    while right < len(text) and _WORD_CHAR.match(text[right]):
        right += 1
    return text[left:right]
