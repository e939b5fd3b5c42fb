"""Core types."""

from __future__ import annotations
import enum
from dataclasses import dataclass, field

from .normalizers import DEFAULT_LANGUAGE


class DetectionMode(enum.Enum):
    """How aggressively a match buried inside a longer word is accepted."""
    NORMAL = "normal"      # density threshold from config
    STRICT = "strict"      # any match inside a word counts
    LENIENT = "lenient"    # match must cover the whole word


@dataclass(frozen=True, slots=True)
class Match:
    """A single accepted profanity match."""
    term: str              # lexicon entry whose pattern fired
    text: str              # matched substring (normalized buffer)
    start: int             # character offset in the normalized buffer
    length: int
    full_word: str         # enclosing run of word characters

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True, slots=True)
class DetectionResult:
    """Result of checking one piece of text."""
    source_text: str
    masked_text: str
    has_profanity: bool = False
    match_count: int = 0
    unique_terms_found: tuple[str, ...] = ()     # first-seen order
    matches: tuple[Match, ...] = field(default_factory=tuple)
    language: str = DEFAULT_LANGUAGE
