"""Language normalizers: fold orthographic variants before matching.

A normalizer is a pure ``str -> str`` function.  For the scan loop it also
reports *where* every normalized character came from (a ``TextMapping``), so
a match found in the normalized text can be masked at the right place in the
original text even when normalization changes the length ("ß" -> "ss",
"sch" -> "sh").

Usage:
    registry = default_registry()
    registry.get("german").normalize("Scheiße")    # "Sheisse"
    normalize("Ça alors", "french")                # "Ca alors"
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Callable, Iterable

from .errors import UnknownLanguage

ALL_LANGUAGES = "all"
DEFAULT_LANGUAGE = "english"

Replacement = Callable[["re.Match[str]"], str]


@dataclass(frozen=True, slots=True)
class TextMapping:
    """Normalized text plus the source span of every normalized character.

    ``starts[i]:ends[i]`` is the slice of the source text that produced
    ``text[i]``.  Both sequences are non-decreasing.
    """
    text: str
    starts: tuple[int, ...]
    ends: tuple[int, ...]

    @classmethod
    def identity(cls, text: str) -> "TextMapping":
        n = len(text)
        return cls(text, tuple(range(n)), tuple(range(1, n + 1)))

    def source_span(self, start: int, end: int) -> tuple[int, int]:
        """Map a non-empty normalized span to the source span covering it."""
        return self.starts[start], self.ends[end - 1]

    def then(self, other: "TextMapping") -> "TextMapping":
        """Compose with a mapping whose source is ``self.text``."""
        starts = tuple(self.starts[s] for s in other.starts)
        ends = tuple(self.ends[e - 1] for e in other.ends)
        return TextMapping(other.text, starts, ends)


def _rewrite(text: str, pattern: re.Pattern, repl: Replacement) -> TextMapping:
    """Like ``pattern.sub(repl, text)`` but tracking offsets.

    Replacement characters split the replaced span evenly: "ß" -> "ss" gives
    both "s" the span of "ß"; "sch" -> "sh" gives "s" the span "sc" and "h"
    the span "ch".
    """
    out: list[str] = []
    starts: list[int] = []
    ends: list[int] = []
    pos = 0
    for m in pattern.finditer(text):
        for i in range(pos, m.start()):
            out.append(text[i])
            starts.append(i)
            ends.append(i + 1)
        replacement = repl(m)
        a, width, n = m.start(), m.end() - m.start(), len(replacement)
        for j, char in enumerate(replacement):
            out.append(char)
            starts.append(a + (j * width) // n)
            ends.append(a - ((-(j + 1) * width) // n))   # ceil division
        pos = m.end()
    for i in range(pos, len(text)):
        out.append(text[i])
        starts.append(i)
        ends.append(i + 1)
    return TextMapping("".join(out), tuple(starts), tuple(ends))


def _table_rule(table: dict[str, str]) -> tuple[re.Pattern, Replacement]:
    """Turn a literal translation table into a (pattern, repl) rule."""
    keys = sorted(table, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(k) for k in keys))
    return pattern, lambda m: table[m.group()]


def _case_rule(upper: str, title: str, lower: str) -> Replacement:
    """Replacement that keeps ALL-CAPS and Title-case of the matched digraph."""
    def repl(m: "re.Match[str]") -> str:
        found = m.group()
        if found.isupper():
            return upper
        if found[0].isupper():
            return title
        return lower
    return repl


class StringNormalizer:
    """Base normalizer: an ordered list of rewrite rules."""

    name = "base"
    rules: tuple[tuple[re.Pattern, Replacement], ...] = ()

    def normalize(self, text: str) -> str:
        for pattern, repl in self.rules:
            text = pattern.sub(repl, text)
        return text

    def normalize_with_offsets(self, text: str) -> TextMapping:
        mapping = TextMapping.identity(text)
        for pattern, repl in self.rules:
            mapping = mapping.then(_rewrite(mapping.text, pattern, repl))
        return mapping

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class EnglishStringNormalizer(StringNormalizer):
    name = "english"


class FrenchStringNormalizer(StringNormalizer):
    """Strip accents and fold the œ/æ ligatures."""

    name = "french"
    rules = (_table_rule({
        "à": "a", "â": "a", "ä": "a", "á": "a",
        "è": "e", "é": "e", "ê": "e", "ë": "e",
        "ì": "i", "í": "i", "î": "i", "ï": "i",
        "ò": "o", "ó": "o", "ô": "o", "ö": "o",
        "ù": "u", "ú": "u", "û": "u", "ü": "u",
        "ý": "y", "ÿ": "y",
        "À": "A", "Â": "A", "Ä": "A", "Á": "A",
        "È": "E", "É": "E", "Ê": "E", "Ë": "E",
        "Ì": "I", "Í": "I", "Î": "I", "Ï": "I",
        "Ò": "O", "Ó": "O", "Ô": "O", "Ö": "O",
        "Ù": "U", "Ú": "U", "Û": "U", "Ü": "U",
        "Ý": "Y", "Ÿ": "Y",
        "ç": "c", "Ç": "C",
        "œ": "oe", "Œ": "OE",
        "æ": "ae", "Æ": "AE",
    }),)


class GermanStringNormalizer(StringNormalizer):
    """Expand umlauts and ß, fold "sch" to "sh"."""

    name = "german"
    rules = (
        _table_rule({
            "ä": "ae", "Ä": "AE",
            "ö": "oe", "Ö": "OE",
            "ü": "ue", "Ü": "UE",
            "ß": "ss",
        }),
        (re.compile("sch", re.IGNORECASE), _case_rule("SH", "Sh", "sh")),
    )


class SpanishStringNormalizer(StringNormalizer):
    """Strip accents, fold ñ, word-initial "ll" before a vowel and "rr"."""

    name = "spanish"
    rules = (
        _table_rule({
            "á": "a", "Á": "A",
            "é": "e", "É": "E",
            "í": "i", "Í": "I",
            "ó": "o", "Ó": "O",
            "ú": "u", "Ú": "U",
            "ü": "u", "Ü": "U",
            "ñ": "n", "Ñ": "N",
        }),
        (re.compile(r"\bll(?=[aeiouáéíóúü])", re.IGNORECASE), _case_rule("Y", "Y", "y")),
        (re.compile("rr", re.IGNORECASE), _case_rule("R", "R", "r")),
    )


class RussianStringNormalizer(StringNormalizer):
    name = "russian"
    rules = (_table_rule({"ё": "е", "Ё": "Е", "э": "е", "Э": "Е"}),)


class ChainedNormalizer(StringNormalizer):
    """Apply several normalizers in sequence (all-languages mode)."""

    name = ALL_LANGUAGES

    def __init__(self, normalizers: Iterable[StringNormalizer]) -> None:
        self.normalizers = tuple(normalizers)
        self.rules = tuple(rule for n in self.normalizers for rule in n.rules)

    def __repr__(self) -> str:
        inner = ", ".join(n.name for n in self.normalizers)
        return f"ChainedNormalizer([{inner}])"


class NormalizerRegistry:
    """Language name -> normalizer.  Names are case-insensitive."""

    __slots__ = ("_normalizers", "_default")

    def __init__(self, default_language: str = DEFAULT_LANGUAGE) -> None:
        self._normalizers: dict[str, StringNormalizer] = {}
        self._default = default_language.lower()

    def register(self, language: str, normalizer: StringNormalizer) -> None:
        if not isinstance(normalizer, StringNormalizer):
            raise TypeError(f"Expected a StringNormalizer, got {type(normalizer).__name__}")
        self._normalizers[language.lower()] = normalizer

    def has(self, language: str) -> bool:
        return language.lower() in self._normalizers

    def get(self, language: str) -> StringNormalizer:
        key = language.lower()
        if key == ALL_LANGUAGES:
            return ChainedNormalizer(self._normalizers.values())
        try:
            return self._normalizers[key]
        except KeyError:
            raise UnknownLanguage(language, self.names()) from None

    def names(self) -> list[str]:
        return list(self._normalizers)

    def default(self) -> StringNormalizer:
        return self.get(self._default)

    def set_default(self, language: str) -> None:
        self._default = language.lower()


def default_registry() -> NormalizerRegistry:
    """A registry with every built-in language; english is the default."""
    registry = NormalizerRegistry()
    for normalizer in (
        EnglishStringNormalizer(),
        # German first: French and Spanish would strip "ü" before it expands to "ue"
        GermanStringNormalizer(),
        FrenchStringNormalizer(),
        SpanishStringNormalizer(),
        RussianStringNormalizer(),
    ):
        registry.register(normalizer.name, normalizer)
    return registry


def normalize(text: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Normalize text for one language (or ``"all"``)."""
    return default_registry().get(language).normalize(text)
