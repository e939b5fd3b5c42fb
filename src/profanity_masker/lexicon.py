"""Lexicon compiler: one compiled pattern per term, longest term first.

Scanning visits the longest terms first so a compound like "asshole" is
masked before "ass" gets a chance to claim part of it.
"""

from __future__ import annotations
import hashlib
import itertools
import json
import logging
import re
from collections.abc import Mapping
from typing import Callable, Iterable, Iterator, Sequence

from .errors import MalformedLexicon
from .normalizers import StringNormalizer
from .patterns import compile_spellings, separator_expression, substitution_expressions

logger = logging.getLogger(__name__)

_CACHE_KEY_PREFIX = "profanity_masker_lexicon_"


class CompiledLexicon(Mapping):
    """Read-only term → compiled pattern mapping, iterated longest first."""

    __slots__ = ("_expressions", "_forms", "_false_positives")

    def __init__(
        self,
        expressions: Iterable[tuple[str, re.Pattern]],
        false_positives: Iterable[str] = (),
        forms: Mapping[str, str] | None = None,
    ) -> None:
        ordered = sorted(expressions, key=lambda item: len(item[0]), reverse=True)
        self._expressions: dict[str, re.Pattern] = dict(ordered)
        self._forms = dict(forms or {})   # term → normalized form it was compiled from
        self._false_positives = frozenset(w.casefold() for w in false_positives)

    def __getitem__(self, term: str) -> re.Pattern:
        return self._expressions[term]

    def __iter__(self) -> Iterator[str]:
        return iter(self._expressions)

    def __len__(self) -> int:
        return len(self._expressions)

    def __repr__(self) -> str:
        return f"CompiledLexicon({len(self)} terms, {len(self._false_positives)} false positives)"

    @property
    def false_positives(self) -> frozenset[str]:
        return self._false_positives

    def form(self, term: str) -> str:
        return self._forms.get(term, term)

    def is_false_positive(self, word: str) -> bool:
        return word.casefold() in self._false_positives


def spellings(
    term: str,
    substitutions: Mapping[str, Sequence[str]],
    fold: Callable[[str], str],
) -> list[str]:
    """Normalized spellings of a term, normalized form first.

    Characters the normalizer rewrites ("ü" -> "ue") would otherwise lose
    their substitutes, so every substitute of such a character is spelled
    out before folding: "miststück" gives "miststueck" and "miststuck".
    """
    choices: list[list[str]] = []
    for char in term:
        options = [char]
        if fold(char) != char:
            options.extend(s for s in substitutions.get(char.lower(), ()) if s not in options)
        choices.append(options)

    result = [fold(term)]
    for combo in itertools.product(*choices):
        folded = fold("".join(combo))
        if folded not in result:
            result.append(folded)
    return result


def compile_lexicon(
    lexicon: Sequence[str],
    substitutions: Mapping[str, Sequence[str]],
    separators: Sequence[str],
    *,
    false_positives: Iterable[str] = (),
    normalizer: StringNormalizer | None = None,
) -> CompiledLexicon:
    """Compile every term of a lexicon.

    With a normalizer, each term is normalized before its pattern is built
    so it lines up with normalized text, and every normalized spelling of it
    is compiled into the same pattern.  The original term stays the key.
    Raises MalformedLexicon / MalformedSubstitutionTable on bad input.
    """
    if isinstance(lexicon, str):
        raise MalformedLexicon("Lexicon must be a sequence of terms, not a single string")

    separator = separator_expression(separators)
    substitution_exprs = substitution_expressions(substitutions)

    def fold(word: str) -> str:
        return normalizer.normalize(word) if normalizer is not None else word

    expressions: list[tuple[str, re.Pattern]] = []
    forms: dict[str, str] = {}
    for term in lexicon:
        if not isinstance(term, str) or not term.strip():
            raise MalformedLexicon(f"Lexicon terms must be non-empty strings, got {term!r}")
        if term in forms:
            continue
        variants = spellings(term, substitutions, fold)
        forms[term] = variants[0]
        expressions.append((term, compile_spellings(variants, substitution_exprs, separator)))

    # Full words are read from normalized text, so compare normalized forms
    compiled = CompiledLexicon(expressions, (fold(w) for w in false_positives), forms)
    logger.debug(f"Compiled {compiled!r}")
    return compiled


def cache_key(
    lexicon: Sequence[str],
    false_positives: Iterable[str],
    substitutions: Mapping[str, Sequence[str]] | None = None,
    separators: Sequence[str] | None = None,
    language: str = "",
) -> str:
    """Content hash of everything that affects a compiled lexicon."""
    payload = json.dumps(
        {
            "language": language,
            "profanities": list(lexicon),
            "false_positives": sorted(false_positives),
            "substitutions": {k: list(v) for k, v in (substitutions or {}).items()},
            "separators": list(separators or []),
        },
        ensure_ascii=False,
        sort_keys=True,
    )
    return _CACHE_KEY_PREFIX + hashlib.md5(payload.encode("utf-8")).hexdigest()
