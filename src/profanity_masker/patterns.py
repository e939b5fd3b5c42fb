"""Pattern compiler: turns one lexicon term into an obfuscation-tolerant regex.

Each character of the term becomes its substitution class repeated one or
more times (``f`` -> ``(?:f|ƒ|ph)+``) so elongations like "ffuucckk" still
match, and consecutive characters are joined by the separator fragment so
"f-u-c-k", "f.u.c.k" and "f u c k" match as well.

Example:
    >>> sep = separator_expression(["-", "_"])
    >>> subs = substitution_expressions({"u": ["u", "ü"]})
    >>> compile_term("fuck", subs, sep).search("f-ü-ck").group()
    'f-ü-ck'
"""

from __future__ import annotations
import re
from typing import Mapping, Sequence

from .errors import ConfigurationError, MalformedLexicon, MalformedSubstitutionTable


# Period only separates when a word character follows, so "fuck." at the end
# of a sentence doesn't swallow the full stop.
_PERIOD_FRAGMENT = r"\.(?=\w)"


def separator_expression(separators: Sequence[str]) -> str:
    """Build the fragment allowed between two letters of a term.

    Zero or more of: any separator character, any whitespace, or a period
    followed by a word character.  Lazy so the match stays as short as
    possible.
    """
    chars: list[str] = []
    for sep in separators:
        if not isinstance(sep, str) or len(sep) != 1:
            raise ConfigurationError(f"Separator must be a single character, got {sep!r}")
        if sep == "." or sep.isspace():
            continue  # handled by the period fragment and \s
        escaped = re.escape(sep)
        if escaped not in chars:
            chars.append(escaped)
    return "(?:[" + "".join(chars) + r"\s]|" + _PERIOD_FRAGMENT + ")*?"


def _class_fragment(options: list[str]) -> str:
    if all(len(o) == 1 for o in options):
        return "[" + "".join(re.escape(o) for o in options) + "]+"
    # Multi-character substitutes ("ph" for f) need an alternation; longest
    # first so the regex engine prefers the fuller substitute.
    ordered = sorted(options, key=len, reverse=True)
    return "(?:" + "|".join(re.escape(o) for o in ordered) + ")+"


def substitution_expressions(substitutions: Mapping[str, Sequence[str]]) -> dict[str, str]:
    """Build one repeated character-class fragment per substitution key.

    The key character itself is always part of its own class.
    Raises MalformedSubstitutionTable for empty lists, empty substitutes or
    keys that are not a single character.
    """
    expressions: dict[str, str] = {}
    for char, options in substitutions.items():
        if not isinstance(char, str) or len(char) != 1:
            raise MalformedSubstitutionTable(
                f"Substitution key must be a single character, got {char!r}"
            )
        if isinstance(options, str) or not options:
            raise MalformedSubstitutionTable(f"Substitutions for {char!r} must be a non-empty list")

        merged: list[str] = [char.lower()]
        for option in options:
            if not isinstance(option, str) or not option:
                raise MalformedSubstitutionTable(
                    f"Empty or non-string substitute for {char!r}: {option!r}"
                )
            if option not in merged:
                merged.append(option)
        expressions[char.lower()] = _class_fragment(merged)
    return expressions


def term_expression(term: str, substitution_exprs: Mapping[str, str], separator: str) -> str:
    """Return the regex source for a single term (not compiled)."""
    if not isinstance(term, str) or not term:
        raise MalformedLexicon(f"Lexicon terms must be non-empty strings, got {term!r}")

    parts: list[str] = []
    for char in term:
        fragment = substitution_exprs.get(char.lower())
        if fragment is None:
            # No registered substitutes: the literal character, still elongatable
            fragment = re.escape(char) + "+"
        parts.append(fragment)
    return separator.join(parts)


def _compile(source: str, term: str) -> re.Pattern:
    try:
        return re.compile(source, re.IGNORECASE)
    except re.error as e:
        raise MalformedSubstitutionTable(f"Could not compile pattern for {term!r}: {e}") from e


def compile_term(term: str, substitution_exprs: Mapping[str, str], separator: str) -> re.Pattern:
    """Compile a single term into a case-insensitive matcher."""
    return _compile(term_expression(term, substitution_exprs, separator), term)


def compile_spellings(
    spellings: Sequence[str],
    substitution_exprs: Mapping[str, str],
    separator: str,
) -> re.Pattern:
    """Compile several spellings of one term into a single matcher.

    Longest spelling first, so "sheisse" wins over "sheise" at the same
    position.
    """
    if not spellings:
        raise MalformedLexicon("At least one spelling is required")
    if len(spellings) == 1:
        return compile_term(spellings[0], substitution_exprs, separator)
    ordered = sorted(spellings, key=len, reverse=True)
    source = "|".join(
        "(?:" + term_expression(s, substitution_exprs, separator) + ")" for s in ordered
    )
    return _compile(source, ordered[0])


def compile_expression(
    term: str,
    substitutions: Mapping[str, Sequence[str]],
    separators: Sequence[str],
) -> re.Pattern:
    """Convenience wrapper: raw configuration in, compiled matcher out."""
    return compile_term(
        term,
        substitution_expressions(substitutions),
        separator_expression(separators),
    )
