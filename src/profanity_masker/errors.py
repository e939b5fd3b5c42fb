"""Exception hierarchy.

Everything the package raises on purpose derives from
``ProfanityMaskerError`` so callers can catch one type.
"""

from __future__ import annotations


class ProfanityMaskerError(Exception):
    """Base class for all package errors."""


class InvalidInput(ProfanityMaskerError, ValueError):
    """Caller passed something unusable (empty text, empty mask)."""


class ConfigurationError(ProfanityMaskerError):
    """Lexicon, substitution or language configuration is unusable."""


class UnknownLanguage(ConfigurationError, KeyError):
    """No normalizer or language file registered under this name."""

    def __init__(self, language: str, available: list[str] | None = None) -> None:
        self.language = language
        self.available = sorted(available or [])
        msg = f"Unknown language: {language!r}"
        if self.available:
            msg += f" (available: {', '.join(self.available)})"
        super().__init__(msg)

    def __str__(self) -> str:
        # KeyError would repr() the message
        return self.args[0]


class MalformedSubstitutionTable(ConfigurationError):
    """A substitution entry cannot be turned into a pattern fragment."""


class MalformedLexicon(ConfigurationError):
    """A lexicon term or language file is invalid."""
