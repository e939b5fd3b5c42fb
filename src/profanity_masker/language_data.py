"""Bundled language data: YAML files under ``languages/``.

``common.yaml`` holds the separators and the substitutions shared by every
language; each ``<language>.yaml`` holds its profanities, false positives
and extra substitutions:

    profanities:
      - merde
      - putain
    false_positives:
      - classe
    substitutions:
      é: [é, è, ê, ë]
"""

from __future__ import annotations
import functools
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

import yaml

from .errors import MalformedLexicon, UnknownLanguage
from .normalizers import ALL_LANGUAGES

logger = logging.getLogger(__name__)

LANGUAGE_DIR = Path(__file__).parent / "languages"
_COMMON = "common"


@dataclass(frozen=True)
class LanguageData:
    """Raw configuration for one language (or the merge of several)."""
    language: str
    profanities: tuple[str, ...] = ()
    false_positives: tuple[str, ...] = ()
    substitutions: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    separators: tuple[str, ...] = ()

    @classmethod
    def from_raw(
        cls,
        language: str,
        *,
        profanities: Iterable[str] = (),
        false_positives: Iterable[str] = (),
        substitutions: Mapping[str, Iterable[str]] | None = None,
        separators: Iterable[str] = (),
    ) -> "LanguageData":
        """Freeze caller-supplied lists and dicts."""
        return cls(
            language=language,
            profanities=tuple(profanities),
            false_positives=tuple(false_positives),
            substitutions=MappingProxyType(
                {k: tuple(v) for k, v in (substitutions or {}).items()}
            ),
            separators=tuple(separators),
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "language": self.language,
            "profanities": list(self.profanities),
            "false_positives": list(self.false_positives),
            "substitutions": {k: list(v) for k, v in self.substitutions.items()},
            "separators": list(self.separators),
        }


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedLexicon(f"{path.name}: expected a mapping at top level")
    return data


def _string_list(data: dict[str, Any], key: str, source: str) -> list[str]:
    values = data.get(key) or []
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise MalformedLexicon(f"{source}: '{key}' must be a list of strings")
    return values


def _merge_substitutions(*tables: Mapping[str, Iterable[str]]) -> dict[str, tuple[str, ...]]:
    """Merge tables key by key, keeping first-seen order and dropping duplicates."""
    merged: dict[str, list[str]] = {}
    for table in tables:
        for char, options in table.items():
            bucket = merged.setdefault(str(char), [])
            for option in options:
                option = str(option)
                if option not in bucket:
                    bucket.append(option)
    return {k: tuple(v) for k, v in merged.items()}


def available_languages() -> list[str]:
    """Names of the bundled language files."""
    return sorted(p.stem for p in LANGUAGE_DIR.glob("*.yaml") if p.stem != _COMMON)


@functools.lru_cache(maxsize=None)
def load_common() -> tuple[tuple[str, ...], Mapping[str, tuple[str, ...]]]:
    """Return (separators, shared substitutions)."""
    path = LANGUAGE_DIR / f"{_COMMON}.yaml"
    data = _read_yaml(path)
    separators = tuple(_string_list(data, "separators", path.name))
    substitutions = data.get("substitutions") or {}
    if not isinstance(substitutions, dict):
        raise MalformedLexicon(f"{path.name}: 'substitutions' must be a mapping")
    return separators, MappingProxyType(_merge_substitutions(substitutions))


@functools.lru_cache(maxsize=None)
def load_language(language: str) -> LanguageData:
    """Load one bundled language merged with the common data.

    Raises UnknownLanguage if there is no file for it.
    """
    name = language.lower()
    if name == ALL_LANGUAGES:
        return load_all_languages()

    path = LANGUAGE_DIR / f"{name}.yaml"
    if name == _COMMON or not path.is_file():
        raise UnknownLanguage(language, available_languages())

    data = _read_yaml(path)
    substitutions = data.get("substitutions") or {}
    if not isinstance(substitutions, dict):
        raise MalformedLexicon(f"{path.name}: 'substitutions' must be a mapping")

    separators, common_subs = load_common()
    result = LanguageData(
        language=name,
        profanities=tuple(_string_list(data, "profanities", path.name)),
        false_positives=tuple(_string_list(data, "false_positives", path.name)),
        substitutions=MappingProxyType(_merge_substitutions(common_subs, substitutions)),
        separators=separators,
    )
    logger.debug(
        f"Loaded language {name}: {len(result.profanities)} profanities, "
        f"{len(result.false_positives)} false positives"
    )
    return result


def load_all_languages(languages: Iterable[str] | None = None) -> LanguageData:
    """Union of several (default: every bundled) languages."""
    names = list(languages) if languages is not None else available_languages()
    parts = [load_language(n) for n in names]

    profanities: list[str] = []
    false_positives: list[str] = []
    for part in parts:
        profanities.extend(p for p in part.profanities if p not in profanities)
        false_positives.extend(w for w in part.false_positives if w not in false_positives)

    separators, common_subs = load_common()
    return LanguageData(
        language=ALL_LANGUAGES,
        profanities=tuple(profanities),
        false_positives=tuple(false_positives),
        substitutions=MappingProxyType(
            _merge_substitutions(common_subs, *(p.substitutions for p in parts))
        ),
        separators=separators,
    )
