"""YAML/dict config loader for profanity-masker.

Supports loading from a YAML file or a plain dict (for embedding in a
larger application config).

Example YAML:

    profanity_masker:
      language: english          # or "all"
      mask: "#"
      mode: normal               # normal | strict | lenient
      density_threshold: 0.5
      unique_by_match: false
      profanities:               # optional, replaces the language's list
        - darn
      false_positives:
        - darnell
      cache_ttl: 86400
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Any

import yaml

from .cache import ExpressionCache
from .detector import DEFAULT_DENSITY_THRESHOLD, DEFAULT_MASK, Detector, DetectorConfig
from .errors import ConfigurationError
from .normalizers import DEFAULT_LANGUAGE
from .types import DetectionMode

ENV_LANGUAGE = "PROFANITY_MASKER_LANGUAGE"
ENV_MASK = "PROFANITY_MASKER_MASK"


def _optional_list(value: Any, key: str) -> tuple[str, ...] | None:
    if value is None:
        return None
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(f"'{key}' must be a list of strings")
    return tuple(value)


def load_config(data: dict[str, Any]) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline).

    Idempotent: the result of load_config can be passed through it again.
    """
    # Support nested under "profanity_masker" key or flat
    if "profanity_masker" in data:
        data = data["profanity_masker"] or {}

    mode = data.get("mode", DetectionMode.NORMAL.value)
    try:
        mode = DetectionMode(mode)
    except ValueError:
        valid = ", ".join(m.value for m in DetectionMode)
        raise ConfigurationError(f"Unknown mode {mode!r} (expected one of: {valid})") from None

    return {
        "language": str(data.get("language") or os.environ.get(ENV_LANGUAGE, DEFAULT_LANGUAGE)).lower(),
        "mask": str(data.get("mask") or os.environ.get(ENV_MASK, DEFAULT_MASK))[:1],
        "mode": mode,
        "density_threshold": float(data.get("density_threshold", DEFAULT_DENSITY_THRESHOLD)),
        "unique_by_match": bool(data.get("unique_by_match", False)),
        "profanities": _optional_list(data.get("profanities"), "profanities"),
        "false_positives": _optional_list(data.get("false_positives"), "false_positives"),
        "cache_ttl": float(data.get("cache_ttl", 86400)),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    with open(path, encoding="utf-8") as f:
        return load_config(yaml.safe_load(f) or {})


def create_detector(
    config: dict[str, Any],
    *,
    cache: ExpressionCache | None = None,
) -> Detector:
    """Create a fully configured detector from a config dict."""
    cfg = load_config(config)

    detector_config = DetectorConfig(
        language=cfg["language"],
        mask=cfg["mask"],
        mode=cfg["mode"],
        density_threshold=cfg["density_threshold"],
        unique_by_match=cfg["unique_by_match"],
        profanities=cfg["profanities"],
        false_positives=cfg["false_positives"],
    )
    if cache is None:
        cache = ExpressionCache(ttl=cfg["cache_ttl"])
    return Detector(detector_config, cache=cache)
