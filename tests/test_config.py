"""Tests for the YAML/dict config loader."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from profanity_masker import DetectionMode, ExpressionCache, create_detector, load_config, load_from_yaml
from profanity_masker.config import ENV_LANGUAGE, ENV_MASK
from profanity_masker.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(ENV_LANGUAGE, raising=False)
    monkeypatch.delenv(ENV_MASK, raising=False)


# ── load_config ──────────────────────────────────────────────────────

def test_defaults():
    cfg = load_config({})
    assert cfg["language"] == "english"
    assert cfg["mask"] == "*"
    assert cfg["mode"] is DetectionMode.NORMAL
    assert cfg["density_threshold"] == 0.5
    assert cfg["unique_by_match"] is False
    assert cfg["profanities"] is None
    assert cfg["false_positives"] is None
    assert cfg["cache_ttl"] == 86400


def test_nested_section():
    cfg = load_config({"profanity_masker": {"language": "German", "mask": "##", "mode": "strict"}})
    assert cfg["language"] == "german"
    assert cfg["mask"] == "#"
    assert cfg["mode"] is DetectionMode.STRICT


def test_environment_fallback(monkeypatch):
    monkeypatch.setenv(ENV_LANGUAGE, "french")
    monkeypatch.setenv(ENV_MASK, "%")
    cfg = load_config({})
    assert cfg["language"] == "french"
    assert cfg["mask"] == "%"


def test_explicit_values_beat_environment(monkeypatch):
    monkeypatch.setenv(ENV_LANGUAGE, "french")
    assert load_config({"language": "spanish"})["language"] == "spanish"


def test_unknown_mode():
    with pytest.raises(ConfigurationError):
        load_config({"mode": "paranoid"})


def test_lists_must_hold_strings():
    with pytest.raises(ConfigurationError):
        load_config({"profanities": "darn"})
    with pytest.raises(ConfigurationError):
        load_config({"false_positives": [1, 2]})


def test_load_from_yaml(tmp_path):
    path = tmp_path / "masker.yaml"
    path.write_text(
        "profanity_masker:\n"
        "  language: english\n"
        "  mask: '#'\n"
        "  mode: lenient\n"
        "  profanities:\n"
        "    - darn\n"
        "  cache_ttl: 60\n",
        encoding="utf-8",
    )
    cfg = load_from_yaml(path)
    assert cfg["mask"] == "#"
    assert cfg["mode"] is DetectionMode.LENIENT
    assert cfg["profanities"] == ("darn",)
    assert cfg["cache_ttl"] == 60


def test_load_empty_yaml(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_from_yaml(path)["language"] == "english"


# ── create_detector ──────────────────────────────────────────────────

def test_create_detector_from_raw_dict():
    detector = create_detector({"mask": "#", "profanities": ["test"], "false_positives": []})
    assert detector.check("This is a test").masked_text == "This is a ####"


def test_create_detector_from_loaded_config():
    cfg = load_config({"language": "german", "mode": "strict"})
    detector = create_detector(cfg)
    assert detector.config.language == "german"
    assert detector.config.mode is DetectionMode.STRICT


def test_create_detector_flat_dict_with_cache_ttl():
    detector = create_detector({"language": "french", "cache_ttl": 3600})
    assert detector.config.language == "french"
    assert detector.check("merde").masked_text == "*****"


def test_load_config_is_idempotent():
    cfg = load_config({"mode": "lenient", "profanities": ["darn"], "cache_ttl": 60})
    assert load_config(cfg) == cfg


def test_create_detector_with_shared_cache():
    cache = ExpressionCache()
    first = create_detector({}, cache=cache)
    second = create_detector({"mask": "#"}, cache=cache)
    assert first.lexicon is second.lexicon


def test_create_detector_unknown_language():
    with pytest.raises(ConfigurationError):
        create_detector({"language": "klingon"})
