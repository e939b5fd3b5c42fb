"""Tests for language normalizers and offset tracking."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from profanity_masker import UnknownLanguage, normalize
from profanity_masker.normalizers import (
    ChainedNormalizer,
    EnglishStringNormalizer,
    GermanStringNormalizer,
    NormalizerRegistry,
    TextMapping,
    default_registry,
)


# ── Per-language folding ─────────────────────────────────────────────

def test_english_is_identity():
    assert EnglishStringNormalizer().normalize("Ünïcödé stays") == "Ünïcödé stays"


def test_french_strips_accents_and_ligatures():
    assert normalize("Ça alors, œuvre", "french") == "Ca alors, oeuvre"


def test_german_umlauts_eszett_and_sch():
    assert normalize("Scheiße", "german") == "Sheisse"
    assert normalize("SCHÖN", "german") == "SHOEN"
    assert normalize("Müll", "german") == "Muell"


def test_spanish_folds():
    assert normalize("niño", "spanish") == "nino"
    assert normalize("llamar", "spanish") == "yamar"
    assert normalize("calle", "spanish") == "calle"
    assert normalize("perro", "spanish") == "pero"


def test_russian_yo():
    assert normalize("ёлка", "russian") == "елка"


# ── Offsets ──────────────────────────────────────────────────────────

def test_identity_mapping():
    mapping = TextMapping.identity("abc")
    assert mapping.source_span(0, 3) == (0, 3)
    assert mapping.source_span(1, 2) == (1, 2)


def test_length_changing_offsets():
    mapping = GermanStringNormalizer().normalize_with_offsets("Scheiße")
    assert mapping.text == "Sheisse"
    assert mapping.source_span(0, 7) == (0, 7)
    # the two "s" produced by "ß"
    assert mapping.source_span(4, 6) == (5, 6)


def test_offsets_preserve_untouched_text():
    mapping = GermanStringNormalizer().normalize_with_offsets("Das ist Scheiße!")
    assert mapping.text == "Das ist Sheisse!"
    assert mapping.source_span(0, 3) == (0, 3)
    assert mapping.source_span(8, 15) == (8, 15)
    assert mapping.source_span(15, 16) == (15, 16)


def test_offsets_agree_with_normalize():
    normalizer = default_registry().get("all")
    text = "Ça, Scheiße y llama al perro"
    assert normalizer.normalize_with_offsets(text).text == normalizer.normalize(text)


# ── Registry ─────────────────────────────────────────────────────────

def test_all_languages_expands_umlauts_before_stripping_accents():
    assert normalize("Müll", "all") == "Muell"


def test_registry_lookup_is_case_insensitive():
    registry = default_registry()
    assert registry.has("German")
    assert isinstance(registry.get("GERMAN"), GermanStringNormalizer)


def test_registry_all_chains_every_language():
    normalizer = default_registry().get("all")
    assert isinstance(normalizer, ChainedNormalizer)
    assert len(normalizer.normalizers) == 5


def test_registry_unknown_language():
    with pytest.raises(UnknownLanguage) as exc:
        default_registry().get("klingon")
    assert "klingon" in str(exc.value)
    assert "german" in exc.value.available


def test_registry_rejects_non_normalizers():
    with pytest.raises(TypeError):
        NormalizerRegistry().register("english", lambda s: s)


def test_registry_default():
    registry = default_registry()
    assert isinstance(registry.default(), EnglishStringNormalizer)
    registry.set_default("german")
    assert isinstance(registry.default(), GermanStringNormalizer)
