"""Tests for the pattern compiler."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from profanity_masker.errors import ConfigurationError, MalformedLexicon, MalformedSubstitutionTable
from profanity_masker.patterns import (
    compile_expression,
    compile_spellings,
    compile_term,
    separator_expression,
    substitution_expressions,
    term_expression,
)

SUBS = {"f": ["f", "ƒ"], "u": ["u", "ü"], "c": ["c", "ç"], "k": ["k"]}
SEPS = ["-", "_"]


# ── Separators ───────────────────────────────────────────────────────

def test_separator_expression_shape():
    assert separator_expression(["-", "_", "."]) == r"(?:[\-_\s]|\.(?=\w))*?"


def test_separator_expression_without_separators_still_allows_whitespace():
    assert separator_expression([]) == r"(?:[\s]|\.(?=\w))*?"


def test_separator_expression_dedupes():
    assert separator_expression(["-", "-"]) == separator_expression(["-"])


def test_separator_must_be_single_character():
    with pytest.raises(ConfigurationError):
        separator_expression(["--"])


# ── Substitutions ────────────────────────────────────────────────────

def test_substitution_class():
    assert substitution_expressions({"a": ["4", "@"]}) == {"a": "[a4@]+"}


def test_substitution_key_always_included():
    exprs = substitution_expressions({"s": ["$"]})
    assert exprs["s"] == r"[s\$]+"


def test_multi_character_substitutes_use_alternation():
    exprs = substitution_expressions({"f": ["f", "ph"]})
    assert exprs["f"] == "(?:ph|f)+"


def test_uppercase_key_is_folded():
    assert "a" in substitution_expressions({"A": ["4"]})


@pytest.mark.parametrize("table", [
    {"a": []},
    {"a": ["4", ""]},
    {"ab": ["4"]},
    {"a": "4"},
])
def test_malformed_substitution_table(table):
    with pytest.raises(MalformedSubstitutionTable):
        substitution_expressions(table)


# ── Terms ────────────────────────────────────────────────────────────

def test_compiled_term_matches_obfuscations():
    pattern = compile_expression("fuck", SUBS, SEPS)
    for text in ["fuck", "FUCK", "ƒüçk", "f-u-c-k", "f_u_c_k", "f u c k", "f.u.c.k", "ffuuucckk"]:
        assert pattern.search(text), text


def test_compiled_term_does_not_match_other_words():
    pattern = compile_expression("fuck", SUBS, SEPS)
    assert pattern.search("duck") is None
    assert pattern.search("f+u+c+k") is None


def test_trailing_period_not_absorbed():
    pattern = compile_expression("fuck", SUBS, SEPS)
    assert pattern.search("fuck.").group() == "fuck"


def test_missing_substitution_falls_back_to_literal():
    assert compile_expression("xy", {}, []).pattern == r"x+(?:[\s]|\.(?=\w))*?y+"


def test_special_characters_in_terms_are_escaped():
    pattern = compile_expression("a+b", {}, [])
    assert pattern.search("a+b")
    assert pattern.search("aab") is None


def test_compilation_is_deterministic():
    subs = substitution_expressions(SUBS)
    sep = separator_expression(SEPS)
    assert compile_term("fuck", subs, sep).pattern == compile_term("fuck", subs, sep).pattern


def test_spellings_longest_first():
    pattern = compile_spellings(["sheise", "sheisse"], {}, separator_expression([]))
    assert pattern.search("Sheisse").group() == "Sheisse"
    assert pattern.search("Sheise").group() == "Sheise"


def test_single_spelling_same_as_term():
    subs = substitution_expressions(SUBS)
    sep = separator_expression(SEPS)
    assert compile_spellings(["fuck"], subs, sep).pattern == compile_term("fuck", subs, sep).pattern


def test_empty_term_rejected():
    with pytest.raises(MalformedLexicon):
        term_expression("", {}, "")
