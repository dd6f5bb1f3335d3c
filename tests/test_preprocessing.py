from __future__ import annotations

import pytest

from emo_lex.preprocessing import (
    STEM_RULES,
    NormalizedText,
    StemRule,
    normalize,
    remove_punctuation,
    stem_token,
    tokenize,
)


def test_pipeline_trace_for_example_sentence() -> None:
    result = normalize("I love dogs but I hate cats!")
    assert result.original == "I love dogs but I hate cats!"
    assert result.folded == "i love dogs but i hate cats!"
    assert result.depunctuated == "i love dogs but i hate cats"
    assert result.tokens == ("i", "love", "dogs", "but", "i", "hate", "cats")
    assert result.stems == ("i", "love", "dog", "but", "i", "hate", "cat")


@pytest.mark.parametrize(
    "token, expected",
    [
        ("running", "runn"),
        ("walked", "walk"),
        ("dogs", "dog"),
        ("boxes", "boxe"),
        ("quickly", "quick"),
        ("joy", "joy"),
        ("s", ""),
    ],
)
def test_stem_first_rule_wins(token: str, expected: str) -> None:
    assert stem_token(token) == expected


def test_stem_rule_order_is_fixed() -> None:
    assert [rule.suffix for rule in STEM_RULES] == ["ing", "ed", "s", "es", "ly"]


def test_stem_rule_strips_once() -> None:
    rule = StemRule("ing")
    assert rule.matches("singing")
    assert rule.apply("singing") == "sing"
    assert not rule.matches("sing ")


def test_punctuation_removal_is_unicode_aware() -> None:
    assert remove_punctuation("café, naïve!? don't_stop") == "café naïve dont_stop"


def test_case_folding_handles_non_ascii() -> None:
    assert normalize("ÉMOTION").folded == "émotion"


def test_tokenize_discards_empty_tokens() -> None:
    assert tokenize("  hello \t\n world  ") == ["hello", "world"]


@pytest.mark.parametrize("text", ["", "   ", "!!!", "...  ,,"])
def test_empty_after_normalization(text: str) -> None:
    result = normalize(text)
    assert result.tokens == ()
    assert result.stems == ()


@pytest.mark.parametrize(
    "text",
    ["a b c", "Running, jumped; played!", "tabs\tand\nnewlines", "ünïcödé wörds liked"],
)
def test_tokens_and_stems_align(text: str) -> None:
    result = normalize(text)
    assert len(result.tokens) == len(result.stems)


def test_misaligned_trace_is_rejected() -> None:
    with pytest.raises(ValueError):
        NormalizedText(original="a", folded="a", depunctuated="a", tokens=("a",), stems=())
