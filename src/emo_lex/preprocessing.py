"""Text normalization: case folding, punctuation removal, tokenizing, stemming."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .constants import STEM_SUFFIXES

_PUNCT_RE = re.compile(r"[^\w\s]")


@dataclass(frozen=True)
class StemRule:
    """Strip a single suffix from tokens that end with it."""

    suffix: str

    def matches(self, token: str) -> bool:
        return token.endswith(self.suffix)

    def apply(self, token: str) -> str:
        return token[: len(token) - len(self.suffix)]


"""Stemming rules in priority order; the first matching rule is applied.

The order is not longest-match: ``s`` shadows ``es``.
"""
STEM_RULES: Tuple[StemRule, ...] = tuple(StemRule(suffix) for suffix in STEM_SUFFIXES)


@dataclass(frozen=True)
class NormalizedText:
    """Trace of every preprocessing stage for one input text.

    Attributes:
        original: Text as submitted.
        folded: Lowercased text.
        depunctuated: Folded text with punctuation removed.
        tokens: Whitespace-delimited tokens of the depunctuated text.
        stems: Stem of each token, aligned with ``tokens`` by index.
    """

    original: str
    folded: str
    depunctuated: str
    tokens: Tuple[str, ...]
    stems: Tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.tokens) != len(self.stems):
            raise ValueError(
                f"tokens and stems must align ({len(self.tokens)} != {len(self.stems)})"
            )


def fold_case(text: str) -> str:
    return text.lower()


def remove_punctuation(text: str) -> str:
    """Drop every character that is neither a word character nor whitespace."""
    return _PUNCT_RE.sub("", text)


def tokenize(text: str) -> List[str]:
    return text.split()


def stem_token(token: str, rules: Sequence[StemRule] = STEM_RULES) -> str:
    for rule in rules:
        if rule.matches(token):
            return rule.apply(token)
    return token


def stem_tokens(tokens: Iterable[str], rules: Sequence[StemRule] = STEM_RULES) -> List[str]:
    return [stem_token(token, rules) for token in tokens]


class TextNormalizer:
    """Run the fixed preprocessing pipeline over raw text."""

    def __init__(self, rules: Sequence[StemRule] = STEM_RULES) -> None:
        self.rules = tuple(rules)

    def normalize(self, text: str) -> NormalizedText:
        folded = fold_case(text)
        depunctuated = remove_punctuation(folded)
        tokens = tokenize(depunctuated)
        stems = stem_tokens(tokens, self.rules)
        return NormalizedText(
            original=text,
            folded=folded,
            depunctuated=depunctuated,
            tokens=tuple(tokens),
            stems=tuple(stems),
        )


def normalize(text: str) -> NormalizedText:
    """Normalize ``text`` with the default stemming rules."""
    return TextNormalizer().normalize(text)
