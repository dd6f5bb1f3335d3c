"""Token-to-emotion matching with stem fallback."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from .constants import NRC_EMOTIONS
from .lexicon import LexiconStore

_VOCABULARY = frozenset(NRC_EMOTIONS)


@dataclass(frozen=True)
class WordDetail:
    """Emotions attributed to a single token.

    Attributes:
        token: Token as produced by the normalizer.
        stem: Stem of the token.
        emotions: Matched emotions in discovery order, token matches first.
    """

    token: str
    stem: str
    emotions: Tuple[str, ...]

    @property
    def matched(self) -> bool:
        return bool(self.emotions)

    def as_dict(self) -> Dict[str, object]:
        return {"token": self.token, "stem": self.stem, "emotions": list(self.emotions)}


class EmotionMatcher:
    """Look up a token, then its stem, and merge the emotions found."""

    def __init__(self, lexicon: LexiconStore) -> None:
        self.lexicon = lexicon

    def _emotions_for(self, word: str) -> Tuple[str, ...]:
        return tuple(e for e in self.lexicon.lookup(word) if e in _VOCABULARY)

    def match(self, token: str, stem: str) -> Tuple[str, ...]:
        found = self._emotions_for(token)
        stem_found = self._emotions_for(stem) if stem != token else ()
        # dict keeps first-seen order while dropping duplicates
        return tuple(dict.fromkeys(found + stem_found))

    def detail(self, token: str, stem: str) -> WordDetail:
        return WordDetail(token=token, stem=stem, emotions=self.match(token, stem))

    def match_tokens(
        self, tokens: Sequence[str], stems: Sequence[str]
    ) -> Tuple[WordDetail, ...]:
        if len(tokens) != len(stems):
            raise ValueError("tokens and stems must have the same length")
        return tuple(self.detail(token, stem) for token, stem in zip(tokens, stems))


def match(token: str, stem: str, lexicon: LexiconStore) -> Tuple[str, ...]:
    """Emotions for ``token`` with a fallback lookup on ``stem``."""
    return EmotionMatcher(lexicon).match(token, stem)


def match_tokens(
    tokens: Sequence[str], stems: Sequence[str], lexicon: LexiconStore
) -> Tuple[WordDetail, ...]:
    return EmotionMatcher(lexicon).match_tokens(tokens, stems)
