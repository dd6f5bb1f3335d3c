"""Analysis orchestration and bounded result history."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Callable, Deque, Dict, List, Mapping, Optional, Tuple

from .aggregation import Aggregator, rank_by_count, rank_by_percentage
from .constants import HISTORY_CAPACITY
from .lexicon import LexiconStore
from .matching import EmotionMatcher, WordDetail
from .preprocessing import NormalizedText, TextNormalizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Complete, render-ready outcome of analysing one text.

    Attributes:
        source_text: Text as submitted.
        normalization: Trace of every preprocessing stage.
        word_details: Per-token emotion matches, aligned with the tokens.
        emotion_counts: Words matching each vocabulary emotion (read-only).
        emotion_percentages: Two-decimal share of all emotion tags (read-only).
        total_emotion_tags: Sum of ``emotion_counts``.
        created_at: When the analysis ran.
    """

    source_text: str
    normalization: NormalizedText
    word_details: Tuple[WordDetail, ...]
    emotion_counts: Mapping[str, int]
    emotion_percentages: Mapping[str, str]
    total_emotion_tags: int
    created_at: datetime

    def ranked_by_percentage(self) -> List[Tuple[str, str]]:
        return rank_by_percentage(self.emotion_percentages)

    def ranked_by_count(self) -> List[Tuple[str, int]]:
        return rank_by_count(self.emotion_counts)

    @property
    def dominant_emotion(self) -> Optional[str]:
        ranked = self.ranked_by_count()
        return ranked[0][0] if ranked else None

    @property
    def matched_words(self) -> List[str]:
        return [detail.token for detail in self.word_details if detail.matched]

    def to_dict(self) -> Dict[str, object]:
        """Convert to a JSON-serialisable dictionary."""
        norm = self.normalization
        return {
            "text": self.source_text,
            "preprocessing": {
                "folded": norm.folded,
                "depunctuated": norm.depunctuated,
                "tokens": list(norm.tokens),
                "stems": list(norm.stems),
            },
            "word_details": [detail.as_dict() for detail in self.word_details],
            "emotion_counts": dict(self.emotion_counts),
            "emotion_percentages": dict(self.emotion_percentages),
            "total_emotion_tags": self.total_emotion_tags,
            "created_at": self.created_at.isoformat(),
        }


class History:
    """Fixed-capacity, most-recent-first sequence of results."""

    def __init__(self, capacity: int = HISTORY_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("History capacity must be positive")
        self.capacity = capacity
        self._entries: Deque[AnalysisResult] = deque(maxlen=capacity)

    def push(self, result: AnalysisResult) -> None:
        """Insert at the front; the oldest entry drops off when full."""
        self._entries.appendleft(result)

    def entries(self) -> Tuple[AnalysisResult, ...]:
        return tuple(self._entries)

    def __getitem__(self, index: int) -> AnalysisResult:
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)


class AnalysisSession:
    """Run analyses against a loaded lexicon and remember recent results.

    Empty input and a missing lexicon are treated as no-ops: ``analyze``
    returns ``None`` and the history is left untouched.
    """

    def __init__(
        self,
        lexicon: Optional[LexiconStore] = None,
        *,
        capacity: int = HISTORY_CAPACITY,
        normalizer: Optional[TextNormalizer] = None,
        aggregator: Optional[Aggregator] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.lexicon = lexicon
        self.normalizer = normalizer or TextNormalizer()
        self.aggregator = aggregator or Aggregator()
        self._clock = clock
        self._history = History(capacity)

    @property
    def is_ready(self) -> bool:
        return self.lexicon is not None

    def attach_lexicon(self, lexicon: LexiconStore) -> None:
        """Make the session ready once the startup lexicon load has finished."""
        self.lexicon = lexicon
        if lexicon.is_fallback:
            logger.warning("Session is using the fallback lexicon (%d words)", len(lexicon))

    def analyze(
        self, text: str, store: Optional[LexiconStore] = None
    ) -> Optional[AnalysisResult]:
        lexicon = store if store is not None else self.lexicon
        if not text or not text.strip():
            logger.debug("Ignoring empty analysis request")
            return None
        if lexicon is None:
            logger.debug("Ignoring analysis request: no lexicon loaded yet")
            return None

        normalized = self.normalizer.normalize(text)
        word_details = EmotionMatcher(lexicon).match_tokens(normalized.tokens, normalized.stems)
        stats = self.aggregator.aggregate(word_details)
        result = AnalysisResult(
            source_text=text,
            normalization=normalized,
            word_details=word_details,
            emotion_counts=MappingProxyType(dict(stats.emotion_counts)),
            emotion_percentages=MappingProxyType(dict(stats.emotion_percentages)),
            total_emotion_tags=stats.total_emotion_tags,
            created_at=self._clock(),
        )
        self.record_history(result)
        logger.debug(
            "Analysed %d tokens, %d emotion tags", len(normalized.tokens), result.total_emotion_tags
        )
        return result

    def record_history(self, result: AnalysisResult) -> None:
        self._history.push(result)

    def history(self) -> Tuple[AnalysisResult, ...]:
        return self._history.entries()

    def load_from_history(self, index: int) -> AnalysisResult:
        """Return a past result without changing the history.

        Raises:
            IndexError: If ``index`` is outside the stored history.
        """
        if not 0 <= index < len(self._history):
            raise IndexError(f"No history entry at index {index}")
        return self._history[index]
