"""Aggregate per-word emotion matches into counts, percentages and rankings."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .constants import NRC_EMOTIONS
from .matching import WordDetail

ZERO_PERCENT = "0.00"
_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class EmotionStats:
    """Emotion totals for one analysed text.

    Attributes:
        emotion_counts: Number of words matching each vocabulary emotion.
        emotion_percentages: Share of all emotion tags per emotion, as a
            two-decimal string.
        total_emotion_tags: Sum of all counts; can exceed the token count
            because one word may carry several emotions.
    """

    emotion_counts: Dict[str, int]
    emotion_percentages: Dict[str, str]
    total_emotion_tags: int

    def ranked_by_percentage(self) -> List[Tuple[str, str]]:
        return rank_by_percentage(self.emotion_percentages)

    def ranked_by_count(self) -> List[Tuple[str, int]]:
        return rank_by_count(self.emotion_counts)

    @property
    def dominant_emotion(self) -> Optional[str]:
        ranked = self.ranked_by_count()
        return ranked[0][0] if ranked else None


def count_emotions(
    word_details: Iterable[WordDetail], vocabulary: Sequence[str] = NRC_EMOTIONS
) -> Dict[str, int]:
    counts = {emotion: 0 for emotion in vocabulary}
    for detail in word_details:
        for emotion in detail.emotions:
            if emotion in counts:
                counts[emotion] += 1
    return counts


def format_percentage(value: float) -> str:
    """Two-decimal string with ties rounded away from zero.

    ``Decimal(value)`` is the exact binary value of the float, so 3.125
    becomes "3.13" rather than the round-half-even "3.12".
    """
    return str(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))


def compute_percentages(counts: Mapping[str, int]) -> Dict[str, str]:
    """Format each count as a percentage of the total, rounded independently.

    The results are not adjusted to sum to exactly 100.00.
    """
    total = sum(counts.values())
    if total == 0:
        return {emotion: ZERO_PERCENT for emotion in counts}
    return {emotion: format_percentage(count / total * 100) for emotion, count in counts.items()}


def aggregate(
    word_details: Iterable[WordDetail], vocabulary: Sequence[str] = NRC_EMOTIONS
) -> EmotionStats:
    counts = count_emotions(word_details, vocabulary)
    return EmotionStats(
        emotion_counts=counts,
        emotion_percentages=compute_percentages(counts),
        total_emotion_tags=sum(counts.values()),
    )


def rank_by_percentage(percentages: Mapping[str, str]) -> List[Tuple[str, str]]:
    """Emotions by descending percentage; ties keep vocabulary order."""
    return sorted(percentages.items(), key=lambda kv: float(kv[1]), reverse=True)


def rank_by_count(counts: Mapping[str, int]) -> List[Tuple[str, int]]:
    """Emotions with a non-zero count, by descending count."""
    nonzero = [(emotion, count) for emotion, count in counts.items() if count > 0]
    return sorted(nonzero, key=lambda kv: kv[1], reverse=True)


class Aggregator:
    """Reduce word details over a fixed emotion vocabulary."""

    def __init__(self, vocabulary: Sequence[str] = NRC_EMOTIONS) -> None:
        self.vocabulary = list(vocabulary)

    def aggregate(self, word_details: Iterable[WordDetail]) -> EmotionStats:
        return aggregate(word_details, self.vocabulary)
