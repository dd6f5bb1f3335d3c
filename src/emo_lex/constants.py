"""Project-wide constants for emo-lex.

This module defines the emotion vocabulary, the fallback lexicon and the
preprocessing tables shared by the analysis pipeline.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

"""Ten emotion categories in the NRC Emotion Lexicon, in display order."""
NRC_EMOTIONS: List[str] = [
    "anger",
    "anticipation",
    "disgust",
    "fear",
    "joy",
    "sadness",
    "surprise",
    "trust",
    "positive",
    "negative",
]

"""Seed lexicon substituted when the lexicon file cannot be read."""
FALLBACK_LEXICON: Dict[str, Dict[str, bool]] = {
    "love": {"joy": True, "trust": True, "positive": True},
    "hate": {"anger": True, "disgust": True, "negative": True},
    "happy": {"joy": True, "positive": True},
    "sad": {"sadness": True, "negative": True},
}

"""Suffixes stripped by the stemmer, in priority order (first match wins)."""
STEM_SUFFIXES: Tuple[str, ...] = ("ing", "ed", "s", "es", "ly")

# Number of past analyses kept by a session
HISTORY_CAPACITY = 5

# Default file name of the NRC word-level lexicon
NRC_LEXICON_FILE = "NRC-Emotion-Lexicon-Wordlevel-v0.92.txt"

# Column name constants for batch scoring
DEFAULT_TEXT_COL = "text"
DEFAULT_OUTPUT_COL = "emotions"
