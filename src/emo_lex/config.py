"""Configuration utilities for emo-lex."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from .constants import HISTORY_CAPACITY, NRC_LEXICON_FILE


@dataclass
class RuntimeConfig:
    """Runtime configuration for interactive and batch analysis."""

    environment: str = field(
        default_factory=lambda: os.getenv("EMO_LEX_ENV", "local")
    )
    lexicon_path: str = field(
        default_factory=lambda: os.getenv(
            "EMO_LEX_LEXICON_PATH", os.path.join("data", NRC_LEXICON_FILE)
        )
    )
    output_path: str = field(
        default_factory=lambda: os.getenv("EMO_LEX_OUTPUT_PATH", "output")
    )
    history_capacity: int = field(
        default_factory=lambda: _get_positive_int_env(
            "EMO_LEX_HISTORY_SIZE", HISTORY_CAPACITY
        )
    )
    top_n: int = field(
        default_factory=lambda: _get_positive_int_env("EMO_LEX_TOP_N", 3)
    )

    # Spark options for batch scoring
    shuffle_partitions: Optional[int] = field(
        default_factory=lambda: _get_positive_int_env("EMO_LEX_SHUFFLE_PARTITIONS", None)
    )
    master: Optional[str] = field(default_factory=lambda: os.getenv("EMO_LEX_MASTER"))
    app_name: str = field(
        default_factory=lambda: os.getenv("EMO_LEX_APP_NAME", "emoLexBatch")
    )


def _get_positive_int_env(name: str, default: Optional[int]) -> Optional[int]:
    """Parse a positive integer environment variable.

    Args:
        name: Environment variable name to parse.
        default: Value returned when the variable is missing, invalid or not
            positive.

    Returns:
        Parsed integer or ``default``.
    """
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default
