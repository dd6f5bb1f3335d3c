from __future__ import annotations

from pathlib import Path

import pytest

from emo_lex.lexicon import LexiconStore

LOVE_HATE_LINES = [
    "love\tjoy\t1",
    "love\ttrust\t1",
    "love\tpositive\t1",
    "hate\tanger\t1",
    "hate\tdisgust\t1",
    "hate\tnegative\t1",
]


@pytest.fixture
def love_hate_text() -> str:
    return "\n".join(LOVE_HATE_LINES) + "\n"


@pytest.fixture
def love_hate_lexicon(love_hate_text: str) -> LexiconStore:
    return LexiconStore.from_text(love_hate_text)


@pytest.fixture
def lexicon_file(tmp_path: Path, love_hate_text: str) -> Path:
    path = tmp_path / "lexicon.txt"
    path.write_text(love_hate_text, encoding="utf-8")
    return path
