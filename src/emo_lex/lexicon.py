"""Loading and querying the NRC word-emotion association lexicon."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .constants import FALLBACK_LEXICON, NRC_EMOTIONS

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")
_VOCABULARY = frozenset(NRC_EMOTIONS)

PathLike = Union[str, "os.PathLike[str]"]


def _parse_flag(raw: str) -> bool:
    """Return True when the leading integer of ``raw`` equals 1."""
    match = _LEADING_INT_RE.match(raw)
    if match is None:
        return False
    return int(match.group(1)) == 1


def parse_lexicon(lines: Iterable[str]) -> Dict[str, Dict[str, bool]]:
    """Parse tab-separated ``word, emotion, flag`` records.

    Lines that do not split into exactly three fields are skipped, as are
    emotions outside the NRC vocabulary. Records for the same word are merged
    into one mapping and the later record wins on a word/emotion conflict.

    Args:
        lines: Raw lexicon lines, with or without trailing newlines.

    Returns:
        Nested dictionary ``{word: {emotion: flag}}``.
    """
    lexicon: Dict[str, Dict[str, bool]] = {}
    skipped = 0
    for line in lines:
        parts = line.strip().split("\t")
        if len(parts) != 3:
            skipped += 1
            continue
        word, emotion, value = parts
        if emotion not in _VOCABULARY:
            skipped += 1
            continue
        lexicon.setdefault(word, {})[emotion] = _parse_flag(value)
    if skipped:
        logger.debug("Skipped %d lexicon lines that were malformed or off-vocabulary", skipped)
    return lexicon


class LexiconStore:
    """Read-only word -> emotion flag table.

    Keys are matched exactly and case-sensitively; callers normalize case
    before querying.
    """

    def __init__(
        self,
        entries: Mapping[str, Mapping[str, bool]],
        *,
        source: Optional[str] = None,
        is_fallback: bool = False,
    ) -> None:
        self._entries: Dict[str, Dict[str, bool]] = {
            word: {
                emotion: bool(flag)
                for emotion, flag in flags.items()
                if emotion in _VOCABULARY
            }
            for word, flags in entries.items()
        }
        self._source = source
        self._is_fallback = is_fallback

    @property
    def source(self) -> Optional[str]:
        return self._source

    @property
    def is_fallback(self) -> bool:
        """True when the built-in seed set stands in for the lexicon file."""
        return self._is_fallback

    @classmethod
    def from_text(cls, raw: str, *, source: Optional[str] = None) -> "LexiconStore":
        return cls(parse_lexicon(raw.split("\n")), source=source)

    @classmethod
    def fallback(cls) -> "LexiconStore":
        return cls(FALLBACK_LEXICON, source=None, is_fallback=True)

    @classmethod
    def load(cls, source: PathLike) -> "LexiconStore":
        """Load a lexicon file, substituting the fallback seed set on failure."""
        return load_lexicon(source).store

    def lookup(self, word: str) -> Tuple[str, ...]:
        """Emotions flagged true for ``word`` in stored order, or ``()``."""
        flags = self._entries.get(word)
        if not flags:
            return ()
        return tuple(emotion for emotion, flag in flags.items() if flag)

    def flags(self, word: str) -> Dict[str, bool]:
        return dict(self._entries.get(word, {}))

    def words(self) -> List[str]:
        return list(self._entries)

    def as_dict(self) -> Dict[str, Dict[str, bool]]:
        """Plain-dict copy of the table, suitable for JSON or broadcasting."""
        return {word: dict(flags) for word, flags in self._entries.items()}

    def __contains__(self, word: object) -> bool:
        return word in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return (
            f"LexiconStore(words={len(self)}, source={self.source!r}, "
            f"is_fallback={self.is_fallback})"
        )


@dataclass(frozen=True)
class LexiconLoadResult:
    """Outcome of a lexicon load.

    Attributes:
        store: Ready-to-use lexicon, either the parsed file or the fallback set.
        fallback: True when the fallback seed set was substituted.
        error: Reason the primary source could not be read, if any.
    """

    store: LexiconStore
    fallback: bool
    error: Optional[str] = None


def load_lexicon(source: PathLike) -> LexiconLoadResult:
    """Read and parse the lexicon at ``source``.

    Any failure to read the file yields the fallback seed lexicon instead of
    an exception; both outcomes are ready to use.

    Args:
        source: Path to an NRC word-level lexicon file.

    Returns:
        LexiconLoadResult describing which path was taken.
    """
    path = os.fspath(source)
    try:
        with open(path, "r", encoding="utf-8") as handle:
            entries = parse_lexicon(handle)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Unable to load lexicon from %s (%s); using fallback lexicon", path, exc)
        return LexiconLoadResult(store=LexiconStore.fallback(), fallback=True, error=str(exc))

    logger.info("Loaded lexicon with %d words from %s", len(entries), path)
    return LexiconLoadResult(store=LexiconStore(entries, source=path), fallback=False)
