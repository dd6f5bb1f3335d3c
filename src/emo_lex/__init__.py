"""emo-lex: lexicon-based emotion analysis with the NRC Emotion Lexicon."""

from importlib.metadata import PackageNotFoundError, version

from .aggregation import Aggregator, EmotionStats, aggregate
from .config import RuntimeConfig
from .lexicon import LexiconLoadResult, LexiconStore, load_lexicon
from .matching import EmotionMatcher, WordDetail, match
from .preprocessing import NormalizedText, TextNormalizer, normalize
from .session import AnalysisResult, AnalysisSession, History

try:  # pragma: no cover
    __version__ = version("emo-lex")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "Aggregator",
    "AnalysisResult",
    "AnalysisSession",
    "EmotionMatcher",
    "EmotionStats",
    "History",
    "LexiconLoadResult",
    "LexiconStore",
    "NormalizedText",
    "RuntimeConfig",
    "TextNormalizer",
    "WordDetail",
    "aggregate",
    "load_lexicon",
    "match",
    "normalize",
]
