"""Batch emotion scoring of text columns with Spark."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Dict, List, Optional

from pyspark import keyword_only
from pyspark.ml import Transformer
from pyspark.ml.param import Param, Params, TypeConverters
from pyspark.ml.param.shared import HasInputCol, HasOutputCol
from pyspark.ml.util import DefaultParamsReadable, DefaultParamsWritable
from pyspark.sql import DataFrame, SparkSession
from pyspark.sql import functions as F
from pyspark.sql import types as T

from .aggregation import aggregate
from .config import RuntimeConfig
from .constants import DEFAULT_OUTPUT_COL, DEFAULT_TEXT_COL, NRC_EMOTIONS
from .lexicon import LexiconStore, load_lexicon
from .matching import EmotionMatcher
from .preprocessing import normalize

logger = logging.getLogger(__name__)

"""Struct produced for every scored row."""
SCORE_SCHEMA = T.StructType(
    [
        T.StructField("total_emotion_tags", T.IntegerType(), False),
        T.StructField("dominant_emotion", T.StringType(), True),
        T.StructField(
            "emotion_counts", T.MapType(T.StringType(), T.IntegerType()), False
        ),
        T.StructField(
            "emotion_percentages", T.MapType(T.StringType(), T.StringType()), False
        ),
    ]
)


def score_text(text: Optional[str], lexicon: LexiconStore) -> Dict[str, object]:
    """Run normalize -> match -> aggregate for one document.

    Null and blank documents score zero across the vocabulary rather than
    being dropped, so batch outputs keep one row per input row.

    Args:
        text: Document text, possibly None.
        lexicon: Lexicon to match against.

    Returns:
        Dictionary with total_emotion_tags, dominant_emotion, emotion_counts
        and emotion_percentages.
    """
    normalized = normalize(text or "")
    details = EmotionMatcher(lexicon).match_tokens(normalized.tokens, normalized.stems)
    stats = aggregate(details)
    return {
        "total_emotion_tags": stats.total_emotion_tags,
        "dominant_emotion": stats.dominant_emotion,
        "emotion_counts": stats.emotion_counts,
        "emotion_percentages": stats.emotion_percentages,
    }


class LexiconEmotionTransformer(
    Transformer,
    HasInputCol,
    HasOutputCol,
    DefaultParamsReadable,
    DefaultParamsWritable,
):
    """Append a struct column of lexicon emotion scores to a DataFrame.

    The lexicon is held as a JSON param so the transformer can be saved with
    a fitted pipeline, and is broadcast to executors at transform time.
    """

    lexiconJson = Param(
        Params._dummy(),
        "lexiconJson",
        "Serialized word -> emotion flag lexicon as JSON",
        typeConverter=TypeConverters.toString,
    )

    @keyword_only
    def __init__(
        self,
        *,
        inputCol: Optional[str] = None,
        outputCol: Optional[str] = None,
        lexiconJson: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._setDefault(
            inputCol=DEFAULT_TEXT_COL,
            outputCol=DEFAULT_OUTPUT_COL,
            lexiconJson="{}",
        )
        kwargs = self._input_kwargs
        self._set(**kwargs)

    def setLexicon(self, lexicon: LexiconStore) -> "LexiconEmotionTransformer":
        return self._set(lexiconJson=json.dumps(lexicon.as_dict()))

    def getLexiconMapping(self) -> Dict[str, Dict[str, bool]]:
        raw = self.getOrDefault(self.lexiconJson)
        return json.loads(raw) if raw else {}

    def setInputCol(self, value: str) -> "LexiconEmotionTransformer":
        return self._set(inputCol=value)

    def setOutputCol(self, value: str) -> "LexiconEmotionTransformer":
        return self._set(outputCol=value)

    def _transform(self, dataset: DataFrame) -> DataFrame:
        broadcast = dataset.sparkSession.sparkContext.broadcast(self.getLexiconMapping())
        # one LexiconStore per Python worker, rebuilt lazily from the broadcast
        cache: Dict[str, LexiconStore] = {}

        def compute_scores(text: Optional[str]):
            store = cache.get("store")
            if store is None:
                store = cache["store"] = LexiconStore(broadcast.value)
            scores = score_text(text, store)
            return tuple(scores[field.name] for field in SCORE_SCHEMA.fields)

        udf = F.udf(compute_scores, SCORE_SCHEMA)
        return dataset.withColumn(self.getOutputCol(), udf(F.col(self.getInputCol())))


def score_dataframe(
    df: DataFrame,
    lexicon: LexiconStore,
    input_col: str = DEFAULT_TEXT_COL,
    output_col: str = DEFAULT_OUTPUT_COL,
) -> DataFrame:
    """Score every row of ``input_col`` against ``lexicon``."""
    transformer = LexiconEmotionTransformer(inputCol=input_col, outputCol=output_col)
    transformer.setLexicon(lexicon)
    return transformer.transform(df)


def flatten_scores(df: DataFrame, output_col: str = DEFAULT_OUTPUT_COL) -> DataFrame:
    """Expand the score struct into ``count_<emotion>`` and ``pct_<emotion>`` columns."""
    result = df.withColumn(
        "total_emotion_tags", F.col(f"{output_col}.total_emotion_tags")
    ).withColumn("dominant_emotion", F.col(f"{output_col}.dominant_emotion"))
    for emotion in NRC_EMOTIONS:
        result = result.withColumn(
            f"count_{emotion}", F.col(f"{output_col}.emotion_counts")[emotion]
        ).withColumn(
            f"pct_{emotion}",
            F.col(f"{output_col}.emotion_percentages")[emotion].cast("double"),
        )
    return result.drop(output_col)


def build_spark_session(config: RuntimeConfig) -> SparkSession:
    """Create or reuse the SparkSession used for batch scoring.

    Local runs default to ``local[*]``. An explicit master wins over the
    environment, and ``shuffle_partitions`` caps the partitions of the
    write stage for small corpora.

    Args:
        config: Runtime configuration with Spark options.

    Returns:
        Active SparkSession.
    """
    master = config.master or ("local[*]" if config.environment == "local" else None)
    builder = SparkSession.builder.appName(config.app_name)
    if master:
        builder = builder.master(master)
    if config.shuffle_partitions:
        builder = builder.config(
            "spark.sql.shuffle.partitions", str(config.shuffle_partitions)
        )
    return builder.getOrCreate()


def read_documents(
    spark: SparkSession, path: str, *, csv: bool = False, text_col: str = DEFAULT_TEXT_COL
) -> DataFrame:
    """Load documents as a single ``text`` column.

    Plain text files yield one document per line; CSV files need a header row
    containing ``text_col``.
    """
    if csv:
        df = (
            spark.read.option("header", True)
            .option("multiLine", True)
            .option("escape", '"')
            .csv(path)
        )
        if text_col not in df.columns:
            raise ValueError(f"Column '{text_col}' not found in {path}")
        return df.withColumnRenamed(text_col, DEFAULT_TEXT_COL)
    return spark.read.text(path).withColumnRenamed("value", DEFAULT_TEXT_COL)


def build_cli_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser for batch scoring.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(description="Score a corpus with the NRC emotion lexicon")
    parser.add_argument("--input", required=True, help="Text file (one document per line) or CSV")
    parser.add_argument("--output", default=None, help="Directory for JSON lines output")
    parser.add_argument("--lexicon", default=None, help="Path to the NRC lexicon file")
    parser.add_argument("--csv", action="store_true", help="Treat --input as CSV with a header")
    parser.add_argument(
        "--text-col", default=DEFAULT_TEXT_COL, help="CSV column holding the documents"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    return parser


def main(argv: List[str] | None = None) -> None:
    """CLI entrypoint for batch scoring.

    Args:
        argv: Command line arguments, defaults to sys.argv if None.
    """
    parser = build_cli_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    config = RuntimeConfig()
    loaded = load_lexicon(args.lexicon or config.lexicon_path)
    output_path = args.output or f"{config.output_path}/scores"

    spark = build_spark_session(config)
    try:
        documents = read_documents(spark, args.input, csv=args.csv, text_col=args.text_col)
        scored = flatten_scores(score_dataframe(documents, loaded.store))
        scored.write.mode("overwrite").json(output_path)
        logger.info("Wrote emotion scores to %s", output_path)
    finally:
        spark.stop()

    summary = {
        "input": args.input,
        "output": output_path,
        "lexicon_words": len(loaded.store),
        "fallback_lexicon": loaded.fallback,
    }
    print(json.dumps(summary, indent=2))


if __name__ == "__main__":  # pragma: no cover
    main()
