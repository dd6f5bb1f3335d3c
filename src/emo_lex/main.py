"""CLI entrypoint for analysing texts with the NRC emotion lexicon."""

from __future__ import annotations

import argparse
import json
import logging
from typing import List

from .config import RuntimeConfig
from .lexicon import load_lexicon
from .session import AnalysisResult, AnalysisSession

LOGGER = logging.getLogger("emo_lex.cli")


def _read_texts(path: str) -> List[str]:
    """Read one text per non-blank line."""
    with open(path, "r", encoding="utf-8") as handle:
        return [line.rstrip("\n") for line in handle if line.strip()]


def format_report(result: AnalysisResult, top_n: int) -> str:
    """Render a short plain-text report for one result."""
    lines = [f'Text: "{result.source_text}"']
    lines.append(f"Tokens: {' '.join(result.normalization.tokens)}")
    lines.append(f"Stems:  {' '.join(result.normalization.stems)}")
    lines.append(f"Emotion tags: {result.total_emotion_tags}")
    ranked = [item for item in result.ranked_by_percentage() if float(item[1]) > 0][:top_n]
    for emotion, percentage in ranked:
        lines.append(f"  {emotion:<13}{percentage:>7}%  ({result.emotion_counts[emotion]})")
    if not ranked:
        lines.append("  No emotion words found.")
    matched = [
        f"{detail.token}: {', '.join(detail.emotions)}"
        for detail in result.word_details
        if detail.matched
    ]
    if matched:
        lines.append("Matched words:")
        lines.extend(f"  {entry}" for entry in matched)
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser for emotion analysis.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(description="Analyse the emotions of short texts")
    parser.add_argument(
        "--text", action="append", dest="texts", help="Text to analyse (repeatable)"
    )
    parser.add_argument("--file", help="File with one text per line")
    parser.add_argument("--lexicon", default=None, help="Path to the NRC lexicon file")
    parser.add_argument(
        "--top", type=int, default=None, help="Number of ranked emotions to print"
    )
    parser.add_argument("--json", action="store_true", help="Emit results as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    return parser


def main(argv: List[str] | None = None) -> int:
    """Main CLI entrypoint.

    Loads the lexicon (falling back to the built-in seed set), analyses every
    text through one session and prints the results.

    Args:
        argv: Command line arguments, defaults to sys.argv if None.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    config = RuntimeConfig()
    top_n = args.top if args.top is not None else config.top_n
    if top_n <= 0:
        parser.error("--top must be a positive integer")

    texts: List[str] = list(args.texts or [])
    if args.file:
        try:
            texts.extend(_read_texts(args.file))
        except OSError as exc:
            parser.error(f"Cannot read --file {args.file}: {exc}")
    if not texts:
        parser.error("Provide --text or --file to analyse")

    loaded = load_lexicon(args.lexicon or config.lexicon_path)
    session = AnalysisSession(capacity=config.history_capacity)
    session.attach_lexicon(loaded.store)
    LOGGER.info("Lexicon ready: %s", loaded.store)

    results = []
    for text in texts:
        result = session.analyze(text)
        if result is not None:
            results.append(result)

    if args.json:
        payload = {
            "lexicon_words": len(loaded.store),
            "fallback_lexicon": loaded.fallback,
            "results": [result.to_dict() for result in results],
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0

    if loaded.fallback:
        print(f"Note: lexicon unavailable ({loaded.error}); using the built-in fallback set.\n")
    print("\n\n".join(format_report(result, top_n) for result in results))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
