"""
Command-line entry point.

Usage:
  python -m report_analyzer --documents-file reports.json --output-dir charts
  python -m report_analyzer --document "Q1 2024=https://example.org/q1.pdf" --table-out table.csv
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .batch import ReportBatchRunner
from .charts import plot_ranked, plot_top_words
from .config import Settings
from .errors import AnalysisError
from .models import BatchTable, ChartRow
from .observability import setup_logging
from .views import keyword_aggregate, top_words, word_trend

logger = logging.getLogger(__name__)


def parse_document_args(values: List[str]) -> Dict[str, str]:
    documents: Dict[str, str] = {}
    for value in values:
        doc_id, sep, ref = value.partition("=")
        if not sep or not doc_id.strip() or not ref.strip():
            raise argparse.ArgumentTypeError(f"Expected ID=REFERENCE, got {value!r}")
        documents[doc_id.strip()] = ref.strip()
    return documents


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Word-frequency analysis of PDF interim reports")
    parser.add_argument("--documents-file", type=Path, help="JSON object mapping document id to URL or path")
    parser.add_argument("--document", action="append", default=[], metavar="ID=REF",
                        help="Add a document (repeatable, keeps order)")
    parser.add_argument("--output-dir", type=Path, help="Directory for chart PNGs")
    parser.add_argument("--table-out", type=Path, help="Write the word count table as CSV")
    parser.add_argument("--width", type=int, help="Segment width in characters")
    parser.add_argument("--workers", type=int, help="Process documents in parallel")
    parser.add_argument("--skip-failures", action="store_true",
                        help="Skip documents that fail instead of aborting")
    parser.add_argument("--no-charts", action="store_true", help="Do not render charts")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    updates = {}
    if args.documents_file:
        updates["documents_file"] = args.documents_file
    if args.document:
        updates["documents"] = {**settings.documents, **parse_document_args(args.document)}
    if args.output_dir:
        updates["output_dir"] = args.output_dir
    if args.width:
        updates["segment_width"] = args.width
    if args.workers:
        updates["max_workers"] = args.workers
    if args.skip_failures:
        updates["failure_policy"] = "skip"
    if args.verbose:
        updates["log_level"] = "DEBUG"
    return settings.model_copy(update=updates)


def print_view(title: str, rows: List[ChartRow]) -> None:
    print(f"{title}:")
    for row in rows:
        marker = " *" if row.highlight else ""
        print(f"  {row.document_id}: {row.label} ({row.value:.4f}){marker}")


def render(table: BatchTable, settings: Settings, charts: bool = True) -> None:
    views = {
        "top_words": top_words(
            table,
            top_n=settings.top_n,
            skip_words=settings.skip_words,
            month_names=settings.month_names,
        ),
        "keyword_aggregate": keyword_aggregate(table, settings.keywords),
        "word_trend": word_trend(table, settings.trend_word),
    }

    print_view("Most common words", views["top_words"])
    print_view(f"Qualifier words ({', '.join(settings.keywords)})", views["keyword_aggregate"])
    print_view(f"Use of '{settings.trend_word}'", views["word_trend"])

    if not charts:
        return
    for name, rows in views.items():
        if not rows:
            logger.warning(f"No data for {name}; chart not rendered")
            continue
        path = settings.output_dir / f"{name}.png"
        if name == "top_words":
            plot_top_words(rows, path)
        elif name == "keyword_aggregate":
            plot_ranked(rows, f"Qualifier words: {', '.join(settings.keywords)}",
                        "Share of all words", path)
        else:
            plot_ranked(rows, f"Use of '{settings.trend_word}'", "Share of all words", path)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = apply_overrides(Settings(), args)
    setup_logging(settings.log_level, settings.log_format)

    try:
        documents = settings.load_documents()
    except (OSError, ValueError) as e:
        print(f"Invalid document configuration: {e}", file=sys.stderr)
        return 2
    if not documents:
        print("No documents configured; use --document or --documents-file", file=sys.stderr)
        return 2

    runner = ReportBatchRunner(settings)
    try:
        table = runner.run(documents)
    except AnalysisError as e:
        print(f"Analysis failed for {e.document_id or 'unknown document'} at stage '{e.stage}': {e.message}",
              file=sys.stderr)
        return 1

    if args.table_out:
        table.to_csv(args.table_out)
        print(f"Wrote {len(table)} rows to {args.table_out}")

    render(table, settings, charts=not args.no_charts)
    return 0


if __name__ == "__main__":
    sys.exit(main())
