"""Command-line interface for the keyword taxonomy classifier."""

import argparse
import logging
import sys
import time
from pathlib import Path

from .aggregate import aggregate
from .classifier import KeywordClassifier
from .config import Config
from .errors import ClassifierError
from .extract import find_documents
from .report import article_frame, corpus_frame, failures_frame, write_csv


def _classify_single(classifier: KeywordClassifier, args) -> None:
    classification = classifier.classify_file(args.input)
    summary = classifier.summarize(classification) if classifier.config.include_summary else None
    write_csv(article_frame(classification, summary), args.output)
    print(f"Article: {classification.article_id} ({classification.word_count:,} words, "
          f"{classification.total_matches:,} matches)")


def _classify_corpus(classifier: KeywordClassifier, args) -> None:
    paths = find_documents(args.input, classifier.config.supported_extensions)
    if not paths:
        print(f"Error: No supported documents found in {args.input}", file=sys.stderr)
        sys.exit(1)

    run = classifier.classify_corpus(paths, show_progress=not args.quiet)
    write_csv(corpus_frame(aggregate(run.classifications)), args.output)

    print(f"\nClassified: {run.succeeded:,} of {len(paths):,} documents")
    if run.failures:
        failures_path = args.output.with_name(f"{args.output.stem}_failures.csv")
        write_csv(failures_frame(run.failures), failures_path)
        print(f"Failed: {len(run.failures):,} (see {failures_path})")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Classify academic articles against a keyword taxonomy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Classify one article
  taxonomy-classify paper.pdf results.csv --taxonomy taxonomy.xlsx

  # Classify a folder of articles into a corpus table
  taxonomy-classify articles/ corpus.csv --taxonomy taxonomy.xlsx

  # Five categories per module in the summary
  taxonomy-classify paper.docx results.csv --top-n 5
"""
    )

    parser.add_argument(
        "input",
        type=Path,
        help="Article file (.pdf, .docx, .txt) or directory of articles"
    )
    parser.add_argument(
        "output",
        type=Path,
        help="Output CSV file"
    )
    parser.add_argument(
        "--taxonomy", "-t",
        type=Path,
        default=None,
        help="Taxonomy workbook, CSV or JSON (default: ./taxonomy.xlsx)"
    )
    parser.add_argument(
        "--top-n",
        type=int,
        default=3,
        help="Categories per module in the narrative summary (default: 3)"
    )
    parser.add_argument(
        "--no-summary",
        action="store_true",
        help="Do not append the narrative summary row"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress progress bar"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args()

    # Setup logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Validate input
    if not args.input.exists():
        print(f"Error: Input not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    config = Config(
        taxonomy_path=args.taxonomy,
        top_n=args.top_n,
        include_summary=not args.no_summary,
    )
    classifier = KeywordClassifier(config=config)

    print(f"Classifying: {args.input}")
    start = time.time()

    try:
        classifier.initialize()
        if args.input.is_dir():
            _classify_corpus(classifier, args)
        else:
            _classify_single(classifier, args)
    except ClassifierError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Completed in {time.time() - start:.1f}s")
    print(f"Output: {args.output}")


if __name__ == "__main__":
    main()
