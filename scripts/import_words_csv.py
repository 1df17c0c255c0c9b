"""
Convert a CSV word list into the JSON corpus used by the API.

Usage examples:

  python scripts/import_words_csv.py --csv spanish_words.csv

  python scripts/import_words_csv.py --csv export.csv --output data/words.json

Headers are matched case-insensitively against common aliases
("spanish"/"word" for the source text, "english"/"translation" for the
target text, "category"/"topic" for grouping).
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parent.parent))

from vocab_scheduler.config import settings
from vocab_scheduler.services.corpus import read_csv, write_corpus
from vocab_scheduler.utils.exceptions import CorpusError


def main() -> None:
    parser = argparse.ArgumentParser(description="Convert a CSV word list to JSON")
    parser.add_argument("--csv", required=True, help="Path to the CSV word list")
    parser.add_argument(
        "--output",
        default=str(settings.CORPUS_PATH),
        help=f"Destination JSON file (default: {settings.CORPUS_PATH})",
    )
    args = parser.parse_args()

    csv_path = Path(args.csv)
    if not csv_path.exists():
        raise SystemExit(f"CSV file not found: {csv_path}")

    try:
        report = read_csv(csv_path)
    except CorpusError as exc:
        details = f" {exc.details}" if exc.details else ""
        raise SystemExit(f"Conversion failed: {exc.message}{details}")

    print("Detected columns:")
    for name, column in report.columns.items():
        print(f"  {name}: {column or '(not found)'}")

    output_path = Path(args.output)
    write_corpus(report.items, output_path)

    print(f"\nConverted {len(report.items)} words from {report.rows_read} rows to {output_path}")
    if report.rows_skipped:
        print(f"Skipped {report.rows_skipped} rows with missing source or target text")

    print("\nWords per category:")
    for category, count in report.category_counts().items():
        print(f"  {category}: {count}")


if __name__ == "__main__":
    main()
