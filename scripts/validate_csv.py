"""Quick validation script for a meeting-records CSV.

Run with `python scripts/validate_csv.py <path-or-url> [--columns map.json]`
to check that the headers match the column map and every row normalizes.
"""

from __future__ import annotations

import argparse
import json
import logging

from src.config import DEFAULT_COLUMN_MAP, load_column_map
from src.data.grouping import group_by_project
from src.data.loader import load_rows_from_upload, load_rows_from_url
from src.data.parser import CsvLoadError
from src.data.quality import summarize_load
from src.data.records import RecordNormalizer


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("source", help="CSV file path or http(s) URL")
    parser.add_argument("--columns", help="JSON column map file", default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    column_map = load_column_map(args.columns) if args.columns else DEFAULT_COLUMN_MAP
    try:
        if args.source.startswith(("http://", "https://")):
            rows = load_rows_from_url(args.source)
        else:
            with open(args.source, "rb") as f:
                rows = load_rows_from_upload(f, name=args.source)
    except CsvLoadError as exc:
        raise SystemExit(f"Load failed: {exc}")

    records = RecordNormalizer(column_map).normalize_all(rows)
    summary = summarize_load(rows, records, column_map)
    print(json.dumps(summary, indent=2, ensure_ascii=False))

    for project, items in group_by_project(records).items():
        print(f"{project}: {len(items)} meetings, latest {items[0].date_label or '(no date)'}")

    if summary["missing_columns"]:
        raise SystemExit(f"Missing configured columns: {summary['missing_columns']}")
    print("CSV validation passed. Rows:", len(rows))


if __name__ == "__main__":
    main()
