#!/usr/bin/env python3
"""
Run the machine comparison on a local workbook.
Run with: python scripts/compare_workbook.py path/to/prices.xlsx [--output out.json] [--share]
"""
import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from backend.db.deps import get_db_path, share_connection
from backend.db.share_store import ShareStoreError, build_share_url, save_comparison
from comparison import build_views
from ingestion import IngestionMetrics
from ingestion.excel_loader import WorkbookError, load_machines


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Group comparable injection molding machines from a price workbook."
    )
    parser.add_argument('workbook', type=Path, help="Excel file containing a 'Data' sheet")
    parser.add_argument(
        '--output', type=Path, default=None,
        help='Optional JSON file receiving both comparison views'
    )
    parser.add_argument(
        '--share', action='store_true',
        help='Persist the representative view to DuckDB and print its share link'
    )
    parser.add_argument(
        '--origin', default='http://localhost:8000',
        help='Origin used to build the share link (default: http://localhost:8000)'
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    metrics = IngestionMetrics()

    try:
        machines = load_machines(args.workbook.expanduser(), metrics)
    except WorkbookError as exc:
        print(f"Error processing file: {exc}", file=sys.stderr)
        return 1

    views = build_views(machines, metrics)
    for label, result in (("Representative", views.representative), ("Entire", views.entire)):
        print(f"{label}: {len(result.hydraulic)} hydraulic groups, {len(result.electric)} electric groups")
    print(f"Rows read: {metrics.rows_read} (blank skipped: {metrics.blank_rows_skipped})")
    for key, value in sorted(metrics.extra.items()):
        print(f"  {key}: {value}")

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(views.model_dump_json(indent=2), encoding="utf-8")
        print(f"Wrote {args.output}")

    if args.share:
        try:
            with share_connection() as connection:
                share_id = save_comparison(connection, views.representative)
        except ShareStoreError as exc:
            print(f"Failed to generate share link: {exc}", file=sys.stderr)
            return 0
        print(f"Saved to {get_db_path()}")
        print(f"Share link: {build_share_url(args.origin, share_id)}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
