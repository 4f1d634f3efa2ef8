#!/usr/bin/env python3
"""Build summary.db from raw yield observations.

Reads a CSV with `crop`, `year` and `yield` columns (one row per
observation), averages yield per (crop, year) and writes the result to the
yield_summary table, replacing any previous contents.

Usage:
    # Default target: yield_reports/summary.db (where the server looks)
    python scripts/build_summary_db.py --csv data/raw_yields.csv

    # Explicit target
    python scripts/build_summary_db.py --csv data/raw_yields.csv --db /tmp/summary.db
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from yield_reports.config import get_settings
from yield_reports.store.seed import build_from_csv


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Build the yield_summary table from raw observations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--csv",
        dest="csv_path",
        type=Path,
        required=True,
        help="Raw observations CSV (columns: crop, year, yield)",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="Target database (default: YIELD_REPORTS_DB_PATH or yield_reports/summary.db)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")

    db_path = args.db or get_settings().db_path
    try:
        count = build_from_csv(args.csv_path, db_path)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Wrote {count} rows to {db_path}")


if __name__ == "__main__":
    main()
