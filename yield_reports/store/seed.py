"""Build the yield_summary table from raw yield observations.

Raw input is a CSV with at least `crop`, `year` and `yield` columns, one
row per observation (field, plot, survey...). The summary table holds the
mean yield per (crop, year).
"""

import csv
import logging
import sqlite3
from collections import defaultdict
from pathlib import Path
from typing import Iterable, Mapping

from yield_reports.reports.schemas import YieldRecord

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE yield_summary (
    crop TEXT NOT NULL,
    year INTEGER NOT NULL,
    avg_yield REAL NOT NULL,
    PRIMARY KEY (crop, year)
);
"""

REQUIRED_COLUMNS = ("crop", "year", "yield")


def summarize(observations: Iterable[Mapping[str, str]]) -> list[YieldRecord]:
    """Average raw observations per (crop, year).

    Rows with a blank crop or an unparseable year/yield are skipped.

    Returns:
        Records ordered by year, then crop.
    """
    totals: dict[tuple[str, int], list[float]] = defaultdict(list)
    skipped = 0
    for obs in observations:
        crop = (obs.get("crop") or "").strip()
        try:
            year = int(str(obs.get("year", "")).strip())
            value = float(str(obs.get("yield", "")).strip())
        except ValueError:
            skipped += 1
            continue
        if not crop:
            skipped += 1
            continue
        totals[(crop, year)].append(value)

    if skipped:
        logger.warning(f"Skipped {skipped} malformed observations")

    return [
        YieldRecord(crop=crop, year=year, avg_yield=sum(values) / len(values))
        for (crop, year), values in sorted(totals.items(), key=lambda kv: (kv[0][1], kv[0][0]))
    ]


def write_summary(db_path: Path, records: Iterable[YieldRecord]) -> int:
    """Create (or replace) the yield_summary table and fill it.

    Returns:
        Number of rows written.
    """
    rows = [(r.crop, r.year, r.avg_yield) for r in records]
    conn = sqlite3.connect(str(db_path))
    try:
        conn.execute("DROP TABLE IF EXISTS yield_summary")
        conn.executescript(SCHEMA_SQL)
        conn.executemany(
            "INSERT INTO yield_summary (crop, year, avg_yield) VALUES (?, ?, ?)",
            rows,
        )
        conn.commit()
    finally:
        conn.close()

    logger.info(f"Wrote {len(rows)} summary rows to {db_path}")
    return len(rows)


def build_from_csv(csv_path: Path, db_path: Path) -> int:
    """Summarize a raw CSV file into the database at `db_path`.

    Raises:
        ValueError: If the CSV lacks a required column.
    """
    with open(csv_path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(f"{csv_path} is missing columns: {missing}")
        records = summarize(reader)
    return write_summary(db_path, records)
