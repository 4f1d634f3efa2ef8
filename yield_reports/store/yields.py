"""Queries against the yield_summary table.

Each query runs in FastAPI's threadpool so the event loop is free while
SQLite works; callers await them one after another.
"""

from fastapi.concurrency import run_in_threadpool

from yield_reports.reports.schemas import YieldRecord
from yield_reports.store.db import YieldStore

YEAR_ROWS_SQL = "SELECT crop, avg_yield FROM yield_summary WHERE year = ? ORDER BY crop"
DISTINCT_YEARS_SQL = "SELECT DISTINCT year FROM yield_summary ORDER BY year"
ALL_RECORDS_SQL = "SELECT crop, year, avg_yield FROM yield_summary ORDER BY year, crop"

# SQLite INTEGER is a signed 64-bit value; larger ints cannot be bound
SQLITE_MIN_INT = -(2 ** 63)
SQLITE_MAX_INT = 2 ** 63 - 1


async def fetch_year_rows(store: YieldStore, year: int) -> list[YieldRecord]:
    """Rows for one year, ordered by crop.

    A year outside SQLite's integer range cannot be stored, so it has no
    rows; the database must still be available.
    """
    if not SQLITE_MIN_INT <= year <= SQLITE_MAX_INT:
        await run_in_threadpool(store.get_connection)
        return []
    rows = await run_in_threadpool(store.execute, YEAR_ROWS_SQL, (year,))
    return [YieldRecord(crop=r["crop"], year=year, avg_yield=r["avg_yield"]) for r in rows]


async def fetch_distinct_years(store: YieldStore) -> list[int]:
    """All years present in the table, ascending."""
    rows = await run_in_threadpool(store.execute, DISTINCT_YEARS_SQL)
    return [r["year"] for r in rows]


async def fetch_all_records(store: YieldStore) -> list[YieldRecord]:
    """The whole table ordered by year, then crop."""
    rows = await run_in_threadpool(store.execute, ALL_RECORDS_SQL)
    return [YieldRecord(**r) for r in rows]
