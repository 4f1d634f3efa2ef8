"""Shared fixtures: a small summary database and an app pointed at it."""

import json
import re
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from yield_reports.api.main import create_app
from yield_reports.config import PACKAGE_DIR, Settings
from yield_reports.reports.schemas import YieldRecord
from yield_reports.store.seed import write_summary

SAMPLE_RECORDS = [
    YieldRecord(crop="wheat", year=2018, avg_yield=3.14159),
    YieldRecord(crop="barley", year=2018, avg_yield=2.5),
    YieldRecord(crop="corn", year=2018, avg_yield=9.87654321),
    YieldRecord(crop="barley", year=2019, avg_yield=2.75),
    YieldRecord(crop="corn", year=2019, avg_yield=10.1234),
    YieldRecord(crop="wheat", year=2019, avg_yield=3.3333333),
    YieldRecord(crop="rice", year=2020, avg_yield=4.4444),
    YieldRecord(crop="corn", year=2020, avg_yield=11.25),
    YieldRecord(crop="wheat", year=2020, avg_yield=3.5),
]

SAMPLE_YEARS = [2018, 2019, 2020]


def records_for(year: int) -> list[YieldRecord]:
    """Sample rows for a year, ordered by crop like the report query."""
    return sorted((r for r in SAMPLE_RECORDS if r.year == year), key=lambda r: r.crop)


def extract_json(body: str, script_id: str):
    """Parse the JSON payload of <script id="..."> in a rendered page."""
    match = re.search(rf'<script id="{script_id}" type="application/json">(.*?)</script>', body, re.S)
    assert match, f"No #{script_id} script in page"
    return json.loads(match.group(1))


@pytest.fixture
def summary_db(tmp_path: Path) -> Path:
    path = tmp_path / "summary.db"
    write_summary(path, SAMPLE_RECORDS)
    return path


def make_settings(db_path: Path, **overrides) -> Settings:
    values = {
        "db_path": db_path,
        "template_dir": PACKAGE_DIR / "templates",
        "public_dir": PACKAGE_DIR / "public",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings(summary_db: Path) -> Settings:
    return make_settings(summary_db)


@pytest.fixture
def client(settings: Settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
