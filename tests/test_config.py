"""Settings from the environment."""

from pathlib import Path

import pytest

from yield_reports.config import PACKAGE_DIR, Settings


def test_defaults_resolve_inside_package(monkeypatch):
    for name in ("HOST", "PORT", "DB_PATH", "TEMPLATE_DIR", "PUBLIC_DIR", "REPORT_PREFIX", "LOG_LEVEL"):
        monkeypatch.delenv(f"YIELD_REPORTS_{name}", raising=False)

    settings = Settings.from_env()
    assert settings.port == 8080
    assert settings.db_path == PACKAGE_DIR / "summary.db"
    assert settings.template_dir == PACKAGE_DIR / "templates"
    assert settings.public_dir == PACKAGE_DIR / "public"
    assert settings.report_prefix == "/yields/year"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("YIELD_REPORTS_PORT", "9090")
    monkeypatch.setenv("YIELD_REPORTS_DB_PATH", str(tmp_path / "y.db"))
    monkeypatch.setenv("YIELD_REPORTS_REPORT_PREFIX", "/summary/")
    monkeypatch.setenv("YIELD_REPORTS_LOG_LEVEL", "debug")

    settings = Settings.from_env()
    assert settings.port == 9090
    assert settings.db_path == Path(tmp_path / "y.db")
    assert settings.report_prefix == "/summary"
    assert settings.log_level == "DEBUG"


def test_invalid_port(monkeypatch):
    monkeypatch.setenv("YIELD_REPORTS_PORT", "eighty")
    with pytest.raises(ValueError):
        Settings.from_env()
