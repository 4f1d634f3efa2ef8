"""Process configuration.

All values are read from YIELD_REPORTS_* environment variables at startup.
Paths default to locations inside the package directory so the service
finds its database, templates and static assets relative to its own code.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

PACKAGE_DIR = Path(__file__).parent

ENV_PREFIX = "YIELD_REPORTS_"


def _env(name: str, default: str) -> str:
    return os.environ.get(f"{ENV_PREFIX}{name}", default)


@dataclass
class Settings:
    """Startup-time settings for the report server."""
    host: str = "0.0.0.0"
    port: int = 8080
    db_path: Path = field(default_factory=lambda: PACKAGE_DIR / "summary.db")
    template_dir: Path = field(default_factory=lambda: PACKAGE_DIR / "templates")
    public_dir: Path = field(default_factory=lambda: PACKAGE_DIR / "public")
    report_prefix: str = "/yields/year"  # Base path for prev/next links
    image_src: str = "/images/crops.svg"
    image_alt: str = "Crops comparison"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment, falling back to defaults.

        Raises:
            ValueError: If YIELD_REPORTS_PORT is not an integer.
        """
        defaults = cls()
        return cls(
            host=_env("HOST", defaults.host),
            port=int(_env("PORT", str(defaults.port))),
            db_path=Path(_env("DB_PATH", str(defaults.db_path))),
            template_dir=Path(_env("TEMPLATE_DIR", str(defaults.template_dir))),
            public_dir=Path(_env("PUBLIC_DIR", str(defaults.public_dir))),
            report_prefix=_env("REPORT_PREFIX", defaults.report_prefix).rstrip("/"),
            image_src=_env("IMAGE_SRC", defaults.image_src),
            image_alt=_env("IMAGE_ALT", defaults.image_alt),
            log_level=_env("LOG_LEVEL", defaults.log_level).upper(),
        )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
