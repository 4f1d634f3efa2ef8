"""Yield Reports API - HTML reports over the yield summary table.

Serves read-only pages built from the yield_summary table:
- Year report with table, bar chart and circular prev/next navigation
- Cross-year comparison with the full dataset embedded as JSON
- Home page and static assets from the public directory
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from yield_reports import __version__
from yield_reports.config import Settings, get_settings
from yield_reports.reports.errors import ReportError
from yield_reports.reports.renderer import ReportRenderer
from yield_reports.reports.templates import TemplateLoader
from yield_reports.store.db import YieldStore
from yield_reports.api.routes import meta, reports

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings: Settings = app.state.settings
    logger.info(f"Yield Reports starting (db: {settings.db_path}, templates: {settings.template_dir})")
    if not app.state.store.is_available():
        logger.warning("Database not available; data pages will return 500 until it appears")
    yield
    # Shutdown
    app.state.store.close()
    logger.info("Shutting down Yield Reports")


async def report_error_handler(request: Request, exc: ReportError) -> PlainTextResponse:
    """Turn a ReportError into a plain-text response with its status."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc}")
    return PlainTextResponse(str(exc), status_code=exc.status_code)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application for the given settings (defaults from the environment)."""
    settings = settings or get_settings()
    logging.getLogger("yield_reports").setLevel(settings.log_level)

    app = FastAPI(
        title="Yield Reports",
        description="Read-only HTML reports of average crop yields per year.",
        version=__version__,
        lifespan=lifespan,
    )

    store = YieldStore(settings.db_path)
    app.state.settings = settings
    app.state.store = store
    app.state.renderer = ReportRenderer(
        store=store,
        loader=TemplateLoader(settings.template_dir),
        report_prefix=settings.report_prefix,
        image_src=settings.image_src,
        image_alt=settings.image_alt,
    )

    app.add_exception_handler(ReportError, report_error_handler)

    app.include_router(meta.router)
    app.include_router(reports.router)

    # Static assets last: the root mount catches every path no route matched
    if settings.public_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.public_dir), name="public")
    else:
        logger.warning(f"Public directory not found, static assets disabled: {settings.public_dir}")

    return app


app = create_app()


def run() -> None:
    """Start the server with uvicorn on the configured host and port."""
    import uvicorn

    settings = get_settings()
    logger.info(f"Server running at http://localhost:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
