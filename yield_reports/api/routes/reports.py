"""HTML report routes.

Endpoints:
    GET /                      Home page
    GET /yields/year/{year}    Year report (table, chart, prev/next links)
    GET /summary/{year}        Same report under its older path
    GET /yields/compare        Cross-year comparison with the full dataset
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from yield_reports.reports.projection import parse_year
from yield_reports.reports.renderer import ReportRenderer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reports"])


def get_renderer(request: Request) -> ReportRenderer:
    return request.app.state.renderer


@router.get("/", response_class=HTMLResponse)
async def home(request: Request):
    """Serve the home page."""
    renderer = get_renderer(request)
    return HTMLResponse(await renderer.render_home())


@router.get("/yields/compare", response_class=HTMLResponse)
async def compare_years(request: Request):
    """Render the comparison page with every (crop, year) row embedded as JSON."""
    renderer = get_renderer(request)
    return HTMLResponse(await renderer.render_comparison())


@router.get("/yields/year/{year}", response_class=HTMLResponse)
@router.get("/summary/{year}", response_class=HTMLResponse)
async def year_summary(year: str, request: Request):
    """Render the report for a single year.

    The path segment is parsed here rather than by FastAPI so that a
    non-integer year yields a plain-text 400 like every other report error.
    """
    renderer = get_renderer(request)
    return HTMLResponse(await renderer.render_year_summary(parse_year(year)))
