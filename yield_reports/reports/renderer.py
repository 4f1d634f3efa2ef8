"""Report renderer: year summary, cross-year comparison and home page.

The year summary runs the two dependent queries, projects the results into
a ReportView and fills the summary template:

    rows = fetch_year_rows(year)        -> NotFound if empty
    years = fetch_distinct_years()
    view = build_report_view(rows, years, year)
    html = summary.html with {{...}} placeholders substituted
"""

import html
import logging

from yield_reports.reports.errors import NotFound
from yield_reports.reports.projection import build_report_view, chart_payload
from yield_reports.reports.schemas import ReportView
from yield_reports.reports.templates import (
    COMPARE_TEMPLATE,
    HOME_TEMPLATE,
    SUMMARY_TEMPLATE,
    TemplateLoader,
    json_for_html,
)
from yield_reports.store import yields
from yield_reports.store.db import YieldStore

logger = logging.getLogger(__name__)

TABLE_HEADER = "<tr><th>Crop</th><th>Average Yield</th></tr>"
CHART_TYPE = "bar"
SITE_TITLE = "Crop Yield Reports"


class ReportRenderer:
    """Turns requests into finished HTML documents."""

    def __init__(
        self,
        store: YieldStore,
        loader: TemplateLoader,
        report_prefix: str = "/yields/year",
        image_src: str = "/images/crops.svg",
        image_alt: str = "Crops comparison",
    ):
        self.store = store
        self.loader = loader
        self.report_prefix = report_prefix.rstrip("/")
        self.image_src = image_src
        self.image_alt = image_alt

    async def build_year_view(self, year: int) -> ReportView:
        """Query and project the report for one year.

        Raises:
            NotFound: If the table has no rows for `year`.
        """
        rows = await yields.fetch_year_rows(self.store, year)
        if not rows:
            raise NotFound(year)
        all_years = await yields.fetch_distinct_years(self.store)
        return build_report_view(rows, all_years, year)

    def table_rows_html(self, view: ReportView) -> str:
        return "".join(
            f"<tr><td>{html.escape(row.crop)}</td><td>{row.display_yield}</td></tr>"
            for row in view.table_rows
        )

    def nav_links_html(self, view: ReportView) -> str:
        prefix = self.report_prefix
        return (
            '\n<nav style="margin-top:1rem;text-align:center;">\n'
            f'  <a href="{prefix}/{view.prev_year}"> Previous ({view.prev_year})</a> |\n'
            f'  <a href="{prefix}/{view.next_year}">Next ({view.next_year}) </a>\n'
            "</nav>\n"
        )

    async def render_year_summary(self, year: int) -> str:
        view = await self.build_year_view(year)
        values = {
            "TITLE": f"Crop Yields for {year}",
            "DESCRIPTION": f"Average crop yields for the year {year}.",
            "IMG_SRC": html.escape(self.image_src),
            "IMG_ALT": html.escape(self.image_alt),
            "TABLE_HEADER": TABLE_HEADER,
            "TABLE_ROWS": self.table_rows_html(view),
            "CHART_TYPE": CHART_TYPE,
            "CHART_CAPTION": f"Average crop yields in {year}",
            "CHART_JSON": json_for_html(chart_payload(view)),
            "NAV_LINKS": self.nav_links_html(view),
        }
        return await self.loader.render(SUMMARY_TEMPLATE, values)

    async def render_comparison(self) -> str:
        """Comparison page with every (crop, year) row embedded as JSON."""
        records = await yields.fetch_all_records(self.store)
        data = [r.model_dump() for r in records]
        return await self.loader.render(COMPARE_TEMPLATE, {"CHART_DATA": json_for_html(data)})

    async def render_home(self) -> str:
        return await self.loader.render(HOME_TEMPLATE, {"TITLE": SITE_TITLE})
