"""Projection of query results into a ReportView.

Pure functions only: everything here is computed from the fetched rows,
the distinct-year index and the requested year, with no I/O.
"""

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from yield_reports.reports.errors import BadRequest, InternalInconsistency
from yield_reports.reports.schemas import ChartSeries, ReportView, TableRow, YieldRecord

# Bar colours, reused cyclically when there are more crops than colours
PALETTE = [
    "rgba(75, 192, 192, 0.6)",
    "rgba(255, 159, 64, 0.6)",
    "rgba(153, 102, 255, 0.6)",
    "rgba(255, 205, 86, 0.6)",
    "rgba(54, 162, 235, 0.6)",
]
BORDER_COLOR = "rgba(54, 162, 235, 1)"
YIELD_DECIMALS = 3

# ASCII only: int() would also take "20_19" and non-Latin digits
YEAR_RE = re.compile(r"^[+-]?\d+$", re.ASCII)


def parse_year(raw: str) -> int:
    """Parse a year path segment.

    Raises:
        BadRequest: If the segment is not a plain integer.
    """
    text = str(raw).strip()
    if not YEAR_RE.match(text):
        raise BadRequest()
    return int(text)


def round_half_up(value: float, decimals: int = YIELD_DECIMALS) -> float:
    """Round the exact binary value of `value`, ties away from zero.

    Built-in round() rounds ties to even, so 2.0625 would become 2.062.
    """
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def assign_colors(count: int, palette: Sequence[str] = PALETTE) -> list[str]:
    """Return one colour per bar, wrapping around the palette."""
    if not palette:
        raise ValueError("Palette must contain at least one colour")
    return [palette[i % len(palette)] for i in range(count)]


def circular_neighbours(years: Sequence[int], year: int) -> tuple[int, int]:
    """Get (previous, next) years around `year`, wrapping at both ends.

    With a single known year both neighbours are the year itself.

    Raises:
        InternalInconsistency: If `year` is not in `years`.
    """
    try:
        idx = list(years).index(year)
    except ValueError:
        raise InternalInconsistency(year)

    last = len(years) - 1
    prev_year = years[idx - 1] if idx > 0 else years[last]
    next_year = years[idx + 1] if idx < last else years[0]
    return prev_year, next_year


def build_report_view(
    rows: Sequence[YieldRecord],
    all_years: Sequence[int],
    year: int,
) -> ReportView:
    """Build the year report from the year's rows and the distinct-year index.

    Args:
        rows: Rows for `year`, already ordered by crop.
        all_years: Distinct years in ascending order.
        year: The requested year.
    """
    table_rows = [
        TableRow(crop=r.crop, avg_yield=round_half_up(r.avg_yield))
        for r in rows
    ]
    chart = ChartSeries(
        labels=[r.crop for r in rows],
        values=[r.avg_yield for r in rows],
        colors=assign_colors(len(rows)),
    )
    prev_year, next_year = circular_neighbours(all_years, year)

    return ReportView(
        year=year,
        table_rows=table_rows,
        chart=chart,
        prev_year=prev_year,
        next_year=next_year,
    )


def chart_payload(view: ReportView) -> dict:
    """Chart.js bar-chart data for a report view."""
    return {
        "labels": view.chart.labels,
        "datasets": [
            {
                "label": f"Average Yield ({view.year})",
                "data": view.chart.values,
                "backgroundColor": view.chart.colors,
                "borderColor": BORDER_COLOR,
                "borderWidth": 1,
            }
        ],
    }
