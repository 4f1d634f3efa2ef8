"""
Pydantic schemas for yield records and the per-request report view.
"""

from pydantic import BaseModel, Field


class YieldRecord(BaseModel):
    """One row of the yield_summary table."""
    crop: str = Field(..., description="Crop name")
    year: int = Field(..., description="Harvest year")
    avg_yield: float = Field(..., description="Average yield for the crop in that year")


class TableRow(BaseModel):
    """A display row of the year report table."""
    crop: str
    avg_yield: float = Field(..., description="Average yield rounded to 3 decimal places")

    @property
    def display_yield(self) -> str:
        """Yield formatted with exactly three decimals (e.g. 4.500)."""
        return f"{self.avg_yield:.3f}"


class ChartSeries(BaseModel):
    """Bar chart series for one year, one bar per crop."""
    labels: list[str] = Field(default_factory=list, description="Crop names in table order")
    values: list[float] = Field(default_factory=list, description="Unrounded average yields")
    colors: list[str] = Field(default_factory=list, description="One background colour per bar")


class ReportView(BaseModel):
    """Everything the year-summary template needs, built fresh per request."""
    year: int
    table_rows: list[TableRow] = Field(default_factory=list)
    chart: ChartSeries
    prev_year: int = Field(..., description="Previous year, wrapping to the last")
    next_year: int = Field(..., description="Next year, wrapping to the first")
