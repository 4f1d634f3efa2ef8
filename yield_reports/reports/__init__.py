"""
Report rendering for the yield summary table.

This module provides:
- Schemas for yield records and the per-request ReportView
- The error taxonomy mapped to HTTP statuses
- Projection (table rows, chart series, circular year navigation)
- Placeholder templates and the ReportRenderer
"""

from yield_reports.reports.errors import (
    BadRequest,
    InternalInconsistency,
    NotFound,
    ReportError,
    StoreError,
    StoreUnavailable,
    TemplateError,
)
from yield_reports.reports.schemas import ChartSeries, ReportView, TableRow, YieldRecord

__all__ = [
    "BadRequest",
    "InternalInconsistency",
    "NotFound",
    "ReportError",
    "StoreError",
    "StoreUnavailable",
    "TemplateError",
    "ChartSeries",
    "ReportView",
    "TableRow",
    "YieldRecord",
]
