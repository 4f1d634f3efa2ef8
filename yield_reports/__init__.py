"""Yield Reports - HTML reports over the crop yield summary table.

This service renders small read-only pages from the yield_summary table:
- Per-year report (table + bar chart + circular prev/next navigation)
- Cross-year comparison (full dataset embedded as JSON)
- Static home page
"""

__version__ = "0.1.0"
