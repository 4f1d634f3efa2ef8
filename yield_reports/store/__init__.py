"""Storage for the yield summary table.

- db: lazily opened shared SQLite handle (YieldStore)
- yields: async queries used by the report renderer
- seed: builds the summary table from raw observations
"""

from yield_reports.store.db import YieldStore

__all__ = ["YieldStore"]
