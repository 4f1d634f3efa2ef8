"""Request-level errors for report rendering.

Each error carries the HTTP status it maps to. The API layer turns any
ReportError into a plain-text response with that status and str(exc) as body.
"""


class ReportError(Exception):
    """Base class for errors that terminate a single report request."""
    status_code = 500


class BadRequest(ReportError):
    status_code = 400

    def __init__(self, message: str = "Invalid year parameter"):
        super().__init__(message)


class NotFound(ReportError):
    status_code = 404

    def __init__(self, year: int):
        self.year = year
        super().__init__(f"No data found for year {year}")


class StoreUnavailable(ReportError):
    """The backing database file is absent or could not be opened."""

    def __init__(self, message: str = "Database not available"):
        super().__init__(message)


class StoreError(ReportError):
    """A statement failed against an open database."""

    def __init__(self, message: str):
        self.detail = message
        super().__init__(f"Database error: {message}")


class TemplateError(ReportError):
    def __init__(self, message: str):
        self.detail = message
        super().__init__(f"Error loading template: {message}")


class InternalInconsistency(ReportError):
    """The requested year has rows but is missing from the distinct-year index."""

    def __init__(self, year: int):
        self.year = year
        super().__init__(f"Year {year} is missing from the year index")
