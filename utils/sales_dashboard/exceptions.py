# utils/sales_dashboard/exceptions.py
"""Errors raised by the sales dashboard data layer."""

from typing import Optional


class SalesDashboardError(Exception):
    """Base class for dashboard errors."""


class SourceUnavailable(SalesDashboardError):
    """
    The spreadsheet could not be read, or a required table came back empty.

    Raised only at the fetch boundary. Row-level problems never surface here.
    """

    def __init__(self, message: str, sheet_range: Optional[str] = None):
        super().__init__(message)
        self.sheet_range = sheet_range

    def __str__(self) -> str:
        message = super().__str__()
        if self.sheet_range:
            return f"{message} ({self.sheet_range})"
        return message
