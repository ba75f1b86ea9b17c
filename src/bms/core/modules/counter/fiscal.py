"""Fiscal year labels. A fiscal year runs from April 1 to March 31."""

from collections.abc import Callable
from datetime import date

FISCAL_YEAR_START_MONTH = 4  # April, 1-indexed like date.month


def fiscal_year_label(day: date) -> str:
    """Return the label of the fiscal year containing `day`, e.g. "2024-25"."""
    start_year = day.year if day.month >= FISCAL_YEAR_START_MONTH else day.year - 1
    return f"{start_year}-{(start_year + 1) % 100:02d}"


def current_fiscal_year(clock: Callable[[], date]) -> str:
    """Evaluate the clock on every call so a running process crosses the April boundary correctly."""
    return fiscal_year_label(clock())
