from collections.abc import Callable
from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo


def now() -> datetime:
    return datetime.now(UTC)


def today_in(timezone: str) -> Callable[[], date]:
    """Return a clock giving the current calendar date in the given time zone."""
    tz = UTC if timezone == "UTC" else ZoneInfo(timezone)

    def today() -> date:
        return datetime.now(tz).date()

    return today
