"""Period calculator - maps named periods and date ranges to time windows.

Every window is half-open ``[start, end)`` with both ends at wall-clock
midnight in the reporting zone. ``scale`` expresses the window length in
weeks so a weekly target can be compared against any window.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo

from models.utils import to_storage
from services.exceptions import InvalidDateFormatError, InvalidPeriodError

PERIODS = ("week", "month", "year")
DEFAULT_PERIOD = "week"
TREND_WEEKS = 8


@dataclass(frozen=True)
class PeriodBounds:
    """A half-open window in the reporting zone."""

    start: datetime
    end: datetime
    scale: float

    @property
    def start_utc(self) -> datetime:
        """``start`` in the naive-UTC form used for store queries."""
        return to_storage(self.start)

    @property
    def end_utc(self) -> datetime:
        return to_storage(self.end)


def period_bounds(period: str | None, now: datetime) -> PeriodBounds:
    """Window for ``week``, ``month`` or ``year`` containing ``now``.

    Args:
        period: Period name, case-insensitive. ``None`` means week.
        now: Aware datetime in the reporting zone.

    Raises:
        InvalidPeriodError: If the name is not recognized.
    """
    name = (period or DEFAULT_PERIOD).strip().lower()
    today = now.date()

    if name == "week":
        start = week_start(today)
        end = start + timedelta(days=7)
        return PeriodBounds(_midnight(start, now.tzinfo), _midnight(end, now.tzinfo), 1.0)
    elif name == "month":
        start = today.replace(day=1)
        end = (start + timedelta(days=32)).replace(day=1)
    elif name == "year":
        start = date(today.year, 1, 1)
        end = date(today.year + 1, 1, 1)
    else:
        raise InvalidPeriodError(period)

    scale = (end - start).days / 7.0
    return PeriodBounds(_midnight(start, now.tzinfo), _midnight(end, now.tzinfo), scale)


def date_range_bounds(start_date: str | date, end_date: str | date, zone: tzinfo) -> PeriodBounds:
    """Window covering the calendar dates ``start_date`` to ``end_date`` inclusive.

    The exclusive end is the midnight after ``end_date``, so a single-day
    range has a scale of 1/7.

    Raises:
        InvalidDateFormatError: If a date does not parse as YYYY-MM-DD or
            the range ends before it starts.
    """
    start = parse_date(start_date)
    end = parse_date(end_date)
    if end < start:
        raise InvalidDateFormatError(
            f"End date {end.isoformat()} is before start date {start.isoformat()}."
        )

    days = (end - start).days + 1
    return PeriodBounds(
        _midnight(start, zone),
        _midnight(end + timedelta(days=1), zone),
        days / 7.0,
    )


def parse_date(value: str | date) -> date:
    """Parse an ISO ``YYYY-MM-DD`` string; dates pass through unchanged."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        raise InvalidDateFormatError("Invalid date format. Use YYYY-MM-DD format.")


def week_start(day: date) -> date:
    """Monday on or before ``day``."""
    return day - timedelta(days=day.weekday())


def trend_week_starts(now: datetime, weeks: int = TREND_WEEKS) -> list[date]:
    """Monday dates of the ``weeks`` most recent weeks, oldest first.

    The last entry is the week containing ``now``.
    """
    current = week_start(now.date())
    return [current - timedelta(weeks=offset) for offset in range(weeks - 1, -1, -1)]


def _midnight(day: date, zone: tzinfo | None) -> datetime:
    return datetime.combine(day, time.min, tzinfo=zone)
