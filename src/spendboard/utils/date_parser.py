"""Date parsing and period utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIOD_TYPES = ("month", "quarter", "year", "all")
COMPARISON_TYPES = ("month-prev", "month-next", "quarter-prev", "quarter-next")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "15/01/2024", "January 15, 2024")
    and the relative words "today", "yesterday", "tomorrow". Day-first is
    assumed for ambiguous numeric dates, matching French spreadsheets.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        # ISO dates are unambiguous; everything else is read day-first
        if len(date_str) == 10 and date_str[4] == "-":
            return date.fromisoformat(date_str)
        dt = date_parser.parse(date_str, dayfirst=True)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}") from e


def month_start(day: date) -> date:
    """Return the first day of the month containing day."""
    return day.replace(day=1)


def month_end(day: date) -> date:
    """Return the last day of the month containing day."""
    return month_start(day) + relativedelta(months=1) - timedelta(days=1)


def quarter_start(day: date) -> date:
    """Return the first day of the quarter containing day."""
    return date(day.year, ((day.month - 1) // 3) * 3 + 1, 1)


def period_start(period: str, today: Optional[date] = None) -> Optional[date]:
    """Return the start date of a dashboard period filter.

    Args:
        period: One of "month", "quarter", "year", "all"
        today: Reference date (defaults to today)

    Returns:
        First day of the current month/quarter/year, or None for "all"

    Raises:
        ValueError: If period is not recognized
    """
    today = today or date.today()
    if period == "month":
        return month_start(today)
    if period == "quarter":
        return quarter_start(today)
    if period == "year":
        return today.replace(month=1, day=1)
    if period == "all":
        return None
    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: {', '.join(PERIOD_TYPES)}"
    )


def comparison_windows(
    kind: str, today: Optional[date] = None
) -> tuple[tuple[date, date], tuple[date, date]]:
    """Return (current, compared) date windows for a period comparison.

    Args:
        kind: One of "month-prev", "month-next", "quarter-prev", "quarter-next"
        today: Reference date (defaults to today)

    Returns:
        ((current_start, current_end), (compare_start, compare_end))

    Raises:
        ValueError: If kind is not recognized
    """
    today = today or date.today()
    if kind not in COMPARISON_TYPES:
        raise ValueError(
            f"Unknown comparison: '{kind}'. Supported: {', '.join(COMPARISON_TYPES)}"
        )

    unit, direction = kind.split("-")
    months = 1 if unit == "month" else 3
    current_start = month_start(today) if unit == "month" else quarter_start(today)
    shift = relativedelta(months=months if direction == "next" else -months)

    current_end = current_start + relativedelta(months=months) - timedelta(days=1)
    compare_start = current_start + shift
    compare_end = compare_start + relativedelta(months=months) - timedelta(days=1)
    return (current_start, current_end), (compare_start, compare_end)
