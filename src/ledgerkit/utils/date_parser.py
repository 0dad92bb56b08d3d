"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from ledgerkit.domain.errors import ValidationError

PERIODS = ("this-month", "this-year", "last-month", "last-year")


def _month_start(day: date) -> date:
    return day.replace(day=1)


def _year_start(day: date) -> date:
    return day.replace(month=1, day=1)


def parse_date(date_str: str, today: date | None = None) -> date:
    """Parse a date string into a date object.

    Accepts ISO and other absolute forms understood by dateutil, plus
    "today", "yesterday", "start of month", "start of year", "end of last
    month" and "end of last year".

    Args:
        date_str: Date string
        today: Reference date for relative forms (defaults to today)

    Raises:
        ValidationError: If the string cannot be parsed
    """
    text = " ".join(date_str.strip().lower().split())
    today = today or date.today()

    relative = {
        "today": lambda: today,
        "yesterday": lambda: today - timedelta(days=1),
        "start of month": lambda: _month_start(today),
        "start of year": lambda: _year_start(today),
        "end of last month": lambda: _month_start(today) - timedelta(days=1),
        "end of last year": lambda: _year_start(today) - timedelta(days=1),
    }
    if text in relative:
        return relative[text]()

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValidationError(f"Could not parse date '{date_str}': {e}")


def get_period_range(period: str, today: date | None = None) -> tuple[date, date]:
    """Get the inclusive (start_date, end_date) of a reporting period.

    Args:
        period: One of this-month, this-year, last-month, last-year
        today: Reference date (defaults to today)

    Raises:
        ValidationError: If the period is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    if period == "this-month":
        return _month_start(today), today
    if period == "this-year":
        return _year_start(today), today
    if period == "last-month":
        start = _month_start(today - relativedelta(months=1))
        return start, _month_start(today) - timedelta(days=1)
    if period == "last-year":
        start = _year_start(today) - relativedelta(years=1)
        return start, _year_start(today) - timedelta(days=1)

    raise ValidationError(f"Unknown period '{period}'. Supported periods: {', '.join(PERIODS)}")
