"""Notification window and the calendar months it covers."""

from datetime import datetime, timedelta

from connpass_notifier.core.entities import DateWindow

DEFAULT_DAYS_AHEAD = 7


def year_month(moment: datetime) -> str:
    """Format a moment as the API's YYYYMM month key."""
    return f"{moment.year:04d}{moment.month:02d}"


def compute_date_window(now: datetime, days_ahead: int = DEFAULT_DAYS_AHEAD) -> DateWindow:
    """
    Build the window from now to now + days_ahead.
    
    The API can only be queried per month, so the window also lists every
    month it touches, from the month of now through the month of the end.
    
    Args:
        now: Start of the window
        days_ahead: Length of the window in days
        
    Returns:
        DateWindow with both bounds and the distinct months in order
    """
    until = now + timedelta(days=days_ahead)
    return DateWindow(from_time=now, to_time=until, year_months=months_between(now, until))


def months_between(start: datetime, end: datetime) -> tuple[str, ...]:
    """Every YYYYMM key from start's month through end's month, inclusive."""
    months: list[str] = []
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        months.append(f"{year:04d}{month:02d}")
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
    return tuple(months)
