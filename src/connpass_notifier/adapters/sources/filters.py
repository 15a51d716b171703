"""Shared filtering utilities for sources."""

from datetime import datetime
from typing import Iterable

from connpass_notifier.core import DateWindow, RawEvent


def is_within_window(started_at: datetime, window: DateWindow) -> bool:
    """
    Check if a start time falls inside the window.
    
    Args:
        started_at: Start time of the event
        window: Window with optional lower and upper bounds
        
    Returns:
        True if from_time <= started_at <= to_time (both inclusive).
        A missing bound is not checked.
    """
    if window.from_time is not None and started_at < window.from_time:
        return False
    if window.to_time is not None and started_at > window.to_time:
        return False
    return True


def filter_by_window(events: Iterable[RawEvent], window: DateWindow) -> list[RawEvent]:
    """Keep events starting inside the window, in their original order."""
    return [event for event in events if is_within_window(event.started_at, window)]
