"""Core domain layer."""

from connpass_notifier.core.date_window import compute_date_window, year_month
from connpass_notifier.core.entities import (
    DateWindow,
    Event,
    NotificationPayload,
    RawEvent,
    SeriesEvents,
)
from connpass_notifier.core.errors import (
    ConfigError,
    ConnpassNotifierError,
    DecodeError,
    DispatchError,
    UpstreamError,
)
from connpass_notifier.core.interfaces import EventSource, MessageFormatter, NotificationService

__all__ = [
    "DateWindow",
    "Event",
    "RawEvent",
    "SeriesEvents",
    "NotificationPayload",
    "EventSource",
    "MessageFormatter",
    "NotificationService",
    "ConnpassNotifierError",
    "ConfigError",
    "DecodeError",
    "UpstreamError",
    "DispatchError",
    "compute_date_window",
    "year_month",
]
