"""Source adapters for fetching events."""

from connpass_notifier.adapters.sources.connpass_source import ConnpassSource
from connpass_notifier.adapters.sources.filters import filter_by_window, is_within_window

__all__ = ["ConnpassSource", "filter_by_window", "is_within_window"]
