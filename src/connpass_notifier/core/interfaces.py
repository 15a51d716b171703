"""Core interfaces for adapters."""

from abc import ABC, abstractmethod

from connpass_notifier.core.entities import NotificationPayload, RawEvent, SeriesEvents


class EventSource(ABC):
    """Interface for fetching events of one series in one month."""
    
    @abstractmethod
    async def fetch_events(self, series_id: str, year_month: str) -> list[RawEvent]:
        """Fetch events of series_id held in year_month (YYYYMM)."""
        pass


class MessageFormatter(ABC):
    """Interface for turning a series into a message payload."""
    
    @abstractmethod
    def format(self, series: SeriesEvents) -> NotificationPayload:
        """Build the payload announcing the events of one series."""
        pass


class NotificationService(ABC):
    """Interface for delivering message payloads."""
    
    @abstractmethod
    async def send(self, payload: NotificationPayload) -> None:
        """Deliver one payload."""
        pass
