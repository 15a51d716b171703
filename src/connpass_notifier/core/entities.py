"""Core domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

NotificationPayload = dict[str, Any]


@dataclass(frozen=True)
class DateWindow:
    """Time range an event must start in to be notified."""
    
    from_time: Optional[datetime]
    to_time: Optional[datetime]
    year_months: tuple[str, ...] = ()


@dataclass(frozen=True)
class Event:
    """Normalized event. Equality is the dedup key."""
    
    title: str
    url: str
    started_at: datetime
    ended_at: datetime
    
    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("Title cannot be empty")
        if not self.url:
            raise ValueError("URL cannot be empty")


@dataclass(frozen=True)
class RawEvent:
    """Event record as returned by the event API."""
    
    series_id: str
    series_title: str
    title: str
    url: str
    started_at: datetime
    ended_at: datetime
    series_url: str = ""
    
    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("Title cannot be empty")
        if not self.url:
            raise ValueError("URL cannot be empty")
    
    def to_event(self) -> Event:
        return Event(
            title=self.title,
            url=self.url,
            started_at=self.started_at,
            ended_at=self.ended_at,
        )


@dataclass(frozen=True)
class SeriesEvents:
    """Events of one series, without duplicates, in first-seen order."""
    
    series_id: str
    series_title: str
    events: tuple[Event, ...] = field(default_factory=tuple)
    series_url: str = ""
    
    def __post_init__(self) -> None:
        # dict keeps insertion order, so this drops repeats but not order
        object.__setattr__(self, "events", tuple(dict.fromkeys(self.events)))
    
    def merge(self, other: "SeriesEvents") -> "SeriesEvents":
        """Union of both event lists. Title is kept from self."""
        if other.series_id != self.series_id:
            raise ValueError(
                f"Cannot merge series {other.series_id} into {self.series_id}"
            )
        return SeriesEvents(
            series_id=self.series_id,
            series_title=self.series_title,
            events=self.events + other.events,
            series_url=self.series_url or other.series_url,
        )
    
    def sorted_by_start(self) -> "SeriesEvents":
        return SeriesEvents(
            series_id=self.series_id,
            series_title=self.series_title,
            events=tuple(sorted(self.events, key=lambda e: e.started_at)),
            series_url=self.series_url,
        )
