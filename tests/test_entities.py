"""Tests for core entities."""

from datetime import datetime, timedelta, timezone

import pytest

from connpass_notifier.core import Event, RawEvent, SeriesEvents

JST = timezone(timedelta(hours=9))


def make_event(title: str, day: int, url: str = "") -> Event:
    return Event(
        title=title,
        url=url or f"https://example.connpass.com/event/{day}/",
        started_at=datetime(2024, 3, day, 19, 0, tzinfo=JST),
        ended_at=datetime(2024, 3, day, 21, 0, tzinfo=JST),
    )


def test_event_validation() -> None:
    """Test event validation."""
    with pytest.raises(ValueError, match="Title cannot be empty"):
        make_event("", 5)
    
    with pytest.raises(ValueError, match="URL cannot be empty"):
        Event(
            title="Meetup",
            url="",
            started_at=datetime(2024, 3, 5, 19, 0, tzinfo=JST),
            ended_at=datetime(2024, 3, 5, 21, 0, tzinfo=JST),
        )


def test_raw_event_to_event_strips_series() -> None:
    """Test conversion from raw record to normalized event."""
    raw = RawEvent(
        series_id="123",
        series_title="Python Meetup",
        title="Meetup #1",
        url="https://example.connpass.com/event/1/",
        started_at=datetime(2024, 3, 5, 19, 0, tzinfo=JST),
        ended_at=datetime(2024, 3, 5, 21, 0, tzinfo=JST),
    )
    
    event = raw.to_event()
    
    assert event == make_event("Meetup #1", 5, "https://example.connpass.com/event/1/")
    assert not hasattr(event, "series_id")


def test_events_with_same_fields_are_equal() -> None:
    """Test that equality follows the (title, url, started_at, ended_at) tuple."""
    assert make_event("A", 5) == make_event("A", 5)
    assert make_event("A", 5) != make_event("B", 5)
    # Same instant in another timezone is the same event
    same_instant = Event(
        title="A",
        url="https://example.connpass.com/event/5/",
        started_at=datetime(2024, 3, 5, 10, 0, tzinfo=timezone.utc),
        ended_at=datetime(2024, 3, 5, 12, 0, tzinfo=timezone.utc),
    )
    assert len({make_event("A", 5), same_instant}) == 1


def test_series_events_drops_duplicates() -> None:
    """Test that a series never holds the same event twice."""
    series = SeriesEvents(
        series_id="123",
        series_title="Python Meetup",
        events=(make_event("A", 5), make_event("B", 6), make_event("A", 5)),
    )
    
    assert [e.title for e in series.events] == ["A", "B"]


def test_series_events_merge_is_union() -> None:
    """Test merging overlapping partial results."""
    first = SeriesEvents("123", "Python Meetup", (make_event("A", 5), make_event("B", 6)))
    second = SeriesEvents("123", "Python Meetup", (make_event("B", 6), make_event("C", 7)))
    
    merged = first.merge(second)
    
    assert [e.title for e in merged.events] == ["A", "B", "C"]
    assert len(merged.events) == len(set(first.events) | set(second.events))
    # Inputs untouched
    assert len(first.events) == 2
    assert len(second.events) == 2


def test_series_events_merge_other_series_fails() -> None:
    """Test that merging different series is rejected."""
    first = SeriesEvents("123", "Python Meetup", (make_event("A", 5),))
    other = SeriesEvents("456", "Go Meetup", (make_event("B", 6),))
    
    with pytest.raises(ValueError):
        first.merge(other)


def test_sorted_by_start() -> None:
    """Test chronological ordering of a series."""
    series = SeriesEvents("123", "Python Meetup", (make_event("C", 7), make_event("A", 5)))
    
    assert [e.title for e in series.sorted_by_start().events] == ["A", "C"]


def test_series_events_merge_keeps_series_url() -> None:
    """Test the series page survives merging and sorting."""
    first = SeriesEvents("123", "Python Meetup", (make_event("B", 6),))
    second = SeriesEvents("123", "Python Meetup", (make_event("A", 5),), series_url="https://python.connpass.com/")
    
    merged = first.merge(second)
    
    assert merged.series_url == "https://python.connpass.com/"
    assert merged.sorted_by_start().series_url == "https://python.connpass.com/"
