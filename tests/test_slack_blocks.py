"""Tests for Slack Block Kit formatter."""

from datetime import datetime, timedelta, timezone

import pytest

from connpass_notifier.adapters.messages import SlackBlocksFormatter, format_datetime
from connpass_notifier.core import Event, SeriesEvents

JST = timezone(timedelta(hours=9))


def make_event(title: str, day: int = 5) -> Event:
    return Event(
        title=title,
        url=f"https://example.connpass.com/event/{title}/",
        started_at=datetime(2024, 3, day, 9, 30, tzinfo=JST),
        ended_at=datetime(2024, 3, day, 18, 5, tzinfo=JST),
    )


@pytest.fixture
def formatter() -> SlackBlocksFormatter:
    return SlackBlocksFormatter(tz=JST)


def test_format_datetime_local() -> None:
    """Test naive local time formatting."""
    assert format_datetime(datetime(2024, 3, 5, 9, 30)) == "2024-03-05 09:30"


def test_format_datetime_converts_to_timezone() -> None:
    """Test aware values are shown in the requested timezone."""
    value = datetime(2024, 3, 5, 0, 30, tzinfo=timezone.utc)
    
    assert format_datetime(value, JST) == "2024-03-05 09:30"
    assert format_datetime(value, timezone.utc) == "2024-03-05 00:30"


def test_format_payload_structure(formatter: SlackBlocksFormatter) -> None:
    """Test header, then context/section/divider per event."""
    series = SeriesEvents("123", "Python Meetup", (make_event("first", 5), make_event("second", 6)))
    
    payload = formatter.format(series)
    
    assert payload["username"] == "connpass-events-notifier"
    assert payload["icon_emoji"] == ":calendar:"
    
    blocks = payload["blocks"]
    assert [b["type"] for b in blocks] == [
        "header",
        "context", "section", "divider",
        "context", "section", "divider",
    ]
    assert blocks[0]["text"] == {"type": "plain_text", "text": "Python Meetup"}
    assert blocks[1]["elements"] == [{"type": "plain_text", "text": "first"}]
    assert blocks[4]["elements"][0]["text"] == "second"


def test_format_event_fields(formatter: SlackBlocksFormatter) -> None:
    """Test start, end and link fields."""
    series = SeriesEvents("123", "Python Meetup", (make_event("first"),))
    
    fields = formatter.format(series)["blocks"][2]["fields"]
    
    assert fields == [
        {"type": "plain_text", "text": "開始日時: 2024-03-05 09:30"},
        {"type": "plain_text", "text": "終了日時: 2024-03-05 18:05"},
        {"type": "mrkdwn", "text": "イベントページ: <https://example.connpass.com/event/first/>"},
    ]


def test_format_custom_labels() -> None:
    """Test labels and identity can be configured."""
    formatter = SlackBlocksFormatter(
        username="events-bot",
        icon_emoji=":tada:",
        labels={"start": "start", "end": "end", "link": "link"},
        tz=JST,
    )
    
    payload = formatter.format(SeriesEvents("123", "Python Meetup", (make_event("first"),)))
    fields = payload["blocks"][2]["fields"]
    
    assert payload["username"] == "events-bot"
    assert payload["icon_emoji"] == ":tada:"
    assert fields[0]["text"] == "start: 2024-03-05 09:30"
    assert fields[1]["text"] == "end: 2024-03-05 18:05"
    assert fields[2]["text"].startswith("link: <")


def test_format_empty_series_rejected(formatter: SlackBlocksFormatter) -> None:
    """Test a series without events cannot be formatted."""
    with pytest.raises(ValueError):
        formatter.format(SeriesEvents("123", "Python Meetup", ()))


def test_format_long_header_truncated(formatter: SlackBlocksFormatter) -> None:
    """Test header text stays within Slack's limit."""
    series = SeriesEvents("123", "x" * 300, (make_event("first"),))
    
    header = formatter.format(series)["blocks"][0]["text"]["text"]
    
    assert len(header) == 150
    assert header.endswith("…")


def test_format_block_limit(formatter: SlackBlocksFormatter) -> None:
    """Test messages never exceed 50 blocks."""
    events = tuple(make_event(f"event-{i}") for i in range(20))
    
    blocks = formatter.format(SeriesEvents("123", "Python Meetup", events))["blocks"]
    
    assert len(blocks) == 50
    assert blocks[-1] == {
        "type": "context",
        "elements": [{"type": "plain_text", "text": "+4 more"}],
    }
    assert sum(1 for b in blocks if b["type"] == "divider") == 16


def test_format_sixteen_events_fit(formatter: SlackBlocksFormatter) -> None:
    """Test 16 events fit exactly without a note."""
    events = tuple(make_event(f"event-{i}") for i in range(16))
    
    blocks = formatter.format(SeriesEvents("123", "Python Meetup", events))["blocks"]
    
    assert len(blocks) == 49
    assert blocks[-1]["type"] == "divider"


def test_format_block_limit_links_series_page(formatter: SlackBlocksFormatter) -> None:
    """Test the omitted-events note links to the series page when known."""
    events = tuple(make_event(f"event-{i}") for i in range(20))
    series = SeriesEvents("123", "Python Meetup", events, series_url="https://python.connpass.com/")
    
    blocks = formatter.format(series)["blocks"]
    
    assert len(blocks) == 50
    assert blocks[-1] == {
        "type": "context",
        "elements": [{"type": "mrkdwn", "text": "+4 more: <https://python.connpass.com/>"}],
    }
