"""Slack Block Kit message formatter."""

from datetime import datetime, tzinfo
from typing import Optional

from connpass_notifier.core import Event, MessageFormatter, NotificationPayload, SeriesEvents

# Slack rejects messages above these
MAX_BLOCKS = 50
MAX_HEADER_LENGTH = 150

DEFAULT_LABELS = {
    "start": "開始日時",
    "end": "終了日時",
    "link": "イベントページ",
}


def format_datetime(value: datetime, tz: Optional[tzinfo] = None) -> str:
    """Format as YYYY-MM-DD HH:MM in local time, or in tz if given."""
    if value.tzinfo is not None:
        value = value.astimezone(tz) if tz is not None else value.astimezone()
    return value.strftime("%Y-%m-%d %H:%M")


class SlackBlocksFormatter(MessageFormatter):
    """Build one Slack webhook payload per series."""
    
    def __init__(
        self,
        username: str = "connpass-events-notifier",
        icon_emoji: str = ":calendar:",
        labels: Optional[dict[str, str]] = None,
        tz: Optional[tzinfo] = None,
    ) -> None:
        self.username = username
        self.icon_emoji = icon_emoji
        self.labels = {**DEFAULT_LABELS, **(labels or {})}
        self.tz = tz
    
    def format(self, series: SeriesEvents) -> NotificationPayload:
        """Build webhook payload: header, then context/section/divider per event."""
        if not series.events:
            raise ValueError(f"Series {series.series_id} has no events to format")
        
        blocks: list[dict] = [self._header_block(series.series_title)]
        
        events = list(series.events)
        omitted = 0
        if len(blocks) + 3 * len(events) > MAX_BLOCKS:
            # Leave room for the trailing note
            shown = (MAX_BLOCKS - len(blocks) - 1) // 3
            omitted = len(events) - shown
            events = events[:shown]
        
        for event in events:
            blocks.extend(self._event_blocks(event))
        
        if omitted:
            blocks.append(self._omitted_block(omitted, series.series_url))
        
        return {
            "username": self.username,
            "icon_emoji": self.icon_emoji,
            "blocks": blocks,
        }
    
    def _omitted_block(self, omitted: int, series_url: str) -> dict:
        if series_url:
            element = {"type": "mrkdwn", "text": f"+{omitted} more: <{series_url}>"}
        else:
            element = {"type": "plain_text", "text": f"+{omitted} more"}
        return {"type": "context", "elements": [element]}
    
    def _header_block(self, title: str) -> dict:
        if len(title) > MAX_HEADER_LENGTH:
            title = title[:MAX_HEADER_LENGTH - 1] + "…"
        return {
            "type": "header",
            "text": {"type": "plain_text", "text": title},
        }
    
    def _event_blocks(self, event: Event) -> list[dict]:
        """Format single event."""
        return [
            {
                "type": "context",
                "elements": [
                    {"type": "plain_text", "text": event.title},
                ],
            },
            {
                "type": "section",
                "fields": [
                    {
                        "type": "plain_text",
                        "text": f"{self.labels['start']}: {format_datetime(event.started_at, self.tz)}",
                    },
                    {
                        "type": "plain_text",
                        "text": f"{self.labels['end']}: {format_datetime(event.ended_at, self.tz)}",
                    },
                    {
                        "type": "mrkdwn",
                        "text": f"{self.labels['link']}: <{event.url}>",
                    },
                ],
            },
            {"type": "divider"},
        ]
