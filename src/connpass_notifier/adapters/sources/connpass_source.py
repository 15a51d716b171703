"""connpass event API source."""

import asyncio
import json
import re
from datetime import datetime
from typing import Any, Optional

import httpx

from connpass_notifier import __version__
from connpass_notifier.core import DecodeError, EventSource, RawEvent, UpstreamError

YEAR_MONTH_PATTERN = re.compile(r"^\d{4}(0[1-9]|1[0-2])$")


class ConnpassSource(EventSource):
    """Fetch events of a series for one month from the connpass API."""
    
    emoji = "📅"
    name = "connpass"
    
    # Most recently updated first; downstream does not depend on it
    ORDER_UPDATED_DESC = 2
    
    def __init__(
        self,
        api_base_url: str = "https://connpass.com/api/v1/event/",
        request_delay: float = 5.0,
        timeout: float = 30.0,
    ) -> None:
        self.api_base_url = api_base_url
        self.request_delay = request_delay
        self.timeout = timeout
        self._last_request_time: Optional[float] = None
    
    async def fetch_events(self, series_id: str, year_month: str) -> list[RawEvent]:
        """Fetch events of the series held in the given month.
        
        Raises:
            UpstreamError: Request failed or API answered with an error status
            DecodeError: Response body is not the expected JSON
        """
        if not series_id:
            raise ValueError("series_id cannot be empty")
        if not YEAR_MONTH_PATTERN.match(year_month):
            raise ValueError(f"year_month must be YYYYMM, got {year_month!r}")
        
        await self._rate_limit_delay()
        
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    self.api_base_url,
                    params={
                        "ym": year_month,
                        "series_id": series_id,
                        "order": self.ORDER_UPDATED_DESC,
                    },
                    headers={"User-Agent": f"connpass-notifier/{__version__}"},
                )
        except httpx.HTTPError as e:
            raise UpstreamError(
                f"Request for series {series_id} ({year_month}) failed: {e}"
            ) from e
        finally:
            self._last_request_time = asyncio.get_event_loop().time()
        
        if response.status_code != 200:
            raise UpstreamError(
                f"connpass API error: HTTP {response.status_code} "
                f"for series {series_id} ({year_month})",
                status_code=response.status_code,
            )
        
        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(
                f"Invalid JSON for series {series_id} ({year_month}): {e}"
            ) from e
        
        return self._parse_events(series_id, data)
    
    def _parse_events(self, series_id: str, data: Any) -> list[RawEvent]:
        """Build raw events from the decoded response body."""
        if not isinstance(data, dict) or not isinstance(data.get("events"), list):
            raise DecodeError(f"Response for series {series_id} has no events list")
        
        events: list[RawEvent] = []
        for record in data["events"]:
            if self._is_blank_record(record):
                print(f"  └─ ⚠️  Пропущено событие без названия или ссылки: {record.get('event_id', '?')}")
                continue
            try:
                events.append(self._create_event(series_id, record))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise DecodeError(
                    f"Malformed event record for series {series_id}: {e!r}"
                ) from e
        
        return events
    
    def _create_event(self, series_id: str, record: dict) -> RawEvent:
        series = record.get("series") or {}
        return RawEvent(
            series_id=series_id,
            series_title=series["title"],
            title=record["title"],
            url=record["event_url"],
            started_at=self._parse_datetime(record["started_at"]),
            ended_at=self._parse_datetime(record["ended_at"]),
            series_url=series.get("url") or "",
        )
    
    def _is_blank_record(self, record: Any) -> bool:
        """Title or link present but empty. Missing keys are left to the decoder."""
        if not isinstance(record, dict):
            return False
        for key in ("title", "event_url"):
            if key in record and (
                record[key] is None
                or (isinstance(record[key], str) and not record[key].strip())
            ):
                return True
        return False
    
    def _parse_datetime(self, value: str) -> datetime:
        """Parse an ISO 8601 timestamp. Naive values are taken as local time."""
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.astimezone()
        return parsed
    
    async def _rate_limit_delay(self) -> None:
        """Wait until request_delay has passed since the previous request."""
        if self._last_request_time is None:
            return
        elapsed = asyncio.get_event_loop().time() - self._last_request_time
        if elapsed < self.request_delay:
            await asyncio.sleep(self.request_delay - elapsed)
