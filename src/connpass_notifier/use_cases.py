"""Business logic use cases."""

from typing import AsyncIterator, Iterable

from connpass_notifier.adapters.sources.filters import filter_by_window
from connpass_notifier.core import (
    DateWindow,
    EventSource,
    MessageFormatter,
    NotificationPayload,
    NotificationService,
    SeriesEvents,
)


class SeriesAggregator:
    """Collect in-window events for every series, merged across months."""

    def __init__(self, source: EventSource, sort_by_start: bool = False) -> None:
        self.source = source
        self.sort_by_start = sort_by_start

    async def aggregate(self, series_ids: Iterable[str], window: DateWindow) -> list[SeriesEvents]:
        """Fetch every (series, month) pair and merge results per series.

        Series without events in the window are left out. Fetch errors
        propagate, so one failed pair fails the whole run.

        Returns:
            One SeriesEvents per series with events, in series_ids order
        """
        merged: dict[str, SeriesEvents] = {}

        async for partial in self._iter_partials(series_ids, window):
            existing = merged.get(partial.series_id)
            merged[partial.series_id] = existing.merge(partial) if existing else partial

        results = list(merged.values())
        if self.sort_by_start:
            results = [series.sorted_by_start() for series in results]

        total_events = sum(len(series.events) for series in results)
        print(f"\n✓ Серий с событиями: {len(results)}, событий: {total_events}")

        return results

    async def _iter_partials(
        self, series_ids: Iterable[str], window: DateWindow
    ) -> AsyncIterator[SeriesEvents]:
        """Yield in-window events of each (series, month) pair, one fetch at a time."""
        # Unique ids, configured order
        unique_ids = list(dict.fromkeys(series_ids))
        pairs = [(sid, ym) for sid in unique_ids for ym in window.year_months]

        for i, (series_id, year_month) in enumerate(pairs, 1):
            print(f"\n  [{i}/{len(pairs)}] Серия {series_id}, месяц {year_month}")

            raw_events = await self.source.fetch_events(series_id, year_month)
            in_window = filter_by_window(raw_events, window)
            print(f"  └─ Найдено: {len(raw_events)}, в окне: {len(in_window)}")

            if not in_window:
                continue

            yield SeriesEvents(
                series_id=series_id,
                series_title=in_window[0].series_title,
                events=tuple(event.to_event() for event in in_window),
                series_url=in_window[0].series_url,
            )


class Dispatcher:
    """Send payloads one by one, stopping at the first failure."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def send(self, payloads: Iterable[NotificationPayload]) -> int:
        """Send each payload in order.

        Returns:
            Number of payloads sent

        Raises:
            DispatchError: From the first failed send; later payloads are not sent
        """
        sent = 0
        for payload in payloads:
            await self.notification_service.send(payload)
            sent += 1
            print(f"  ✓ Отправлено: {self._describe(payload)}")
        return sent

    def _describe(self, payload: NotificationPayload) -> str:
        for block in payload.get("blocks", []):
            if block.get("type") == "header":
                return block["text"]["text"]
        return "сообщение"


def build_payloads(
    series_list: Iterable[SeriesEvents], formatter: MessageFormatter
) -> list[NotificationPayload]:
    """Format one payload per series."""
    return [formatter.format(series) for series in series_list]
