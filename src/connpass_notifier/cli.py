"""CLI entry point for connpass notifier."""

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from connpass_notifier.adapters.messages import SlackBlocksFormatter
from connpass_notifier.adapters.notifications import SlackNotifier
from connpass_notifier.adapters.sources import ConnpassSource
from connpass_notifier.config import Settings, get_settings
from connpass_notifier.core import ConnpassNotifierError, compute_date_window
from connpass_notifier.use_cases import Dispatcher, SeriesAggregator, build_payloads


def main(
    config: Path = typer.Option(Path("config.yaml"), "--config", help="Path to YAML config"),
    days: Optional[int] = typer.Option(None, "--days", min=1, help="Override window length in days"),
    no_slack: bool = typer.Option(False, "--no-slack", help="Build messages but do not send them"),
) -> None:
    """Notify Slack about connpass events starting within the next days."""
    try:
        settings = get_settings(config)
        if days is not None:
            settings.connpass.days_ahead = days
        settings.validate(require_webhook=not no_slack)
        asyncio.run(async_run(settings, no_slack))
    except ConnpassNotifierError as e:
        print(f"\n❌ Ошибка ({type(e).__name__}): {e}")
        raise typer.Exit(code=1)


def app() -> None:
    """CLI entry point."""
    typer.run(main)


async def async_run(settings: Settings, no_slack: bool, now: Optional[datetime] = None) -> int:
    """Run one fetch-and-notify cycle.

    Returns:
        Number of messages sent (or built, with no_slack)
    """
    # Header
    print("\n" + "=" * 70)
    print("📅  CONNPASS NOTIFIER - ближайшие события")
    print("=" * 70)

    now = now or datetime.now().astimezone()
    window = compute_date_window(now, settings.days_ahead)

    print(f"\n🔑 Креды:")
    if no_slack:
        print(f"  ⚠️  SLACK_WEBHOOK_URL - отключен опцией --no-slack")
    else:
        print(f"  ✓ SLACK_WEBHOOK_URL - для отправки уведомлений")

    print(f"\n⚙️  Настройки:")
    print(f"  • Серии: {', '.join(settings.series_ids)}")
    print(f"  • Период: {window.from_time:%d.%m.%Y %H:%M} - {window.to_time:%d.%m.%Y %H:%M} ({settings.days_ahead} дн.)")
    print(f"  • Месяцы: {', '.join(window.year_months)}")
    print(f"  • Задержка между запросами: {settings.request_delay}s")

    source = ConnpassSource(
        api_base_url=settings.connpass.api_base_url,
        request_delay=settings.request_delay,
        timeout=settings.connpass.timeout,
    )
    aggregator = SeriesAggregator(source, sort_by_start=settings.connpass.sort_by_start)
    formatter = SlackBlocksFormatter(
        username=settings.slack.username,
        icon_emoji=settings.slack.icon_emoji,
        labels=settings.slack.labels,
        tz=settings.tz,
    )

    print("\n" + "=" * 70)
    print("📥 ЭТАП 1: СБОР СОБЫТИЙ")
    print("=" * 70)

    series_list = await aggregator.aggregate(settings.series_ids, window)

    if not series_list:
        print("\n" + "=" * 70)
        print("❌ НЕТ СОБЫТИЙ В ОКНЕ")
        print("=" * 70)
        return 0

    payloads = build_payloads(series_list, formatter)

    print("\n" + "=" * 70)
    print("📤 ЭТАП 2: ОТПРАВКА В SLACK")
    print("=" * 70)

    if no_slack:
        for series, payload in zip(series_list, payloads):
            print(f"  • {series.series_title}: {len(series.events)} событий, {len(payload['blocks'])} блоков")
        sent = len(payloads)
    else:
        notifier = SlackNotifier(settings.slack_webhook_url, timeout=settings.slack.timeout)
        sent = await Dispatcher(notifier).send(payloads)

    print("\n" + "=" * 70)
    print(f"✅ ГОТОВО! Сообщений: {sent}")
    print("=" * 70)
    print()

    return sent


if __name__ == "__main__":
    app()
