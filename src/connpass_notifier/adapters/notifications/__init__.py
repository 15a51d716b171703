"""Notification adapters."""

from connpass_notifier.adapters.notifications.slack_notifier import SlackNotifier

__all__ = ["SlackNotifier"]
