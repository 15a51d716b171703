"""Message formatters."""

from connpass_notifier.adapters.messages.slack_blocks import SlackBlocksFormatter, format_datetime

__all__ = ["SlackBlocksFormatter", "format_datetime"]
