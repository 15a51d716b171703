"""Notify Slack about upcoming connpass events by series."""

__version__ = "0.1.0"
