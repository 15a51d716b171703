"""Domain errors."""

from typing import Optional


class ConnpassNotifierError(Exception):
    """Base error for a failed notifier run."""


class ConfigError(ConnpassNotifierError):
    """Raised when configuration is missing or malformed."""


class DecodeError(ConnpassNotifierError):
    """Raised when an upstream response cannot be decoded into events."""


class UpstreamError(ConnpassNotifierError):
    """Raised when the event API request fails or answers with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DispatchError(ConnpassNotifierError):
    """Raised when a notification cannot be delivered."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
