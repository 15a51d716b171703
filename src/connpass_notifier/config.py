"""Configuration management."""

import os
from dataclasses import dataclass, field, fields
from datetime import tzinfo
from pathlib import Path
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from connpass_notifier.core import ConfigError


@dataclass
class ConnpassConfig:
    """connpass API settings."""
    api_base_url: str = "https://connpass.com/api/v1/event/"
    series_ids: list[str] = field(default_factory=list)
    request_delay: float = 5.0
    timeout: float = 30.0
    days_ahead: int = 7
    sort_by_start: bool = False


@dataclass
class SlackConfig:
    """Slack message settings."""
    username: str = "connpass-events-notifier"
    icon_emoji: str = ":calendar:"
    timezone: Optional[str] = None
    timeout: float = 30.0
    labels: dict = field(default_factory=lambda: {
        "start": "開始日時",
        "end": "終了日時",
        "link": "イベントページ",
    })


@dataclass
class Settings:
    """Application settings."""

    # Secrets and deployment values (from environment)
    slack_webhook_url: str = ""

    # Config sections
    connpass: ConnpassConfig = field(default_factory=ConnpassConfig)
    slack: SlackConfig = field(default_factory=SlackConfig)

    @property
    def series_ids(self) -> list[str]:
        return self.connpass.series_ids

    @property
    def request_delay(self) -> float:
        return self.connpass.request_delay

    @property
    def days_ahead(self) -> int:
        return self.connpass.days_ahead

    @property
    def tz(self) -> Optional[tzinfo]:
        """Display timezone; None means the machine's local time."""
        if not self.slack.timezone:
            return None
        try:
            return ZoneInfo(self.slack.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(f"Unknown timezone: {self.slack.timezone}") from e

    def validate(self, require_webhook: bool = True) -> None:
        """Check settings before any network activity.

        Raises:
            ConfigError: On the first missing or invalid value
        """
        if require_webhook:
            if not self.slack_webhook_url:
                raise ConfigError("SLACK_WEBHOOK_URL is not set")
            if not self.slack_webhook_url.startswith(("https://", "http://")):
                raise ConfigError("SLACK_WEBHOOK_URL must be an http(s) URL")

        if not self.connpass.series_ids:
            raise ConfigError("CONNPASS_SERIES_IDS is not set")
        if any(not isinstance(sid, str) or not sid.strip() for sid in self.connpass.series_ids):
            raise ConfigError(f"Invalid series id in {self.connpass.series_ids!r}")

        if not _is_number(self.connpass.request_delay) or self.connpass.request_delay < 0:
            raise ConfigError("connpass.request_delay must be a non-negative number")
        if not _is_number(self.connpass.timeout) or self.connpass.timeout <= 0:
            raise ConfigError("connpass.timeout must be a positive number")
        if not _is_number(self.slack.timeout) or self.slack.timeout <= 0:
            raise ConfigError("slack.timeout must be a positive number")
        if (
            not isinstance(self.connpass.days_ahead, int)
            or isinstance(self.connpass.days_ahead, bool)
            or self.connpass.days_ahead < 1
        ):
            raise ConfigError("connpass.days_ahead must be a positive integer")
        if not isinstance(self.connpass.sort_by_start, bool):
            raise ConfigError("connpass.sort_by_start must be true or false")

        if not isinstance(self.slack.labels, dict) or not all(
            isinstance(self.slack.labels.get(key), str) for key in ("start", "end", "link")
        ):
            raise ConfigError("slack.labels must define start, end and link as strings")

        # Resolve once so a bad name fails here
        self.tz


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_series_ids(raw: str) -> list[str]:
    """Split a comma separated id list. Empty entries are an error."""
    ids = [part.strip() for part in raw.split(",")]
    if any(not sid for sid in ids):
        raise ConfigError(f"Empty series id in CONNPASS_SERIES_IDS={raw!r}")
    return ids


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"{config_path} must contain a mapping")
    return config


def _apply_section(target: Any, values: Any, section: str) -> None:
    if not isinstance(values, dict):
        raise ConfigError(f"Section '{section}' must be a mapping")

    known = {f.name for f in fields(target)}
    for key, value in values.items():
        if key not in known:
            raise ConfigError(f"Unknown setting {section}.{key}")
        setattr(target, key, value)


def _normalize_series_ids(value: Any) -> list[str]:
    """Check ids from the config file. Numbers are accepted, null means unset."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError("connpass.series_ids must be a list")

    ids = []
    for sid in value:
        if isinstance(sid, bool) or not isinstance(sid, (str, int)):
            raise ConfigError(f"Invalid series id {sid!r} in connpass.series_ids")
        sid = str(sid).strip()
        if not sid:
            raise ConfigError("Empty series id in connpass.series_ids")
        ids.append(sid)
    return ids


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    # Load YAML config
    config = load_config(config_path)

    unknown = set(config) - {"connpass", "slack"}
    if unknown:
        raise ConfigError(f"Unknown config sections: {', '.join(sorted(unknown))}")

    settings = Settings(slack_webhook_url=os.getenv("SLACK_WEBHOOK_URL", "").strip())

    # Apply YAML config
    if "connpass" in config:
        _apply_section(settings.connpass, config["connpass"], "connpass")

    if "slack" in config:
        _apply_section(settings.slack, config["slack"], "slack")

    # Environment wins over the file
    raw_ids = os.getenv("CONNPASS_SERIES_IDS")
    if raw_ids:
        settings.connpass.series_ids = parse_series_ids(raw_ids)
    else:
        settings.connpass.series_ids = _normalize_series_ids(settings.connpass.series_ids)

    return settings
