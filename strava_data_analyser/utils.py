import json
import logging
import re
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import arrow
import requests
from dateutil import tz as dateutil_tz
from pydantic import BaseModel
from rich.console import Console
from rich.logging import RichHandler
from stravalib.client import Client

from .config import ENV_FILE, ENV_KEYS, PROPERTIES_FILE, PROPERTY_KEYS, REQUEST_TIMEOUT_SECONDS

if TYPE_CHECKING:
    from .type_defs import EnvConfig


class ActivityJSONEncoder(json.JSONEncoder):
    """
    JSON encoder for stravalib models and the date/time values they carry.
    """

    def default(self, o):
        if isinstance(o, BaseModel):
            return o.model_dump(exclude_none=True)
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        if isinstance(o, timedelta):
            return int(o.total_seconds())
        return super().default(o)


class SensitiveFilter(logging.Filter):
    """
    Filter to redact sensitive information from logs.
    """

    sensitive_keys = {
        "client_secret",
        "authorization_code",
        "code",
        "access_token",
        "refresh_token",
    }

    def filter(self, record):
        sensitive_keys = self.sensitive_keys

        def redact_data(data):
            if isinstance(data, dict):
                return {k: ("***" if k in sensitive_keys else redact_data(v)) for k, v in data.items()}
            elif isinstance(data, list):
                return [redact_data(item) for item in data]
            return data

        if record.args:
            if isinstance(record.args, dict):
                record.args = redact_data(record.args)
            elif isinstance(record.args, (list, tuple)):
                record.args = tuple(redact_data(arg) for arg in record.args)

        # Pre-formatted messages: 'key': 'value' and key=value forms
        if isinstance(record.msg, str):
            msg = record.msg
            for key in sensitive_keys:
                pattern = f"(['\"]?\\b{key}['\"]?)\\s*:\\s*(['\"])(.*?)\\2"
                msg = re.sub(pattern, r"\1: \2***\2", msg)
                msg = re.sub(f"\\b({key})=([^&\\s,]+)", r"\1=***", msg)
            record.msg = msg

        return True



class RefreshReminderFilter(logging.Filter):
    """
    Drops stravalib's reminders to export STRAVA_CLIENT_ID/STRAVA_CLIENT_SECRET.
    Those variables only feed stravalib's automatic token refresh, which is never used here.
    """

    reminder_markers = ("STRAVA_CLIENT_ID", "STRAVA_CLIENT_SECRET")

    def filter(self, record):
        if not record.name.startswith("stravalib"):
            return True
        message = record.getMessage()
        return not any(marker in message for marker in self.reminder_markers)


_logging_configured = False


def get_logger(name):
    """
    Creates and configures a logger.
    The root logger gets a single RichHandler carrying the redaction and reminder filters.
    """
    global _logging_configured

    if not _logging_configured:
        root_logger = logging.getLogger()
        if root_logger.handlers:
            for handler in root_logger.handlers[:]:
                root_logger.removeHandler(handler)

        root_logger.setLevel(logging.INFO)

        # stderr keeps stdout free for command output
        handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_time=True, show_path=False)
        handler.addFilter(RefreshReminderFilter())
        handler.addFilter(SensitiveFilter())

        root_logger.addHandler(handler)
        _logging_configured = True

    return logging.getLogger(name)


logger = get_logger(__name__)


def _read_key_values(path: Path, separators: str) -> dict[str, str]:
    values: dict[str, str] = {}
    with open(path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith(("#", "!")):
                continue
            match = re.match(f"([^{separators}]+)[{separators}](.*)", line)
            if match is None:
                logger.warning(f"Ignoring malformed line in {path.name}: {line}")
                continue
            values[match.group(1).strip()] = match.group(2).strip()
    return values


def _map_keys(raw: dict[str, str], key_map: dict[str, str]) -> "EnvConfig":
    config: dict[str, Optional[str]] = {field: None for field in set(key_map.values())}
    for key, field in key_map.items():
        if raw.get(key) and not config[field]:
            config[field] = raw[key]
    return config


def load_env_config(env_path: Path = ENV_FILE) -> Optional["EnvConfig"]:
    """Read STRAVA_* values from a .env.local file, or None when it is absent."""
    if not env_path.exists():
        return None
    return _map_keys(_read_key_values(env_path, "="), ENV_KEYS)


def load_properties_config(properties_path: Path = PROPERTIES_FILE) -> Optional["EnvConfig"]:
    """Read strava.* values from a Java-style properties file, or None when it is absent."""
    if not properties_path.exists():
        return None
    return _map_keys(_read_key_values(properties_path, "=:"), PROPERTY_KEYS)


def load_environ_config(environ) -> "EnvConfig":
    return _map_keys(dict(environ), ENV_KEYS)


def _resolve_tz(tz):
    if tz is None:
        return dateutil_tz.tzlocal()
    if isinstance(tz, str):
        tzinfo = dateutil_tz.gettz(tz)
        if tzinfo is None:
            raise ValueError(f"Unknown time zone: {tz}")
        return tzinfo
    return tz


def to_epoch_seconds(day: date, tz=None) -> int:
    """Start of ``day`` in ``tz`` (local time zone by default) as epoch seconds."""
    return arrow.Arrow.fromdate(day, tzinfo=_resolve_tz(tz)).int_timestamp


def to_epoch_bounds(from_date: date, to_date: date, tz=None) -> tuple[int, int]:
    return to_epoch_seconds(from_date, tz), to_epoch_seconds(to_date, tz)


class TimeoutSession(requests.Session):
    """requests session that applies a default timeout to every request."""

    def __init__(self, timeout: float = REQUEST_TIMEOUT_SECONDS):
        super().__init__()
        self.timeout = timeout

    def request(self, method, url, **kwargs):
        kwargs.setdefault("timeout", self.timeout)
        return super().request(method, url, **kwargs)


def make_strava_client(access_token=None, timeout: float = REQUEST_TIMEOUT_SECONDS) -> Client:
    # stravalib's rate limiter would sleep between calls; requests go out unthrottled
    return Client(
        access_token=access_token,
        rate_limit_requests=False,
        requests_session=TimeoutSession(timeout),
    )
