"""Input parsing and validation utilities."""

from __future__ import annotations

import re
from datetime import timedelta
from urllib.parse import urlparse

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(h|ms|m|s)")
_DURATION_UNITS = {"h": 3600.0, "m": 60.0, "s": 1.0, "ms": 0.001}


def is_valid_url(url: str) -> bool:
    """Check if a string is a valid HTTP/HTTPS URL."""
    try:
        parsed = urlparse(url)
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)
    except ValueError:
        return False


def parse_duration(value: str | float | timedelta) -> float:
    """Parse a duration into seconds.

    Accepts plain numbers (seconds) or strings such as "2s", "500ms",
    "1m30s" and "1h".
    """
    if isinstance(value, bool):
        msg = f"invalid duration: {value!r}"
        raise ValueError(msg)
    if isinstance(value, timedelta):
        seconds = value.total_seconds()
    elif isinstance(value, (int, float)):
        seconds = float(value)
    elif not isinstance(value, str):
        msg = f"invalid duration: {value!r}"
        raise ValueError(msg)
    else:
        text = value.strip().lower()
        if not text:
            msg = "duration must not be empty"
            raise ValueError(msg)
        try:
            seconds = float(text)
        except ValueError:
            parts = _DURATION_PART.findall(text)
            if not parts or "".join(n + u for n, u in parts) != text:
                msg = f"invalid duration: {value!r}"
                raise ValueError(msg) from None
            seconds = sum(float(number) * _DURATION_UNITS[unit] for number, unit in parts)
    if seconds < 0:
        msg = "duration must be non-negative"
        raise ValueError(msg)
    return seconds


def split_item_keys(values: tuple[str, ...] | list[str]) -> list[str]:
    """Flatten comma-separated option values into item keys, dropping blanks."""
    keys: list[str] = []
    for value in values:
        keys.extend(part.strip() for part in value.split(",") if part.strip())
    return keys
