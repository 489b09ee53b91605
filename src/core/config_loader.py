"""YAML profile file loading and saving for the application config."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError

from src.core.errors import ConfigurationError
from src.models.config import Config

if TYPE_CHECKING:
    from collections.abc import Mapping

# File section -> {file key: Config field}
_PROFILE_KEYS = {
    "region": "region",
    "output_format": "output_format",
    "aws_profile": "profile",
}
_LOGGING_KEYS = {
    "level": "log_level",
    "format": "log_format",
    "filename": "log_file",
    "max_size": "log_max_size",
    "max_backups": "log_max_backups",
}
_BATCH_KEYS = {
    "max_concurrency": "batch_max_concurrency",
    "retry_attempts": "batch_retry_attempts",
    "retry_delay": "batch_retry_delay",
    "show_progress": "batch_show_progress",
}


def _section(data: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        msg = f"section '{name}' in {path} must be a mapping"
        raise ConfigurationError(msg)
    return value


def _pick(section: dict[str, Any], keys: dict[str, str]) -> dict[str, Any]:
    return {field: section[key] for key, field in keys.items() if section.get(key) is not None}


def read_config_file(path: str | Path, profile: str = "default") -> dict[str, Any]:
    """Read a YAML profile file into Config field values.

    The file has a `profiles` mapping keyed by profile name plus shared
    `logging` and `batch` sections.
    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except OSError as exc:
        msg = f"failed to read config file {path}"
        raise ConfigurationError(msg, exc) from exc
    except yaml.YAMLError as exc:
        msg = f"failed to parse config file {path}"
        raise ConfigurationError(msg, exc) from exc

    if not isinstance(data, dict):
        msg = f"config file {path} must contain a mapping"
        raise ConfigurationError(msg)

    profiles = _section(data, "profiles", path)
    if profile not in profiles:
        msg = f"profile '{profile}' not found in {path}"
        raise ConfigurationError(msg)
    profile_section = profiles[profile] or {}
    if not isinstance(profile_section, dict):
        msg = f"profile '{profile}' in {path} must be a mapping"
        raise ConfigurationError(msg)

    values = _pick(profile_section, _PROFILE_KEYS)
    values.update(_pick(_section(data, "logging", path), _LOGGING_KEYS))
    values.update(_pick(_section(data, "batch", path), _BATCH_KEYS))
    return values


def load_config(
    config_file: str | Path | None = None,
    profile: str = "default",
    overrides: Mapping[str, Any] | None = None,
) -> Config:
    """Build the effective configuration.

    Precedence, lowest first: defaults, environment (.env included),
    the profile file, then explicit overrides. None overrides are ignored.
    """
    values: dict[str, Any] = {}
    if config_file is not None:
        values.update(read_config_file(config_file, profile))
    if overrides:
        values.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return Config(**values)
    except ValidationError as exc:
        msg = "invalid configuration"
        raise ConfigurationError(msg, exc) from exc


def save_config_file(config: Config, path: str | Path, profile: str = "default") -> None:
    """Write the configuration as a YAML profile file."""
    document = {
        "profiles": {
            profile: {
                "region": config.region,
                "output_format": config.output_format,
                "aws_profile": config.profile,
            },
        },
        "logging": {
            "level": config.log_level,
            "format": config.log_format,
            "filename": config.log_file or "",
            "max_size": config.log_max_size,
            "max_backups": config.log_max_backups,
        },
        "batch": {
            "max_concurrency": config.batch_max_concurrency,
            "retry_attempts": config.batch_retry_attempts,
            "retry_delay": config.batch_retry_delay,
            "show_progress": config.batch_show_progress,
        },
    }
    try:
        Path(path).write_text(yaml.safe_dump(document, sort_keys=False), encoding="utf-8")
    except OSError as exc:
        msg = f"failed to write config file {path}"
        raise ConfigurationError(msg, exc) from exc
