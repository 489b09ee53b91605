"""Application configuration model using pydantic-settings."""

from __future__ import annotations

from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.models.batch_config import BatchConfig
from src.utils.validators import parse_duration

DEFAULT_REGION = "us-east-1"
DEFAULT_OUTPUT_FORMAT = "table"

VALID_REGIONS = frozenset(
    {
        "us-east-1",
        "us-east-2",
        "us-west-1",
        "us-west-2",
        "af-south-1",
        "ap-east-1",
        "ap-south-1",
        "ap-northeast-1",
        "ap-northeast-2",
        "ap-northeast-3",
        "ap-southeast-1",
        "ap-southeast-2",
        "ca-central-1",
        "eu-central-1",
        "eu-west-1",
        "eu-west-2",
        "eu-west-3",
        "eu-south-1",
        "eu-north-1",
        "me-south-1",
        "sa-east-1",
    }
)


class Config(BaseSettings):
    """Application configuration loaded from environment variables and .env file.

    Every field can be set through a PHANTOM_ECS_-prefixed variable, e.g.
    PHANTOM_ECS_BATCH_MAX_CONCURRENCY=5.
    """

    model_config = SettingsConfigDict(
        env_prefix="PHANTOM_ECS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    region: str = DEFAULT_REGION
    profile: str = ""
    output_format: str = DEFAULT_OUTPUT_FORMAT
    log_level: str = "INFO"
    log_format: str = "text"
    log_file: str | None = None
    log_max_size: int = 100
    log_max_backups: int = 10
    batch_max_concurrency: int = 3
    batch_retry_attempts: int = 3
    batch_retry_delay: float = 2.0
    batch_show_progress: bool = True

    @field_validator("region")
    @classmethod
    def validate_region(cls, value: str) -> str:
        """Region must be a known AWS region."""
        if value not in VALID_REGIONS:
            msg = f"invalid AWS region: {value}"
            raise ValueError(msg)
        return value

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, value: str) -> str:
        """Output format must be json, yaml or table."""
        lower_value = value.lower()
        if lower_value not in {"json", "yaml", "table"}:
            msg = f"invalid output format: {value} (valid: json, yaml, table)"
            raise ValueError(msg)
        return lower_value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Log level must be a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value == "WARN":
            upper_value = "WARNING"
        if upper_value not in valid_levels:
            msg = f"log_level must be one of {', '.join(sorted(valid_levels))}"
            raise ValueError(msg)
        return upper_value

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, value: str) -> str:
        """Log format must be text or json."""
        lower_value = value.lower()
        if lower_value not in {"text", "json"}:
            msg = f"invalid log format: {value} (valid: json, text)"
            raise ValueError(msg)
        return lower_value

    @field_validator("log_max_size", "log_max_backups")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value < 1:
            msg = "log rotation settings must be at least 1"
            raise ValueError(msg)
        return value

    @field_validator("batch_max_concurrency")
    @classmethod
    def validate_batch_max_concurrency(cls, value: int) -> int:
        """Max concurrency must be at least 1."""
        if value < 1:
            msg = "batch_max_concurrency must be at least 1"
            raise ValueError(msg)
        return value

    @field_validator("batch_retry_attempts")
    @classmethod
    def validate_batch_retry_attempts(cls, value: int) -> int:
        """Retry attempts must be non-negative."""
        if value < 0:
            msg = "batch_retry_attempts must be non-negative"
            raise ValueError(msg)
        return value

    @field_validator("batch_retry_delay", mode="before")
    @classmethod
    def validate_batch_retry_delay(cls, value: Any) -> float:
        """Retry delay accepts seconds or duration strings such as "2s"."""
        return parse_duration(value)

    def batch_config(self) -> BatchConfig:
        """Build the batch executor configuration from these settings."""
        return BatchConfig(
            max_concurrency=self.batch_max_concurrency,
            retry_attempts=self.batch_retry_attempts,
            retry_delay=self.batch_retry_delay,
            show_progress=self.batch_show_progress,
        )
