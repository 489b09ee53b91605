"""Batch executor configuration model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from src.utils.validators import parse_duration


class BatchConfig(BaseModel):
    """Concurrency, retry and progress settings for one batch run.

    retry_attempts counts attempts beyond the first, so 0 means a single
    attempt. retry_delay is in seconds and also accepts strings like "2s".
    """

    model_config = ConfigDict(frozen=True)

    max_concurrency: int = 3
    retry_attempts: int = 3
    retry_delay: float = 2.0
    show_progress: bool = True

    @field_validator("max_concurrency")
    @classmethod
    def validate_max_concurrency(cls, value: int) -> int:
        """Max concurrency must be at least 1."""
        if value < 1:
            msg = "max_concurrency must be at least 1"
            raise ValueError(msg)
        return value

    @field_validator("retry_attempts")
    @classmethod
    def validate_retry_attempts(cls, value: int) -> int:
        """Retry attempts must be non-negative."""
        if value < 0:
            msg = "retry_attempts must be non-negative"
            raise ValueError(msg)
        return value

    @field_validator("retry_delay", mode="before")
    @classmethod
    def validate_retry_delay(cls, value: Any) -> float:
        """Retry delay must be a non-negative duration."""
        return parse_duration(value)
