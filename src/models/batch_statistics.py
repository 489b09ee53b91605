"""Aggregate statistics model for a completed batch run."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BatchStatistics(BaseModel):
    """Statistics derived from a batch's ordered result list."""

    model_config = ConfigDict(frozen=True)

    total: int
    successful: int
    failed: int
    total_duration_seconds: float
    average_duration_seconds: float
    failed_item_keys: list[str] = []
