"""Shared test fixtures for phantom-batch."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from src.models.batch_config import BatchConfig

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep PHANTOM_ECS_ variables and stray .env files out of every test."""
    for key in list(os.environ):
        if key.upper().startswith("PHANTOM_ECS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fast_config() -> BatchConfig:
    """Batch config with a tiny retry delay and no progress output."""
    return BatchConfig(
        max_concurrency=2,
        retry_attempts=1,
        retry_delay=0.01,
        show_progress=False,
    )


@pytest.fixture
def sample_config_yaml() -> str:
    """Profile file with two profiles and shared logging/batch sections."""
    return """profiles:
  default:
    region: us-east-1
    output_format: table
    aws_profile: ""
  production:
    region: ap-northeast-1
    output_format: json
    aws_profile: prod-admin
logging:
  level: debug
  format: json
  max_size: 50
  max_backups: 5
batch:
  max_concurrency: 8
  retry_attempts: 2
  retry_delay: 500ms
  show_progress: false
"""
