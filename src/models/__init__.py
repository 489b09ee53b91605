"""Pydantic and dataclass models for phantom-batch."""

from src.models.batch_config import BatchConfig
from src.models.batch_statistics import BatchStatistics
from src.models.config import Config
from src.models.process_result import ProcessResult

__all__ = [
    "BatchConfig",
    "BatchStatistics",
    "Config",
    "ProcessResult",
]
