"""Progress tracking utilities for batch operations."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import click

from src.utils.logger import get_logger

if TYPE_CHECKING:
    from src.models.process_result import ProcessResult

logger = get_logger(__name__)


class NullProgress:
    """Progress sink that ignores every notification."""

    def advance(self, result: ProcessResult) -> None:
        pass

    def close(self) -> None:
        pass


@dataclass
class ProgressTracker:
    """Track progress of batch operations and log it every N items."""

    total: int
    every_n: int = 10
    processed: int = 0
    successful: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)
    start_time: float = field(default_factory=time.monotonic)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record_success(self) -> None:
        """Record a successful operation."""
        with self._lock:
            self.processed += 1
            self.successful += 1

    def record_failure(self, error: str) -> None:
        """Record a failed operation."""
        with self._lock:
            self.processed += 1
            self.failed += 1
            self.errors.append(error)

    def advance(self, result: ProcessResult) -> None:
        """Record one completed item and log progress when due."""
        if result.success:
            self.record_success()
        else:
            self.record_failure(f"{result.item_key}: {result.error}")
        self.log_progress()

    def close(self) -> None:
        logger.info("batch_progress_finished", **self.summary())

    @property
    def elapsed_seconds(self) -> float:
        """Time elapsed since start."""
        return time.monotonic() - self.start_time

    @property
    def progress_percentage(self) -> float:
        """Percentage of total items processed."""
        if self.total == 0:
            return 100.0
        return (self.processed / self.total) * 100.0

    def log_progress(self) -> None:
        """Log progress every N items and on the last one."""
        with self._lock:
            processed = self.processed
            due = processed % self.every_n == 0 or processed == self.total
            successful = self.successful
            failed = self.failed
        if due:
            logger.info(
                "batch_progress",
                processed=processed,
                total=self.total,
                successful=successful,
                failed=failed,
                percentage=f"{self.progress_percentage:.1f}%",
                elapsed=f"{self.elapsed_seconds:.1f}s",
            )

    def summary(self) -> dict[str, Any]:
        """Return summary statistics."""
        with self._lock:
            return {
                "processed": self.processed,
                "successful": self.successful,
                "failed": self.failed,
                "duration_seconds": round(self.elapsed_seconds, 2),
                "errors": list(self.errors),
            }


class ClickProgressBar:
    """Terminal progress bar rendered with click."""

    def __init__(self, total: int, label: str = "Processing services...") -> None:
        self._lock = threading.Lock()
        self._bar = click.progressbar(
            length=total,
            label=label,
            width=15,
            show_pos=True,
            show_eta=True,
            file=click.get_text_stream("stderr"),
        )
        self._bar.__enter__()

    def advance(self, result: ProcessResult) -> None:
        with self._lock:
            self._bar.update(1)

    def close(self) -> None:
        with self._lock:
            self._bar.__exit__(None, None, None)
