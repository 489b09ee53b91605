"""Bounded-concurrency batch processor with retries and cancellation."""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import TYPE_CHECKING, cast

import structlog

from src.core.context import BatchContext
from src.core.errors import ConfigurationError
from src.models.process_result import ProcessResult
from src.utils.progress import NullProgress
from src.utils.retry import process_with_retry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from src.models.batch_config import BatchConfig
    from src.services.protocols import Processor, ProgressSink

logger = structlog.get_logger(__name__)


class BatchProcessor:
    """Runs one processor over many item keys.

    At most config.max_concurrency items run at once. Each item goes
    through the retry wrapper and lands in the result slot matching its
    input position. Item failures never abort the batch; they are reported
    in the returned results.
    """

    def __init__(
        self,
        config: BatchConfig,
        processor: Processor,
        progress: ProgressSink | None = None,
    ) -> None:
        self.config = config
        self.processor = processor
        self.progress: ProgressSink = progress if progress is not None else NullProgress()

    def _validate_config(self) -> None:
        if self.config.max_concurrency < 1:
            msg = f"max_concurrency must be at least 1, got {self.config.max_concurrency}"
            raise ConfigurationError(msg)
        if self.config.retry_attempts < 0:
            msg = f"retry_attempts must be non-negative, got {self.config.retry_attempts}"
            raise ConfigurationError(msg)
        if self.config.retry_delay < 0:
            msg = f"retry_delay must be non-negative, got {self.config.retry_delay}"
            raise ConfigurationError(msg)

    def process_all(
        self,
        item_keys: Sequence[str],
        ctx: BatchContext | None = None,
    ) -> list[ProcessResult]:
        """Process every item key and return results in input order.

        Raises ConfigurationError before scheduling anything if the
        configuration is invalid. Otherwise always returns one result per
        key; items that never ran because the context ended carry the
        context's cancellation error.
        """
        self._validate_config()

        keys = list(item_keys)
        if not keys:
            return []

        ctx = ctx if ctx is not None else BatchContext.background()
        progress: ProgressSink = self.progress if self.config.show_progress else NullProgress()
        results: list[ProcessResult | None] = [None] * len(keys)

        logger.info(
            "batch_started",
            item_count=len(keys),
            max_concurrency=self.config.max_concurrency,
            retry_attempts=self.config.retry_attempts,
        )

        def run_item(index: int, item_key: str) -> None:
            # Each worker writes only its own slot.
            cancelled = ctx.error()
            if cancelled is not None:
                result = ProcessResult(item_key=item_key, success=False, error=cancelled)
            else:
                start = time.monotonic()
                try:
                    result = process_with_retry(
                        ctx,
                        self.processor,
                        item_key,
                        self.config.retry_attempts,
                        self.config.retry_delay,
                    )
                except BaseException as exc:
                    # Not retried, but still this item's failure.
                    result = ProcessResult(
                        item_key=item_key,
                        success=False,
                        error=exc,
                        duration_seconds=time.monotonic() - start,
                    )
            results[index] = result

            if not result.success:
                logger.warning(
                    "batch_item_failed",
                    item=item_key,
                    error=str(result.error),
                    duration_seconds=round(result.duration_seconds, 3),
                )
            self._notify(progress, result)

        try:
            workers = min(self.config.max_concurrency, len(keys))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="batch-worker") as executor:
                futures = [executor.submit(run_item, index, item_key) for index, item_key in enumerate(keys)]
                wait(futures)
        finally:
            self._close(progress)

        successful = sum(1 for result in results if result is not None and result.success)
        logger.info(
            "batch_completed",
            item_count=len(keys),
            successful=successful,
            failed=len(keys) - successful,
        )
        return cast("list[ProcessResult]", results)

    @staticmethod
    def _notify(progress: ProgressSink, result: ProcessResult) -> None:
        try:
            progress.advance(result)
        except Exception as exc:
            logger.warning("progress_sink_failed", item=result.item_key, error=str(exc))

    @staticmethod
    def _close(progress: ProgressSink) -> None:
        try:
            progress.close()
        except Exception as exc:
            logger.warning("progress_sink_close_failed", error=str(exc))
