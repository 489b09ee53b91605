"""Retry logic with structured logging using tenacity."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_fixed,
)

from src.core.errors import BatchCancelledError
from src.models.process_result import ProcessResult
from src.utils.logger import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from src.core.context import BatchContext
    from src.services.protocols import Processor

logger = get_logger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    # Cancellation ends the sequence; BaseException (KeyboardInterrupt etc.) propagates.
    return isinstance(exc, Exception) and not isinstance(exc, BatchCancelledError)


def _log_retry(item_key: str) -> Callable[[RetryCallState], None]:
    def before_sleep(retry_state: RetryCallState) -> None:
        """Log retry attempt with structured context."""
        logger.warning(
            "retrying_item",
            item=item_key,
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else "unknown",
        )

    return before_sleep


def process_with_retry(
    ctx: BatchContext,
    processor: Processor,
    item_key: str,
    retry_attempts: int,
    retry_delay: float,
) -> ProcessResult:
    """Run the processor for one item, retrying failures.

    Makes at most 1 + retry_attempts attempts with a fixed delay between
    them. The delay is waited on the context, so cancellation interrupts
    it and becomes the reported error. A final failure keeps the last
    attempt's error. Duration covers every attempt and delay.
    """
    start = time.monotonic()
    error: Exception | None = None

    retrying = Retrying(
        stop=stop_after_attempt(retry_attempts + 1),
        wait=wait_fixed(retry_delay),
        retry=retry_if_exception(_is_retryable),
        sleep=ctx.sleep,
        before_sleep=_log_retry(item_key),
        reraise=True,
    )

    try:
        for attempt in retrying:
            with attempt:
                ctx.raise_if_cancelled()
                processor.process(ctx, item_key)
    except Exception as exc:
        error = exc

    return ProcessResult(
        item_key=item_key,
        success=error is None,
        error=error,
        duration_seconds=time.monotonic() - start,
    )
