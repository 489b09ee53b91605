"""Service protocols defining interfaces for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

    from src.core.context import BatchContext
    from src.models.process_result import ProcessResult


class Processor(Protocol):
    """Unit of work run once per item key.

    Must be safe to call from several threads with different keys and
    should check the context during long-running operations. Failure is
    signalled by raising.
    """

    def process(self, ctx: BatchContext, item_key: str) -> None: ...


class ProgressSink(Protocol):
    """Receives one notification per completed item, in completion order."""

    def advance(self, result: ProcessResult) -> None: ...

    def close(self) -> None: ...


@dataclass(frozen=True)
class ProcessorFunc:
    """Adapt a plain callable to the Processor protocol."""

    func: Callable[[BatchContext, str], None]

    def process(self, ctx: BatchContext, item_key: str) -> None:
        self.func(ctx, item_key)
