"""Per-item outcome of a batch run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of one item: success flag, last error and elapsed time."""

    item_key: str
    success: bool
    error: BaseException | None = None
    duration_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "item_key": self.item_key,
            "success": self.success,
            "error": str(self.error) if self.error is not None else None,
            "duration_seconds": round(self.duration_seconds, 3),
        }
