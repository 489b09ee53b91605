"""Batch statistics aggregation functions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.models.batch_statistics import BatchStatistics

if TYPE_CHECKING:
    from collections.abc import Sequence

    from src.models.process_result import ProcessResult


def calculate_statistics(results: Sequence[ProcessResult]) -> BatchStatistics:
    """Aggregate an ordered result list into batch statistics.

    The average is zero for an empty list. Failed keys keep result order.
    """
    successful = 0
    total_duration = 0.0
    failed_keys: list[str] = []

    for result in results:
        total_duration += result.duration_seconds
        if result.success:
            successful += 1
        else:
            failed_keys.append(result.item_key)

    total = len(results)
    return BatchStatistics(
        total=total,
        successful=successful,
        failed=total - successful,
        total_duration_seconds=total_duration,
        average_duration_seconds=total_duration / total if total else 0.0,
        failed_item_keys=failed_keys,
    )


def format_statistics(stats: BatchStatistics) -> str:
    """Format batch statistics as a human-readable summary string."""
    lines = [
        "=== Batch statistics ===",
        f"  Total: {stats.total}",
        f"  Successful: {stats.successful}",
        f"  Failed: {stats.failed}",
        f"  Total duration: {stats.total_duration_seconds:.3f}s",
        f"  Average duration: {stats.average_duration_seconds:.3f}s",
    ]

    if stats.failed_item_keys:
        lines.append("  Failed items:")
        for key in stats.failed_item_keys:
            lines.append(f"    - {key}")

    return "\n".join(lines)
