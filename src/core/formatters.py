"""Rendering of batch results as table, JSON or YAML."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import yaml

from src.core.statistics import format_statistics

if TYPE_CHECKING:
    from collections.abc import Sequence

    from src.models.batch_statistics import BatchStatistics
    from src.models.process_result import ProcessResult

OUTPUT_FORMATS = ("table", "json", "yaml")

_MAX_ERROR_WIDTH = 60


def _as_document(results: Sequence[ProcessResult], stats: BatchStatistics) -> dict[str, Any]:
    return {
        "results": [result.to_dict() for result in results],
        "statistics": stats.model_dump(),
    }


def _format_table(results: Sequence[ProcessResult], stats: BatchStatistics) -> str:
    headers = ("ITEM", "STATUS", "DURATION", "ERROR")
    rows = []
    for result in results:
        error = str(result.error) if result.error is not None else ""
        if len(error) > _MAX_ERROR_WIDTH:
            error = error[: _MAX_ERROR_WIDTH - 3] + "..."
        rows.append(
            (
                result.item_key,
                "OK" if result.success else "FAILED",
                f"{result.duration_seconds:.3f}s",
                error,
            )
        )

    widths = [len(h) for h in headers]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row, strict=True)]

    def line(cells: Sequence[str]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths, strict=True)).rstrip()

    lines = [line(headers), line(["-" * w for w in widths])]
    lines.extend(line(row) for row in rows)
    lines.append("")
    lines.append(format_statistics(stats))
    return "\n".join(lines)


def format_results(
    results: Sequence[ProcessResult],
    stats: BatchStatistics,
    output_format: str = "table",
) -> str:
    """Render results and statistics in the requested output format."""
    if output_format == "json":
        return json.dumps(_as_document(results, stats), indent=2)
    if output_format == "yaml":
        return yaml.safe_dump(_as_document(results, stats), sort_keys=False).rstrip("\n")
    if output_format == "table":
        return _format_table(results, stats)
    msg = f"output_format must be one of {', '.join(OUTPUT_FORMATS)}"
    raise ValueError(msg)
