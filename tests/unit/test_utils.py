"""Unit tests for utility modules.

Tests pure functions and simple data classes -- no network, little mocking.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import TYPE_CHECKING

import pytest

from src.models.process_result import ProcessResult
from src.utils.logger import configure_logging, get_logger
from src.utils.progress import ClickProgressBar, NullProgress, ProgressTracker
from src.utils.validators import is_valid_url, parse_duration, split_item_keys

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

# ──────────────────────────────────────────────────────────────────────
# Module 1: utils/validators.py
# ──────────────────────────────────────────────────────────────────────


class TestIsValidUrl:
    """Tests for is_valid_url."""

    def test_https(self) -> None:
        assert is_valid_url("https://example.com") is True

    def test_with_port_and_path(self) -> None:
        assert is_valid_url("http://localhost:8080/health") is True

    def test_ftp_scheme_fails(self) -> None:
        assert is_valid_url("ftp://files.example.com") is False

    def test_missing_scheme(self) -> None:
        assert is_valid_url("orders/health") is False

    def test_empty_string(self) -> None:
        assert is_valid_url("") is False


class TestParseDuration:
    """Tests for parse_duration."""

    @pytest.mark.parametrize(
        ("raw", "seconds"),
        [
            ("2s", 2.0),
            ("500ms", 0.5),
            ("1m", 60.0),
            ("1h", 3600.0),
            ("1m30s", 90.0),
            ("1.5s", 1.5),
            (" 3S ", 3.0),
            ("10", 10.0),
            (4, 4.0),
            (0.25, 0.25),
        ],
    )
    def test_valid(self, raw: str | float, seconds: float) -> None:
        assert parse_duration(raw) == pytest.approx(seconds)

    @pytest.mark.parametrize("raw", ["", "abc", "2x", "s", "2s garbage", "-1", "-2s"])
    def test_invalid(self, raw: str) -> None:
        with pytest.raises(ValueError):
            parse_duration(raw)

    def test_bool_rejected(self) -> None:
        with pytest.raises(ValueError):
            parse_duration(True)


class TestSplitItemKeys:
    """Tests for split_item_keys."""

    def test_comma_separated(self) -> None:
        assert split_item_keys(("a,b,c",)) == ["a", "b", "c"]

    def test_repeated_option(self) -> None:
        assert split_item_keys(("a,b", "c")) == ["a", "b", "c"]

    def test_blanks_dropped(self) -> None:
        assert split_item_keys((" a , ,b ", "")) == ["a", "b"]

    def test_duplicates_kept(self) -> None:
        assert split_item_keys(("a,a",)) == ["a", "a"]


# ──────────────────────────────────────────────────────────────────────
# Module 2: utils/progress.py
# ──────────────────────────────────────────────────────────────────────


class TestProgressTracker:
    """Tests for ProgressTracker."""

    def test_initial_state(self) -> None:
        tracker = ProgressTracker(total=10)
        assert tracker.total == 10
        assert tracker.processed == 0
        assert tracker.successful == 0
        assert tracker.failed == 0
        assert tracker.errors == []

    def test_record_success(self) -> None:
        tracker = ProgressTracker(total=5)
        tracker.record_success()
        assert tracker.processed == 1
        assert tracker.successful == 1

    def test_record_failure(self) -> None:
        tracker = ProgressTracker(total=5)
        tracker.record_failure("something broke")
        assert tracker.processed == 1
        assert tracker.failed == 1
        assert tracker.errors == ["something broke"]

    def test_advance_with_results(self) -> None:
        tracker = ProgressTracker(total=2)
        tracker.advance(ProcessResult("a", True))
        tracker.advance(ProcessResult("b", False, RuntimeError("down")))
        assert tracker.successful == 1
        assert tracker.failed == 1
        assert tracker.errors == ["b: down"]

    def test_progress_percentage_zero_total(self) -> None:
        tracker = ProgressTracker(total=0)
        assert tracker.progress_percentage == 100.0

    def test_progress_percentage_half(self) -> None:
        tracker = ProgressTracker(total=10)
        for _ in range(5):
            tracker.record_success()
        assert tracker.progress_percentage == pytest.approx(50.0)

    def test_concurrent_advance(self) -> None:
        tracker = ProgressTracker(total=400, every_n=1000)

        def worker() -> None:
            for _ in range(100):
                tracker.advance(ProcessResult("x", True))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert tracker.processed == 400
        assert tracker.successful == 400

    def test_summary(self) -> None:
        tracker = ProgressTracker(total=2)
        tracker.record_success()
        tracker.record_failure("err")
        summary = tracker.summary()
        assert summary["processed"] == 2
        assert summary["successful"] == 1
        assert summary["failed"] == 1
        assert summary["errors"] == ["err"]
        assert summary["duration_seconds"] >= 0


class TestOtherSinks:
    """Tests for NullProgress and ClickProgressBar."""

    def test_null_progress_accepts_everything(self) -> None:
        sink = NullProgress()
        sink.advance(ProcessResult("a", True))
        sink.close()

    def test_click_progress_bar(self) -> None:
        bar = ClickProgressBar(total=2)
        bar.advance(ProcessResult("a", True))
        bar.advance(ProcessResult("b", False))
        bar.close()


# ──────────────────────────────────────────────────────────────────────
# Module 3: utils/logger.py
# ──────────────────────────────────────────────────────────────────────


@pytest.fixture
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.mark.usefixtures("restore_logging")
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_level(self) -> None:
        configure_logging("warning")
        assert logging.getLogger().level == logging.WARNING

    def test_json_to_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "phantom.log"
        configure_logging("INFO", log_format="json", log_file=str(log_file))

        get_logger("tests").info("batch_started", item_count=3)
        for handler in logging.getLogger().handlers:
            handler.flush()

        line = log_file.read_text().strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "batch_started"
        assert record["item_count"] == 3
        assert record["level"] == "info"

    def test_level_filters_file_output(self, tmp_path: Path) -> None:
        log_file = tmp_path / "phantom.log"
        configure_logging("ERROR", log_format="json", log_file=str(log_file))

        get_logger("tests").info("ignored_event")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "ignored_event" not in log_file.read_text()

    def test_invalid_format(self) -> None:
        with pytest.raises(ValueError, match="log_format"):
            configure_logging("INFO", log_format="xml")

    def test_invalid_level(self) -> None:
        with pytest.raises(ValueError, match="invalid log level"):
            configure_logging("chatty")
