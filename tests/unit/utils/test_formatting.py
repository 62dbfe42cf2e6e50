"""Unit tests for console formatting helpers."""

import logging
from collections.abc import Iterator

import pytest
from rich.logging import RichHandler
from rich.table import Table
from wpslim.utils.formatting import (
    configure_logging,
    create_summary_table,
    format_percent,
    format_size,
)


class TestFormatSize:
    """Tests for format_size function."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0 B"),
            (1023, "1023 B"),
            (1024, "1.00 KB"),
            (1536, "1.50 KB"),
            (5 * 1024 * 1024, "5.00 MB"),
            (3 * 1024 * 1024 * 1024, "3.00 GB"),
            (-2048, "-2.00 KB"),
        ],
    )
    def test_units(self, size: int, expected: str) -> None:
        """Sizes are scaled to the largest fitting unit."""
        assert format_size(size) == expected


class TestFormatPercent:
    """Tests for format_percent function."""

    def test_two_decimals(self) -> None:
        """Percentages have two decimals."""
        assert format_percent(1, 4) == "25.00"
        assert format_percent(1, 3) == "33.33"
        assert format_percent(2, 3) == "66.67"

    def test_zero_denominator(self) -> None:
        """A zero denominator gives 0.00."""
        assert format_percent(0, 0) == "0.00"


def test_create_summary_table() -> None:
    """Summary tables have two headerless columns."""
    table = create_summary_table("Summary")

    assert isinstance(table, Table)
    assert table.title == "Summary"
    assert table.show_header is False
    assert len(table.columns) == 2


class TestConfigureLogging:
    """Tests for configure_logging function."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self) -> Iterator[None]:
        """Restore the root logger after each test."""
        root = logging.getLogger()
        level, handlers = root.level, root.handlers[:]
        yield
        root.setLevel(level)
        root.handlers[:] = handlers

    def test_verbose_logs_debug(self) -> None:
        """Verbose mode enables DEBUG records."""
        configure_logging(verbose=True)

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert any(isinstance(h, RichHandler) for h in root.handlers)

    def test_default_logs_warnings(self) -> None:
        """Without verbose only warnings and errors are shown."""
        configure_logging()

        assert logging.getLogger().level == logging.WARNING
