"""Tests for the kernel logging and audit system.

The logger records structured entries for allocation events.  It is
the story of how memory filled up.
"""

import pytest

from paging_sim.logging import LogEntry, Logger, LogLevel


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR


class TestLogEntry:
    """Verify log entry structure."""

    def test_entry_has_fields(self) -> None:
        """A log entry stores level, message, source, and pid."""
        entry = LogEntry(level=LogLevel.INFO, message="allocated", source="frames", pid=3)
        assert entry.level is LogLevel.INFO
        assert entry.message == "allocated"
        assert entry.source == "frames"
        assert entry.pid == 3  # noqa: PLR2004

    def test_entry_is_frozen(self) -> None:
        """Log entries are immutable."""
        entry = LogEntry(level=LogLevel.INFO, message="m", source="s")
        with pytest.raises(AttributeError):
            entry.message = "changed"  # type: ignore[misc]

    def test_str_with_pid(self) -> None:
        """str() names the level, source, message, and pid."""
        entry = LogEntry(level=LogLevel.WARNING, message="rejected", source="kernel", pid=1)
        assert str(entry) == "[WARNING] kernel: rejected (pid 1)"

    def test_str_without_pid(self) -> None:
        """The pid tag is left out when there is no pid."""
        entry = LogEntry(level=LogLevel.INFO, message="booted", source="kernel")
        assert str(entry) == "[INFO] kernel: booted"


class TestLogger:
    """Verify the append-only log buffer."""

    def test_empty_logger(self) -> None:
        """A new logger has no entries."""
        assert Logger().entries == []

    def test_log_appends_in_order(self) -> None:
        """Entries come back in chronological order."""
        logger = Logger()
        logger.log(LogLevel.INFO, "first", source="a")
        logger.log(LogLevel.DEBUG, "second", source="b")
        assert [e.message for e in logger.entries] == ["first", "second"]

    def test_entries_is_a_copy(self) -> None:
        """Mutating the returned list does not touch the log."""
        logger = Logger()
        logger.log(LogLevel.INFO, "kept", source="a")
        logger.entries.clear()
        assert len(logger.entries) == 1

    def test_filter_by_level(self) -> None:
        """min_level keeps entries at or above it."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "noise", source="a")
        logger.log(LogLevel.WARNING, "careful", source="a")
        logger.log(LogLevel.ERROR, "broken", source="a")
        kept = logger.filter(min_level=LogLevel.WARNING)
        assert [e.message for e in kept] == ["careful", "broken"]

    def test_filter_by_source(self) -> None:
        """source keeps only that subsystem's entries."""
        logger = Logger()
        logger.log(LogLevel.INFO, "one", source="frames")
        logger.log(LogLevel.INFO, "two", source="kernel")
        assert [e.message for e in logger.filter(source="frames")] == ["one"]

    def test_filter_without_criteria_returns_copy(self) -> None:
        """No criteria gives every entry in a fresh list."""
        logger = Logger()
        logger.log(LogLevel.INFO, "one", source="a")
        result = logger.filter()
        result.clear()
        assert len(logger.filter()) == 1

    def test_clear(self) -> None:
        """clear() empties the log."""
        logger = Logger()
        logger.log(LogLevel.INFO, "one", source="a")
        logger.clear()
        assert logger.entries == []
