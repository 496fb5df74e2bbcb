"""Tests for the process registry.

The registry keeps processes in creation order, refuses duplicate
pids, and doubles its capacity whenever an insert finds it full.
"""

import pytest

from paging_sim.memory.page_table import PageTable
from paging_sim.process.registry import (
    INITIAL_CAPACITY,
    DuplicateProcessIdError,
    Process,
    ProcessNotFoundError,
    ProcessRegistry,
)


def _process(pid: int, frames: list[int] | None = None) -> Process:
    """Build a process record for testing."""
    table = PageTable(frames if frames is not None else [pid])
    return Process(pid=pid, size=256 * len(table), num_pages=len(table), page_table=table)


class TestRegistryBasics:
    """Verify insert, contains, and find."""

    def test_empty_registry(self) -> None:
        """A new registry has no processes and the initial capacity."""
        registry = ProcessRegistry()
        assert len(registry) == 0
        assert registry.capacity == INITIAL_CAPACITY
        assert not registry

    def test_insert_then_contains(self) -> None:
        """Inserted pids are found."""
        registry = ProcessRegistry()
        registry.insert(_process(1))
        assert registry.contains(1)
        assert not registry.contains(2)

    def test_find_returns_process(self) -> None:
        """find() returns the registered record."""
        registry = ProcessRegistry()
        proc = _process(5, [3, 1])
        registry.insert(proc)
        assert registry.find(5) is proc

    def test_find_missing_returns_none(self) -> None:
        """find() returns None on a miss."""
        registry = ProcessRegistry()
        registry.insert(_process(1))
        assert registry.find(42) is None

    def test_get_missing_raises(self) -> None:
        """get() raises ProcessNotFoundError on a miss."""
        registry = ProcessRegistry()
        with pytest.raises(ProcessNotFoundError, match="Process with ID 9 not found"):
            registry.get(9)

    def test_insertion_order_preserved(self) -> None:
        """Iteration and pids() follow creation order."""
        registry = ProcessRegistry()
        for pid in (3, 1, 2):
            registry.insert(_process(pid))
        assert registry.pids() == [3, 1, 2]
        assert [p.pid for p in registry] == [3, 1, 2]

    def test_duplicate_pid_rejected(self) -> None:
        """Two processes can never share a pid."""
        registry = ProcessRegistry()
        registry.insert(_process(1))
        with pytest.raises(DuplicateProcessIdError):
            registry.insert(_process(1, [9]))
        assert len(registry) == 1

    def test_clear(self) -> None:
        """clear() drops every process."""
        registry = ProcessRegistry()
        registry.insert(_process(1))
        registry.clear()
        assert len(registry) == 0


class TestRegistryGrowth:
    """Verify capacity doubling."""

    def test_no_growth_until_full(self) -> None:
        """Filling exactly to capacity does not grow."""
        registry = ProcessRegistry()
        grew = [registry.insert(_process(pid)) for pid in range(INITIAL_CAPACITY)]
        assert not any(grew)
        assert registry.capacity == INITIAL_CAPACITY

    def test_doubles_when_full(self) -> None:
        """The insert after capacity is reached doubles it."""
        registry = ProcessRegistry()
        for pid in range(INITIAL_CAPACITY):
            registry.insert(_process(pid))
        assert registry.insert(_process(INITIAL_CAPACITY)) is True
        assert registry.capacity == INITIAL_CAPACITY * 2
        assert registry.grow_count == 1

    def test_doubles_again(self) -> None:
        """Capacity keeps doubling: 2 → 4 → 8."""
        registry = ProcessRegistry(initial_capacity=2)
        for pid in range(5):
            registry.insert(_process(pid))
        expected_capacity = 8
        assert registry.capacity == expected_capacity
        assert len(registry) == 5  # noqa: PLR2004


class TestProcess:
    """Verify the process record."""

    def test_process_is_frozen(self) -> None:
        """Processes are immutable after creation."""
        proc = _process(1)
        with pytest.raises(AttributeError):
            proc.size = 1  # type: ignore[misc]

    def test_str_summary(self) -> None:
        """str() gives a one-line summary."""
        proc = _process(4, [0, 1])
        assert str(proc) == "pid=4 size=512 pages=2"
