"""Process records and the process registry.

In this simulator a process is nothing more than a block of memory
with a name tag: an id, a size, and the page table that says where
its pages physically live.  Once created it never changes and never
runs — it just occupies frames so you can watch memory fill up.

The registry is the kernel's list of every process ever created.  It
mimics a C-style dynamic array: it starts with room for
``INITIAL_CAPACITY`` entries and doubles its capacity whenever an
insert finds it full.  Python lists grow on their own, so the
capacity here is bookkeeping you can observe (``ps`` shows it), not
something the interpreter needs.

Lookups are linear scans in insertion order, the same way the list
would be searched by hand.
"""

from collections.abc import Iterator
from dataclasses import dataclass

from paging_sim.memory.page_table import PageTable

INITIAL_CAPACITY = 10


class DuplicateProcessIdError(Exception):
    """Raise when a pid is already taken by a registered process."""


class ProcessNotFoundError(Exception):
    """Raise when no registered process has the requested pid."""


class NoProcessesError(Exception):
    """Raise when a lookup is attempted on an empty registry."""


@dataclass(frozen=True)
class Process:
    """A created process and the frames backing it.

    Attributes:
        pid: Operator-chosen identifier, unique within the registry.
        size: Process size in bytes.
        num_pages: Pages needed to hold ``size`` bytes.
        page_table: Logical page → physical frame mapping.

    """

    pid: int
    size: int
    num_pages: int
    page_table: PageTable

    def __str__(self) -> str:
        """Format as a one-line summary."""
        return f"pid={self.pid} size={self.size} pages={self.num_pages}"


class ProcessRegistry:
    """Insertion-ordered collection of processes with unique pids."""

    def __init__(self, *, initial_capacity: int = INITIAL_CAPACITY) -> None:
        """Create an empty registry.

        Args:
            initial_capacity: Slots available before the first doubling.

        """
        self._processes: list[Process] = []
        self._capacity = initial_capacity
        self._grow_count = 0

    @property
    def capacity(self) -> int:
        """Return the current (simulated) slot capacity."""
        return self._capacity

    @property
    def grow_count(self) -> int:
        """Return how many times the capacity has doubled."""
        return self._grow_count

    def contains(self, pid: int) -> bool:
        """Return True if a process with *pid* is registered."""
        return any(p.pid == pid for p in self._processes)

    def insert(self, process: Process) -> bool:
        """Append a process, doubling the capacity first if full.

        Args:
            process: The process to register.

        Returns:
            True if the capacity had to grow for this insert.

        Raises:
            DuplicateProcessIdError: If the pid is already registered.

        """
        if self.contains(process.pid):
            msg = f"Process ID {process.pid} is already in use"
            raise DuplicateProcessIdError(msg)

        grew = len(self._processes) >= self._capacity
        if grew:
            self._capacity *= 2
            self._grow_count += 1
        self._processes.append(process)
        return grew

    def find(self, pid: int) -> Process | None:
        """Return the process with *pid*, or None."""
        for process in self._processes:
            if process.pid == pid:
                return process
        return None

    def get(self, pid: int) -> Process:
        """Return the process with *pid*.

        Raises:
            ProcessNotFoundError: If no such process is registered.

        """
        process = self.find(pid)
        if process is None:
            msg = f"Process with ID {pid} not found."
            raise ProcessNotFoundError(msg)
        return process

    def pids(self) -> list[int]:
        """Return registered pids in insertion order."""
        return [p.pid for p in self._processes]

    def clear(self) -> None:
        """Drop every process and its page table (shutdown only)."""
        self._processes.clear()

    def __len__(self) -> int:
        """Return the number of registered processes."""
        return len(self._processes)

    def __iter__(self) -> Iterator[Process]:
        """Iterate over processes in insertion order."""
        return iter(list(self._processes))
