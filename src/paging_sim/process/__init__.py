"""Process subsystem — process records and the process registry.

Re-exports public symbols so callers can write::

    from paging_sim.process import Process, ProcessRegistry
"""

from paging_sim.process.registry import (
    INITIAL_CAPACITY,
    DuplicateProcessIdError,
    NoProcessesError,
    Process,
    ProcessNotFoundError,
    ProcessRegistry,
)

__all__ = [
    "INITIAL_CAPACITY",
    "DuplicateProcessIdError",
    "NoProcessesError",
    "Process",
    "ProcessNotFoundError",
    "ProcessRegistry",
]
