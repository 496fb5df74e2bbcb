"""Memory subsystem — physical frames and per-process page tables.

Re-exports public symbols so callers can write::

    from paging_sim.memory import FramePool, PageTable
"""

from paging_sim.memory.frames import (
    FramePool,
    InsufficientFramesError,
    InsufficientPhysicalMemoryError,
)
from paging_sim.memory.page_table import PageTable, UnmappedPageError

__all__ = [
    "FramePool",
    "InsufficientFramesError",
    "InsufficientPhysicalMemoryError",
    "PageTable",
    "UnmappedPageError",
]
