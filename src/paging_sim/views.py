"""Inspection views — read-only snapshots of memory and page tables.

The kernel answers "what does memory look like right now?" with plain
data objects; this module also knows how to turn them into the text
reports the shell prints.  Keeping the two apart means the kernel
never formats anything and the formatters never touch kernel state.

Two views exist:

- **MemoryReport** — geometry, free-frame count and percentage, and a
  Free/Occupied status for every frame.
- **PageTableReport** — one process's size, page count, and its
  page → frame rows in page order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from paging_sim.process.registry import Process

_PERCENT = 100.0


class FrameStatus(StrEnum):
    """Whether a frame is still in the free list."""

    FREE = "Free"
    OCCUPIED = "Occupied"


@dataclass(frozen=True)
class MemoryReport:
    """Snapshot of physical memory state."""

    total_size: int
    page_size: int
    total_frames: int
    free_frames: int
    frames: tuple[FrameStatus, ...]

    @property
    def free_percent(self) -> float:
        """Return free frames as a percentage of all frames."""
        if self.total_frames == 0:
            return 0.0
        return self.free_frames / self.total_frames * _PERCENT

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly dict."""
        return {
            "total_size": self.total_size,
            "page_size": self.page_size,
            "total_frames": self.total_frames,
            "free_frames": self.free_frames,
            "free_percent": round(self.free_percent, 2),
            "frames": [str(status) for status in self.frames],
        }


@dataclass(frozen=True)
class PageTableReport:
    """Snapshot of one process's page table."""

    pid: int
    size: int
    num_pages: int
    rows: tuple[tuple[int, int], ...]

    @classmethod
    def from_process(cls, process: Process) -> PageTableReport:
        """Build a report from a registered process."""
        return cls(
            pid=process.pid,
            size=process.size,
            num_pages=process.num_pages,
            rows=tuple(process.page_table.mappings()),
        )

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly dict."""
        return {
            "pid": self.pid,
            "size": self.size,
            "num_pages": self.num_pages,
            "page_table": [{"page": page, "frame": frame} for page, frame in self.rows],
        }


def format_memory_report(report: MemoryReport) -> str:
    """Render the physical memory status report."""
    lines = [
        "=== Physical Memory Status ===",
        f"Total Physical Memory: {report.total_size} bytes",
        f"Page Size: {report.page_size} bytes",
        f"Total Number of Frames: {report.total_frames}",
        f"Free Frames: {report.free_frames} ({report.free_percent:.2f}%)",
        "",
        "Frame Status:",
        "Frame\tStatus",
    ]
    lines.extend(f"{i}\t{status}" for i, status in enumerate(report.frames))
    return "\n".join(lines)


def format_page_table_report(report: PageTableReport) -> str:
    """Render one process's page table."""
    lines = [
        f"Page Table for Process ID {report.pid}:",
        f"Process Size: {report.size} bytes",
        f"Number of Pages: {report.num_pages}",
        "Page\tFrame",
    ]
    lines.extend(f"{page}\t{frame}" for page, frame in report.rows)
    return "\n".join(lines)


def format_process_created(process: Process) -> str:
    """Render the confirmation shown after a successful create."""
    return "\n".join(
        [
            "Process created successfully!",
            f"Process ID: {process.pid}",
            f"Process Size: {process.size} bytes",
            f"Number of Pages: {process.num_pages}",
        ]
    )


def format_hexdump(data: bytes, *, base: int = 0, width: int = 16) -> str:
    """Render bytes as ``offset  hex bytes`` lines."""
    lines = []
    for start in range(0, len(data), width):
        chunk = data[start : start + width]
        lines.append(f"{base + start:08x}  {chunk.hex(' ')}")
    return "\n".join(lines)
