"""Guided lessons on frames and paging.

Each lesson reads the **live** simulator through real syscalls and
explains what it finds, so the numbers on screen are the ones the
operator configured.  Lessons never create processes: frames cannot
be given back, so a lesson that allocated would eat the operator's
memory.

Lessons are written for someone who knows basic Python but is new to
operating-system memory management.  Each one:

1. Opens with a **real-world analogy**.
2. Walks through **numbered steps** using actual syscalls.
3. Ends with a **summary** and a pointer to the next lesson.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from paging_sim.syscalls import SyscallError, SyscallNumber

if TYPE_CHECKING:
    from paging_sim.kernel import Kernel

_LESSON_ORDER: list[str] = ["frames", "paging"]


class TutorialRunner:
    """Run lessons that teach paging concepts with real syscalls."""

    def __init__(self, kernel: Kernel) -> None:
        """Create a tutorial runner backed by a running kernel."""
        self._kernel = kernel
        self._lessons: dict[str, str] = {
            "frames": "Frames — how physical memory is cut into equal slots",
            "paging": "Paging — how a process's pages map onto frames",
        }

    def list_lessons(self) -> list[str]:
        """Return sorted list of available lesson names."""
        return sorted(self._lessons)

    def describe(self, name: str) -> str:
        """Return the one-line description of a lesson."""
        return self._lessons[name]

    def run(self, name: str) -> str:
        """Run a lesson by name and return its formatted output.

        Raises:
            KeyError: If the lesson name is not recognised.

        """
        runners = {
            "frames": self._lesson_frames,
            "paging": self._lesson_paging,
        }
        runner = runners.get(name)
        if runner is None:
            msg = f"Unknown lesson: {name}"
            raise KeyError(msg)
        return runner()

    def run_all(self) -> str:
        """Run all lessons in order and return combined output."""
        parts: list[str] = []
        for name in _LESSON_ORDER:
            parts.append(self.run(name))
            parts.append("")
        return "\n".join(parts)

    # -- Individual lessons ---------------------------------------------------

    def _lesson_frames(self) -> str:
        """Teach how memory splits into frames and how free frames are tracked."""
        lines: list[str] = [
            "=== Lesson: Frames ===",
            "",
            "Physical memory is like a warehouse with numbered shelves, all",
            "the same size. Each shelf is a 'frame'. The OS keeps a list of",
            "empty shelves and hands them out when someone needs space.",
            "",
        ]

        lines.append("Step 1: Measure the warehouse")
        try:
            mem: dict[str, int] = self._kernel.syscall(SyscallNumber.SYS_MEMORY_INFO)
            lines.append(f"  Memory size: {mem['total_size']} bytes")
            lines.append(f"  Frame size:  {mem['page_size']} bytes")
            lines.append(
                f"  {mem['total_size']} / {mem['page_size']} = {mem['total_frames']} frames"
            )
            lines.append("")
            lines.append("Step 2: Count the empty shelves")
            lines.append(f"  Free frames: {mem['free_frames']} of {mem['total_frames']}")
        except SyscallError as e:
            lines.append(f"  (Error: {e})")
        lines.append("")

        lines.extend(
            [
                "Why powers of two? An address splits into (frame, offset) by",
                "taking its high and low bits, with no division needed.",
                "",
                "Summary: memory is cut into equal frames, and the free list",
                "says which ones are still empty. Frames here are never given",
                "back, so watch the free count only go down.",
                "",
                "Next up: 'paging' — learn how a process's pages land in frames.",
            ]
        )
        return "\n".join(lines)

    def _lesson_paging(self) -> str:
        """Teach page tables using whatever processes currently exist."""
        lines: list[str] = [
            "=== Lesson: Paging ===",
            "",
            "A process is like a book torn into equal chapters (pages). Each",
            "chapter goes on whatever shelf is free, and a table of contents",
            "(the page table) remembers which shelf holds which chapter.",
            "",
        ]

        lines.append("Step 1: Look at the processes that exist")
        try:
            procs: list[dict[str, object]] = self._kernel.syscall(
                SyscallNumber.SYS_LIST_PROCESSES
            )
        except SyscallError as e:
            lines.append(f"  (Error: {e})")
            procs = []

        if not procs:
            lines.append("  No processes yet. Try 'create 1 <size>' and run this again.")
        else:
            first = procs[0]
            lines.append(f"  {len(procs)} process(es). Taking pid {first['pid']} as an example.")
            lines.append("")
            lines.append("Step 2: Read its page table")
            lines.append(
                f"  {first['size']} bytes need {first['num_pages']} page(s), rounding up."
            )
            frames = first["frames"]
            assert isinstance(frames, list)  # noqa: S101
            lines.extend(f"    page {page} -> frame {frame}" for page, frame in enumerate(frames))
            lines.append("  The frames need not be next to each other: the page table")
            lines.append("  is what makes the process look contiguous.")
        lines.append("")

        lines.extend(
            [
                "Summary: the page table maps logical page i to a physical frame.",
                "Any free frame will do, so there is no external fragmentation.",
                "",
                "That's all the lessons. Try 'mem' and 'pt <pid>' to explore.",
            ]
        )
        return "\n".join(lines)
