"""System call interface — the gateway between the shell and the kernel.

In a real OS, user programs cannot reach into kernel memory.  They
trigger a **trap** that switches to kernel mode, where a dispatcher
examines the syscall number and routes to the right handler.

Our simulation mirrors this pattern:

1. ``SyscallNumber`` — an enum of every operation the kernel offers.
2. ``SyscallError`` — a user-facing exception for syscall failures.
   Kernel errors (``DuplicateProcessIdError``,
   ``InsufficientPhysicalMemoryError``, ...) are re-raised as
   ``SyscallError`` chained to the original, so callers branch on one
   type but the precise cause stays on ``__cause__``.
3. ``dispatch_syscall()`` — the trap handler and the *only* entry
   point the shell and web UI use.

Handlers return data (dicts, lists, reports), never formatted text.
"""

from enum import IntEnum
from typing import Any

from paging_sim.geometry import InvalidGeometryError
from paging_sim.memory.frames import InsufficientPhysicalMemoryError
from paging_sim.memory.page_table import UnmappedPageError
from paging_sim.process.registry import (
    DuplicateProcessIdError,
    NoProcessesError,
    ProcessNotFoundError,
)


class SyscallNumber(IntEnum):
    """Enumerate every system call the kernel supports."""

    # Process operations
    SYS_CREATE_PROCESS = 1
    SYS_LIST_PROCESSES = 2
    SYS_PROCESS_EXISTS = 3
    SYS_PAGE_TABLE = 4
    SYS_TRANSLATE = 5

    # Memory operations
    SYS_MEMORY_INFO = 20
    SYS_MEMORY_REPORT = 21
    SYS_READ_FRAME = 22

    # Logging operations
    SYS_READ_LOG = 50

    # System info
    SYS_SYSINFO = 80


class SyscallError(Exception):
    """Raise when a system call fails.

    The original kernel exception is available as ``__cause__``.
    """


def dispatch_syscall(kernel: Any, number: SyscallNumber, **kwargs: Any) -> Any:
    """Route a syscall to the appropriate kernel handler.

    Args:
        kernel: The running kernel instance.
        number: The syscall number.
        **kwargs: Syscall-specific arguments.

    Returns:
        The handler's return value.

    Raises:
        SyscallError: If the syscall is unknown or the handler fails.

    """
    handlers: dict[SyscallNumber, Any] = {
        SyscallNumber.SYS_CREATE_PROCESS: _sys_create_process,
        SyscallNumber.SYS_LIST_PROCESSES: _sys_list_processes,
        SyscallNumber.SYS_PROCESS_EXISTS: _sys_process_exists,
        SyscallNumber.SYS_PAGE_TABLE: _sys_page_table,
        SyscallNumber.SYS_TRANSLATE: _sys_translate,
        SyscallNumber.SYS_MEMORY_INFO: _sys_memory_info,
        SyscallNumber.SYS_MEMORY_REPORT: _sys_memory_report,
        SyscallNumber.SYS_READ_FRAME: _sys_read_frame,
        SyscallNumber.SYS_READ_LOG: _sys_read_log,
        SyscallNumber.SYS_SYSINFO: _sys_sysinfo,
    }

    handler = handlers.get(number)
    if handler is None:
        msg = f"Unknown syscall: {number}"
        raise SyscallError(msg)
    return handler(kernel, **kwargs)


# -- Process syscall handlers --------------------------------------------------


def _sys_create_process(kernel: Any, **kwargs: Any) -> Any:
    """Create a process and return it."""
    try:
        return kernel.create_process(pid=kwargs["pid"], size=kwargs["size"])
    except (
        DuplicateProcessIdError,
        InvalidGeometryError,
        InsufficientPhysicalMemoryError,
    ) as e:
        raise SyscallError(str(e)) from e


def _sys_list_processes(kernel: Any, **_kwargs: Any) -> list[dict[str, object]]:
    """Return a summary of every registered process."""
    return [
        {
            "pid": p.pid,
            "size": p.size,
            "num_pages": p.num_pages,
            "frames": list(p.page_table.frames),
        }
        for p in kernel.registry
    ]


def _sys_process_exists(kernel: Any, **kwargs: Any) -> bool:
    """Return True if the pid is already registered."""
    return kernel.registry.contains(kwargs["pid"])


def _sys_page_table(kernel: Any, **kwargs: Any) -> Any:
    """Return the page table report for a pid."""
    try:
        return kernel.page_table_report(kwargs["pid"])
    except (NoProcessesError, ProcessNotFoundError) as e:
        raise SyscallError(str(e)) from e


def _sys_translate(kernel: Any, **kwargs: Any) -> int:
    """Translate a process's logical page to its physical frame."""
    try:
        process = kernel.registry.get(kwargs["pid"])
        return process.page_table.translate(kwargs["page"])
    except (ProcessNotFoundError, UnmappedPageError) as e:
        raise SyscallError(str(e)) from e


# -- Memory syscall handlers ---------------------------------------------------


def _sys_memory_info(kernel: Any, **_kwargs: Any) -> dict[str, int]:
    """Return frame totals."""
    frames = kernel.frames
    return {
        "total_frames": frames.total_frames,
        "free_frames": frames.free_frames,
        "page_size": frames.page_size,
        "total_size": frames.total_size,
    }


def _sys_memory_report(kernel: Any, **_kwargs: Any) -> Any:
    """Return the full physical memory report."""
    return kernel.memory_report()


def _sys_read_frame(kernel: Any, **kwargs: Any) -> bytes:
    """Return the raw bytes held in one frame."""
    try:
        return kernel.read_frame(kwargs["frame"])
    except IndexError as e:
        raise SyscallError(str(e)) from e


# -- Logging / info handlers ---------------------------------------------------


def _sys_read_log(kernel: Any, **kwargs: Any) -> list[str]:
    """Return log entries as formatted strings, optionally by minimum level."""
    assert kernel.logger is not None  # noqa: S101
    entries = kernel.logger.filter(min_level=kwargs.get("min_level"))
    return [str(entry) for entry in entries]


def _sys_sysinfo(kernel: Any, **_kwargs: Any) -> dict[str, Any]:
    """Return a one-glance system summary."""
    return kernel.sysinfo()
