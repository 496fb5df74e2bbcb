"""The kernel — owner of physical memory and the process registry.

The kernel manages the simulator's lifecycle and coordinates its two
subsystems: the frame pool and the process registry.  It is also the
process-creation orchestrator — the one place where frames are taken
from the pool, filled with content, and recorded in a page table.

Lifecycle is an explicit state machine::

    SHUTDOWN  →  BOOTING  →  RUNNING  →  SHUTTING_DOWN  →  SHUTDOWN

Boot sequence (order matters):
    0. Logger — capture events from the start.
    1. Frame pool — everything else needs memory.
    2. Process registry — ready to accept processes.

Shutdown sequence (reverse order):
    2. Process registry — drop every process and its page table.
    1. Frame pool — release the buffer and the free list.
    0. Logger — last to go (captures shutdown events).

Creating a process, step by step:
    1. Refuse a pid that is already taken (nothing allocated yet).
    2. Work out how many pages the size needs (rounding up).
    3. Take that many frames from the pool, all or nothing.
    4. Generate the process's content.
    5. Copy each page into its frame; a short last page copies only
       the bytes that exist and leaves the rest of the frame as it was.
    6. Register the process.

Frames never go back to the pool.  If anything fails after step 3,
the frames taken in step 3 stay allocated without an owner — the
simulator has no path for returning a frame.
"""

import random
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from paging_sim.geometry import InvalidGeometryError, MemoryGeometry, check_process_bounds
from paging_sim.logging import Logger, LogLevel
from paging_sim.memory.frames import (
    FramePool,
    InsufficientFramesError,
    InsufficientPhysicalMemoryError,
)
from paging_sim.memory.page_table import PageTable
from paging_sim.process.registry import (
    DuplicateProcessIdError,
    NoProcessesError,
    Process,
    ProcessRegistry,
)
from paging_sim.syscalls import SyscallNumber, dispatch_syscall
from paging_sim.views import FrameStatus, MemoryReport, PageTableReport

# Produces ``size`` bytes of placeholder process content.
ContentGenerator = Callable[[int], bytes]


class KernelState(StrEnum):
    """Represent the lifecycle phases of the kernel."""

    SHUTDOWN = "shutdown"
    BOOTING = "booting"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"


class KernelNotRunningError(RuntimeError):
    """Raise when a kernel operation needs a running kernel."""


class Kernel:
    """The central coordinator of the simulator.

    Subsystem references are None when the kernel is not running,
    and are initialised during boot.
    """

    def __init__(
        self,
        *,
        geometry: MemoryGeometry,
        content_generator: ContentGenerator | None = None,
        seed: int | None = None,
    ) -> None:
        """Create a kernel in the SHUTDOWN state.

        Args:
            geometry: Validated memory geometry.
            content_generator: Callable returning ``size`` bytes of
                process content.  Defaults to pseudo-random bytes.
            seed: Seed for the default generator (None = unseeded).

        """
        self._state: KernelState = KernelState.SHUTDOWN
        self._geometry = geometry
        self._rng = random.Random(seed)  # noqa: S311
        self._content_generator: ContentGenerator = content_generator or self._rng.randbytes
        self._frames: FramePool | None = None
        self._registry: ProcessRegistry | None = None
        self._logger: Logger | None = None
        self._boot_log: list[str] = []

    # -- Properties -----------------------------------------------------------

    @property
    def state(self) -> KernelState:
        """Return the current kernel state."""
        return self._state

    @property
    def geometry(self) -> MemoryGeometry:
        """Return the memory geometry the kernel was built with."""
        return self._geometry

    @property
    def frames(self) -> FramePool | None:
        """Return the frame pool, or None if not booted."""
        return self._frames

    @property
    def registry(self) -> ProcessRegistry | None:
        """Return the process registry, or None if not booted."""
        return self._registry

    @property
    def logger(self) -> Logger | None:
        """Return the kernel logger, or None if not booted."""
        return self._logger

    @property
    def has_processes(self) -> bool:
        """Return True if at least one process is registered."""
        return bool(self._require_registry())

    def dmesg(self) -> list[str]:
        """Return the boot log messages."""
        return list(self._boot_log)

    # -- Lifecycle ------------------------------------------------------------

    def _require_running(self) -> None:
        """Raise if the kernel is not running."""
        if self._state is not KernelState.RUNNING:
            msg = f"Kernel is {self._state}, not running"
            raise KernelNotRunningError(msg)

    def _require_frames(self) -> FramePool:
        self._require_running()
        assert self._frames is not None  # noqa: S101
        return self._frames

    def _require_registry(self) -> ProcessRegistry:
        self._require_running()
        assert self._registry is not None  # noqa: S101
        return self._registry

    def _log(self, level: LogLevel, message: str, *, source: str, pid: int | None = None) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source=source, pid=pid)

    def boot(self) -> None:
        """Boot the kernel, bringing every subsystem up in order.

        Raises:
            RuntimeError: If the kernel is not in the SHUTDOWN state.

        """
        if self._state is not KernelState.SHUTDOWN:
            msg = f"Cannot boot: kernel is {self._state}"
            raise RuntimeError(msg)

        self._state = KernelState.BOOTING
        self._boot_log = []

        self._logger = Logger()
        self._boot_log.append("[OK] Logger")

        geometry = self._geometry
        self._frames = FramePool(total_size=geometry.memory_size, page_size=geometry.page_size)
        self._boot_log.append(
            f"[OK] Frame pool: {self._frames.total_frames} frames x {geometry.page_size} bytes"
        )

        self._registry = ProcessRegistry()
        self._boot_log.append(f"[OK] Process registry (capacity {self._registry.capacity})")

        self._state = KernelState.RUNNING
        self._log(
            LogLevel.INFO,
            f"Kernel boot complete: {geometry.memory_size} bytes, "
            f"page size {geometry.page_size}, max process {geometry.max_process_size}",
            source="kernel",
        )

    def shutdown(self) -> None:
        """Shut the kernel down, releasing subsystems in reverse order.

        Raises:
            RuntimeError: If the kernel is not running.

        """
        self._require_running()
        self._state = KernelState.SHUTTING_DOWN
        self._log(LogLevel.INFO, "Kernel shutting down", source="kernel")

        if self._registry is not None:
            self._registry.clear()
            self._registry = None

        if self._frames is not None:
            self._frames.release()
            self._frames = None

        self._logger = None
        self._state = KernelState.SHUTDOWN

    # -- Process creation -----------------------------------------------------

    def create_process(self, *, pid: int, size: int) -> Process:
        """Create a process of *size* bytes and back it with frames.

        Args:
            pid: Identifier for the new process; must be unused.
            size: Process size in bytes, 1..max_process_size.

        Returns:
            The registered process.

        Raises:
            DuplicateProcessIdError: If *pid* is already registered.
            InvalidGeometryError: If *size* is not positive or exceeds the max.
            InsufficientPhysicalMemoryError: If not enough frames are free.

        """
        frames = self._require_frames()
        registry = self._require_registry()

        if registry.contains(pid):
            self._log(LogLevel.WARNING, "Rejected duplicate process ID", source="kernel", pid=pid)
            msg = f"Process ID {pid} is already in use"
            raise DuplicateProcessIdError(msg)

        try:
            check_process_bounds(size, max_process_size=self._geometry.max_process_size)
        except InvalidGeometryError:
            self._log(LogLevel.WARNING, f"Rejected process size {size}", source="kernel", pid=pid)
            raise

        pages_needed = self._geometry.pages_for(size)
        try:
            allocated = frames.allocate(pages_needed)
        except InsufficientFramesError as e:
            self._log(
                LogLevel.WARNING,
                f"Insufficient memory: need {pages_needed} frames, {frames.free_frames} free",
                source="frames",
                pid=pid,
            )
            msg = "Insufficient physical memory to allocate the process."
            raise InsufficientPhysicalMemoryError(msg) from e
        self._log(
            LogLevel.INFO,
            f"Allocated frames {allocated} ({frames.free_frames} free)",
            source="frames",
            pid=pid,
        )

        content = self._content_generator(size)
        if len(content) != size:
            msg = f"Content generator returned {len(content)} bytes, expected {size}"
            raise ValueError(msg)
        self._copy_pages(frames, allocated, content)

        process = Process(
            pid=pid, size=size, num_pages=pages_needed, page_table=PageTable(allocated)
        )
        if registry.insert(process):
            self._log(
                LogLevel.DEBUG,
                f"Process registry grown to capacity {registry.capacity}",
                source="registry",
            )
        self._log(
            LogLevel.INFO,
            f"Created process: {size} bytes in {pages_needed} pages",
            source="kernel",
            pid=pid,
        )
        return process

    def _copy_pages(self, frames: FramePool, allocated: list[int], content: bytes) -> None:
        """Copy each logical page of *content* into its physical frame."""
        page_size = frames.page_size
        memory = frames.memory
        for page, frame in enumerate(allocated):
            chunk = content[page * page_size : (page + 1) * page_size]
            start = frames.frame_offset(frame)
            memory[start : start + len(chunk)] = chunk

    # -- Inspection -----------------------------------------------------------

    def memory_report(self) -> MemoryReport:
        """Return a snapshot of physical memory."""
        frames = self._require_frames()
        statuses = tuple(
            FrameStatus.FREE if frames.is_free(i) else FrameStatus.OCCUPIED
            for i in range(frames.total_frames)
        )
        return MemoryReport(
            total_size=frames.total_size,
            page_size=frames.page_size,
            total_frames=frames.total_frames,
            free_frames=frames.free_frames,
            frames=statuses,
        )

    def page_table_report(self, pid: int) -> PageTableReport:
        """Return the page table of process *pid*.

        Raises:
            NoProcessesError: If no processes exist yet.
            ProcessNotFoundError: If *pid* is not registered.

        """
        registry = self._require_registry()
        if not registry:
            msg = "No processes available to display."
            raise NoProcessesError(msg)
        return PageTableReport.from_process(registry.get(pid))

    def read_frame(self, frame: int) -> bytes:
        """Return the raw bytes held in physical *frame*."""
        return self._require_frames().read_frame(frame)

    def sysinfo(self) -> dict[str, Any]:
        """Return a one-glance summary of the running system."""
        frames = self._require_frames()
        registry = self._require_registry()
        assert self._logger is not None  # noqa: S101
        return {
            "memory_size": frames.total_size,
            "page_size": frames.page_size,
            "max_process_size": self._geometry.max_process_size,
            "total_frames": frames.total_frames,
            "free_frames": frames.free_frames,
            "process_count": len(registry),
            "registry_capacity": registry.capacity,
            "log_count": len(self._logger.entries),
        }

    # -- Syscall gateway ------------------------------------------------------

    def syscall(self, number: SyscallNumber, **kwargs: Any) -> Any:
        """Dispatch a system call to its handler.

        Args:
            number: The syscall to invoke.
            **kwargs: Syscall-specific arguments.

        Returns:
            Whatever the handler returns.

        Raises:
            KernelNotRunningError: If the kernel is not running.
            SyscallError: If the syscall fails.

        """
        self._require_running()
        self._log(LogLevel.DEBUG, f"syscall {number.name}", source="syscall")
        return dispatch_syscall(self, number, **kwargs)
