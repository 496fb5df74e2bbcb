"""The shell — command interpreter for the paging simulator.

The shell reads a command string, parses it into a command name and
arguments, dispatches to the matching handler, and returns a string
result.  It never prints and never prompts: interactive prompting
belongs to the REPL, which turns menu choices into shell commands.

Every handler talks to the kernel through ``kernel.syscall()`` and
turns a ``SyscallError`` into an ``Error: ...`` line.  The shell never
assumes a request succeeded.

Design choices:
    - **Returns strings, not prints.**  The shell is fully testable and
      the caller decides how to display output.
    - **Command dispatch via a dict.**  Adding a command means writing
      a method and adding one dict entry.
    - **Operator input is checked here.**  A word that is not an
      integer, or a process size that is not a power of two, never
      reaches a syscall.  The kernel itself only checks bounds.
"""

from collections.abc import Callable
from typing import TypeAlias

from paging_sim.geometry import check_process_size
from paging_sim.kernel import Kernel, KernelState
from paging_sim.logging import LogLevel
from paging_sim.process.registry import Process
from paging_sim.syscalls import SyscallError, SyscallNumber
from paging_sim.tutorials import TutorialRunner
from paging_sim.views import (
    MemoryReport,
    PageTableReport,
    format_hexdump,
    format_memory_report,
    format_page_table_report,
    format_process_created,
)

# Type alias for a command handler: takes a list of args, returns output.
_Handler: TypeAlias = Callable[[list[str]], str]

_CREATE_ARGS = 2
_TRANSLATE_ARGS = 2


def _parse_int(word: str, what: str) -> int:
    """Parse *word* as an integer, naming *what* in the error."""
    try:
        return int(word)
    except ValueError:
        msg = f"invalid {what} '{word}'"
        raise ValueError(msg) from None


class Shell:
    """Command interpreter that operates on a booted kernel."""

    EXIT_SENTINEL = "__EXIT__"

    def __init__(self, *, kernel: Kernel) -> None:
        """Create a shell attached to a running kernel.

        Raises:
            RuntimeError: If the kernel is not in the RUNNING state.

        """
        if kernel.state is not KernelState.RUNNING:
            msg = f"Shell requires a running kernel (state: {kernel.state}, not running)"
            raise RuntimeError(msg)

        self._kernel = kernel
        self._history: list[str] = []
        self._tutorials = TutorialRunner(kernel)

        # Command dispatch table: maps command names to handler methods.
        self._commands: dict[str, _Handler] = {
            "help": self._cmd_help,
            "mem": self._cmd_mem,
            "pt": self._cmd_pt,
            "create": self._cmd_create,
            "ps": self._cmd_ps,
            "translate": self._cmd_translate,
            "dump": self._cmd_dump,
            "top": self._cmd_top,
            "log": self._cmd_log,
            "dmesg": self._cmd_dmesg,
            "history": self._cmd_history,
            "learn": self._cmd_learn,
            "exit": self._cmd_exit,
        }

    @property
    def kernel(self) -> Kernel:
        """Return the kernel this shell drives."""
        return self._kernel

    @property
    def command_names(self) -> list[str]:
        """Return every command name, sorted."""
        return sorted(self._commands)

    @property
    def lesson_names(self) -> list[str]:
        """Return every tutorial lesson name, sorted."""
        return self._tutorials.list_lessons()

    def execute(self, command: str) -> str:
        """Parse and execute one command line.

        Args:
            command: The raw command string (e.g. "create 1 1024").

        Returns:
            The command output, an ``Error:`` line, or the exit sentinel.

        """
        stripped = command.strip()
        if not stripped:
            return ""
        self._history.append(stripped)

        parts = stripped.split()
        name, args = parts[0], parts[1:]
        handler = self._commands.get(name)
        if handler is None:
            return f"Unknown command: {name}"
        return handler(args)

    # -- Command handlers ------------------------------------------------

    def _cmd_help(self, _args: list[str]) -> str:
        """List available commands."""
        lines = [
            "Available commands: " + ", ".join(self.command_names),
            "",
            "  mem                    show physical memory and frame status",
            "  pt <pid>               show a process's page table",
            "  create <pid> <size>    create a process of <size> bytes",
            "  ps                     list processes",
            "  translate <pid> <page> show which frame backs a page",
            "  dump <frame>           hex dump of one frame",
            "  learn [lesson]         guided lessons",
        ]
        return "\n".join(lines)

    def _cmd_mem(self, _args: list[str]) -> str:
        """Show physical memory status."""
        report: MemoryReport = self._kernel.syscall(SyscallNumber.SYS_MEMORY_REPORT)
        return format_memory_report(report)

    def _cmd_pt(self, args: list[str]) -> str:
        """Show the page table of one process."""
        if not self._kernel.has_processes:
            return "No processes available to display."
        if not args:
            return "Usage: pt <pid>"
        try:
            pid = _parse_int(args[0], "process ID")
            report: PageTableReport = self._kernel.syscall(SyscallNumber.SYS_PAGE_TABLE, pid=pid)
        except (ValueError, SyscallError) as e:
            return f"Error: {e}"
        return format_page_table_report(report)

    def _cmd_create(self, args: list[str]) -> str:
        """Create a process."""
        if len(args) != _CREATE_ARGS:
            return "Usage: create <pid> <size>"
        try:
            pid = _parse_int(args[0], "process ID")
            size = _parse_int(args[1], "size")
            check_process_size(size, max_process_size=self._kernel.geometry.max_process_size)
            process: Process = self._kernel.syscall(
                SyscallNumber.SYS_CREATE_PROCESS, pid=pid, size=size
            )
        except (ValueError, SyscallError) as e:
            return f"Error: {e}"
        return format_process_created(process)

    def _cmd_ps(self, _args: list[str]) -> str:
        """List processes in creation order."""
        procs: list[dict[str, object]] = self._kernel.syscall(SyscallNumber.SYS_LIST_PROCESSES)
        if not procs:
            return "No processes."
        info: dict[str, object] = self._kernel.syscall(SyscallNumber.SYS_SYSINFO)
        lines = ["PID      SIZE  PAGES  FRAMES"]
        for p in procs:
            frames = " ".join(str(f) for f in p["frames"])  # type: ignore[attr-defined]
            lines.append(f"{p['pid']:<6} {p['size']:>6}  {p['num_pages']:>5}  {frames}")
        lines.append(f"{len(procs)} process(es), registry capacity {info['registry_capacity']}")
        return "\n".join(lines)

    def _cmd_translate(self, args: list[str]) -> str:
        """Show the frame backing one logical page."""
        if len(args) != _TRANSLATE_ARGS:
            return "Usage: translate <pid> <page>"
        try:
            pid = _parse_int(args[0], "process ID")
            page = _parse_int(args[1], "page")
            frame: int = self._kernel.syscall(SyscallNumber.SYS_TRANSLATE, pid=pid, page=page)
        except (ValueError, SyscallError) as e:
            return f"Error: {e}"
        return f"pid {pid} page {page} -> frame {frame}"

    def _cmd_dump(self, args: list[str]) -> str:
        """Hex dump the bytes held in one frame."""
        if not args:
            return "Usage: dump <frame>"
        try:
            frame = _parse_int(args[0], "frame")
            data: bytes = self._kernel.syscall(SyscallNumber.SYS_READ_FRAME, frame=frame)
        except (ValueError, SyscallError) as e:
            return f"Error: {e}"
        base = frame * len(data)
        return f"Frame {frame}:\n" + format_hexdump(data, base=base)

    def _cmd_top(self, _args: list[str]) -> str:
        """Show a one-glance system summary."""
        info: dict[str, object] = self._kernel.syscall(SyscallNumber.SYS_SYSINFO)
        lines = [
            "=== Paging Simulator Status ===",
            f"Memory:      {info['memory_size']} bytes, page size {info['page_size']}",
            f"Frames:      {info['free_frames']}/{info['total_frames']} free",
            f"Max process: {info['max_process_size']} bytes",
            f"Processes:   {info['process_count']} (capacity {info['registry_capacity']})",
            f"Log entries: {info['log_count']}",
        ]
        return "\n".join(lines)

    def _cmd_log(self, args: list[str]) -> str:
        """Show log entries (INFO and above, or everything with ``log all``)."""
        min_level = None if args[:1] == ["all"] else LogLevel.INFO
        entries: list[str] = self._kernel.syscall(SyscallNumber.SYS_READ_LOG, min_level=min_level)
        return "\n".join(entries) if entries else "No log entries."

    def _cmd_dmesg(self, _args: list[str]) -> str:
        """Show the kernel boot messages."""
        return "\n".join(self._kernel.dmesg())

    def _cmd_history(self, _args: list[str]) -> str:
        """Show command history."""
        if not self._history:
            return "No history."
        return "\n".join(f"  {i + 1}  {cmd}" for i, cmd in enumerate(self._history))

    def _cmd_learn(self, args: list[str]) -> str:
        """List lessons or run one (``learn all`` runs every lesson)."""
        if not args:
            lines = ["Available lessons:"]
            lines.extend(
                f"  {name:<8} {self._tutorials.describe(name)}"
                for name in self._tutorials.list_lessons()
            )
            lines.append("Usage: learn <lesson> | learn all")
            return "\n".join(lines)
        if args[0] == "all":
            return self._tutorials.run_all()
        try:
            return self._tutorials.run(args[0])
        except KeyError:
            return f"Error: unknown lesson '{args[0]}'"

    def _cmd_exit(self, _args: list[str]) -> str:
        """Shut down the kernel and signal the REPL to stop."""
        self._kernel.shutdown()
        return self.EXIT_SENTINEL
