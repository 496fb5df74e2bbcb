"""Context-aware tab completer for the simulator shell.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline integration in the REPL).

The ``complete(text, state)`` method is the readline callback.  It
delegates to ``completions(text, line)`` which looks at the input so
far and returns candidate strings:

- first word → command names
- ``pt`` / ``translate`` → registered pids
- ``learn`` → lesson names (plus ``all``)
"""

from __future__ import annotations

import readline
from typing import TYPE_CHECKING

from paging_sim.syscalls import SyscallNumber

if TYPE_CHECKING:
    from paging_sim.shell import Shell

# Commands whose first argument is a registered pid.
_PID_COMMANDS: frozenset[str] = frozenset(["pt", "translate"])


class Completer:
    """Context-aware tab completer for the simulator shell."""

    def __init__(self, shell: Shell) -> None:
        """Create a completer attached to a shell instance."""
        self._shell = shell

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*."""
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return sorted completion candidates based on context.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        """
        words = line.lstrip().split()

        # No words yet, or still typing the first word → command completion
        if not words or (len(words) == 1 and not line.endswith(" ")):
            return [c for c in self._shell.command_names if c.startswith(text)]

        # Index of the word being completed
        arg_index = len(words) - 1 if not line.endswith(" ") else len(words)
        if arg_index != 1:
            return []

        cmd = words[0]
        if cmd in _PID_COMMANDS:
            return self._complete_pids(text)
        if cmd == "learn":
            return sorted(n for n in [*self._shell.lesson_names, "all"] if n.startswith(text))
        return []

    def _complete_pids(self, text: str) -> list[str]:
        procs: list[dict[str, object]] = self._shell.kernel.syscall(
            SyscallNumber.SYS_LIST_PROCESSES
        )
        return sorted(str(p["pid"]) for p in procs if str(p["pid"]).startswith(text))
