"""Interactive REPL (Read-Eval-Print Loop) for the paging simulator.

The REPL is the terminal interface.  It runs in two phases:

1. **Configure** — ask for memory size, page size and max process
   size, re-prompting until each is a valid power of two that fits
   (or load them from a JSON config file given on the command line).
2. **Menu loop** — show the main menu and act on the choice:

   - ``1`` view physical memory
   - ``2`` view a process's page table
   - ``3`` create a process
   - ``4`` exit

   Anything that is not a menu number is passed to the shell as a
   command line, so ``help``, ``ps``, ``log`` and friends work too.

The shell does the work and returns strings; the REPL only prompts,
validates what it reads, and prints.  The prompt helpers read with
``input()`` so tests can patch it.
"""

import readline
import sys
from collections.abc import Callable
from pathlib import Path

from paging_sim.bootloader import Bootloader, BootError, SimulatorConfig
from paging_sim.completer import Completer
from paging_sim.geometry import (
    InvalidGeometryError,
    check_max_process_size,
    check_memory_size,
    check_page_size,
    check_process_size,
)
from paging_sim.kernel import Kernel, KernelState
from paging_sim.shell import Shell
from paging_sim.syscalls import SyscallNumber

_BANNER_WIDTH = 42

MENU_VIEW_MEMORY = "1"
MENU_VIEW_PAGE_TABLE = "2"
MENU_CREATE_PROCESS = "3"
MENU_EXIT = "4"

INVALID_INTEGER = "Invalid input. Please enter a valid integer."


def format_menu() -> str:
    """Return the boxed main menu."""
    border = "+" + "-" * _BANNER_WIDTH + "+"
    items = [
        "MAIN MENU".center(_BANNER_WIDTH),
        " 1. View Physical Memory",
        " 2. View Process Page Table",
        " 3. Create Process",
        " 4. Exit",
    ]
    rows = [f"|{item:<{_BANNER_WIDTH}}|" for item in items]
    return "\n".join([border, rows[0], border, *rows[1:], border])


def format_boot_log(boot_log: list[str]) -> str:
    """Format the boot log into a displayable banner string."""
    body = "\n".join(f"  {msg}" for msg in boot_log)
    return f"{body}\n\nSimulator running. Type 'help' for shell commands."


def prompt_int(prompt: str, *, check: Callable[[int], None] | None = None) -> int:
    """Prompt until the answer is an integer that passes *check*.

    Args:
        prompt: Text shown before reading.
        check: Optional validator raising ``InvalidGeometryError``.

    Returns:
        The accepted integer.

    Raises:
        EOFError: If input ends (Ctrl+D).

    """
    while True:
        answer = input(prompt)
        try:
            value = int(answer.strip())
        except ValueError:
            print(INVALID_INTEGER)  # noqa: T201
            continue
        if check is not None:
            try:
                check(value)
            except InvalidGeometryError as e:
                print(f"Error: {e}")  # noqa: T201
                continue
        return value


def prompt_config() -> SimulatorConfig:
    """Ask for the three geometry sizes, honouring the ordering rules."""
    print("Initial Configuration:")  # noqa: T201
    memory_size = prompt_int(
        "Enter the size of physical memory in bytes (power of 2): ",
        check=check_memory_size,
    )
    page_size = prompt_int(
        "Enter the size of a page/frame in bytes (power of 2): ",
        check=lambda n: check_page_size(n, memory_size=memory_size),
    )
    max_process_size = prompt_int(
        "Enter the maximum size of a process in bytes (power of 2): ",
        check=lambda n: check_max_process_size(n, memory_size=memory_size),
    )
    return SimulatorConfig(
        memory_size=memory_size,
        page_size=page_size,
        max_process_size=max_process_size,
    )


def prompt_new_process(kernel: Kernel) -> tuple[int, int]:
    """Ask for a unique pid and a valid size for a new process."""
    print("=== Create New Process ===")  # noqa: T201
    while True:
        pid = prompt_int("Enter Process ID (integer): ")
        if not kernel.syscall(SyscallNumber.SYS_PROCESS_EXISTS, pid=pid):
            break
        print("Error: Process ID must be unique. Please enter a different ID.")  # noqa: T201

    max_size = kernel.geometry.max_process_size
    size = prompt_int(
        f"Enter Process Size in bytes (power of 2, max {max_size}): ",
        check=lambda n: check_process_size(n, max_process_size=max_size),
    )
    return pid, size


def handle_choice(choice: str, shell: Shell) -> str:
    """Act on one menu choice (or shell command line) and return output."""
    kernel = shell.kernel
    choice = choice.strip()

    if choice == MENU_VIEW_MEMORY:
        return shell.execute("mem")

    if choice == MENU_VIEW_PAGE_TABLE:
        if not kernel.has_processes:
            return "No processes available to display."
        print("=== View Process Page Table ===")  # noqa: T201
        answer = input("Enter Process ID: ")
        try:
            pid = int(answer.strip())
        except ValueError:
            return INVALID_INTEGER
        return shell.execute(f"pt {pid}")

    if choice == MENU_CREATE_PROCESS:
        pid, size = prompt_new_process(kernel)
        return shell.execute(f"create {pid} {size}")

    if choice == MENU_EXIT:
        print("Exiting the simulator...")  # noqa: T201
        return shell.execute("exit")

    if choice.isdigit():
        return "Invalid option. Please select a valid option from the menu."
    return shell.execute(choice)


def run(config_path: Path | None = None) -> None:
    """Configure, boot and run the interactive menu loop.

    Handles Ctrl+C and Ctrl+D gracefully and always shuts the kernel
    down on the way out.
    """
    print("=== Memory Paging Simulator ===\n")  # noqa: T201

    try:
        if config_path is not None:
            bootloader = Bootloader(config_path=config_path)
        else:
            bootloader = Bootloader(config=prompt_config())
        kernel = bootloader.boot()
    except BootError as e:
        print(f"Boot failed: {e}")  # noqa: T201
        return
    except (EOFError, KeyboardInterrupt):
        print("\nAborted.")  # noqa: T201
        return

    shell = Shell(kernel=kernel)

    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_boot_log(bootloader.boot_log + kernel.dmesg()))  # noqa: T201

    try:
        while kernel.state is KernelState.RUNNING:
            print("\n" + format_menu())  # noqa: T201
            try:
                choice = input("Select an option: ")
                result = handle_choice(choice, shell)
            except EOFError:
                # Ctrl+D: graceful exit
                print()  # noqa: T201
                break

            if result == Shell.EXIT_SENTINEL:
                break
            if result:
                print(result)  # noqa: T201

    except KeyboardInterrupt:
        print("\nInterrupted.")  # noqa: T201

    finally:
        if kernel.state is KernelState.RUNNING:
            kernel.shutdown()
        print("Simulator halted.")  # noqa: T201


def main() -> None:
    """Console entry point: ``paging-sim [config.json]``."""
    args = sys.argv[1:]
    run(Path(args[0]) if args else None)
