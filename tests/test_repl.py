"""Tests for the REPL (Read-Eval-Print Loop).

The REPL prompts for the memory geometry, then loops over the main
menu.  Prompting goes through ``input()``, so tests patch it with a
scripted list of answers and read what was printed with ``capsys``.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from paging_sim.geometry import MemoryGeometry, check_memory_size
from paging_sim.kernel import Kernel, KernelState
from paging_sim.repl import (
    INVALID_INTEGER,
    format_boot_log,
    format_menu,
    handle_choice,
    prompt_config,
    prompt_int,
    run,
)
from paging_sim.shell import Shell

GEOMETRY = MemoryGeometry(memory_size=1024, page_size=256, max_process_size=512)


def _booted_shell() -> tuple[Kernel, Shell]:
    """Create a booted kernel and shell for testing."""
    kernel = Kernel(geometry=GEOMETRY, seed=0)
    kernel.boot()
    return kernel, Shell(kernel=kernel)


def _answers(*values: str):  # noqa: ANN202
    """Patch input() to return *values* in order."""
    return patch("builtins.input", side_effect=list(values))


class TestFormatting:
    """Verify the menu and boot banner."""

    def test_menu_items(self) -> None:
        """The menu lists the four options under a title."""
        menu = format_menu()
        assert "MAIN MENU" in menu
        for item in ("1. View Physical Memory", "2. View Process Page Table",
                     "3. Create Process", "4. Exit"):
            assert item in menu

    def test_menu_is_boxed(self) -> None:
        """Every menu line has the same width."""
        widths = {len(line) for line in format_menu().splitlines()}
        assert len(widths) == 1

    def test_format_boot_log(self) -> None:
        """The banner includes each boot message."""
        banner = format_boot_log(["[BOOT] Config: built-in ... OK", "[OK] Logger"])
        assert "[BOOT] Config" in banner
        assert "[OK] Logger" in banner
        assert "help" in banner


class TestPrompts:
    """Verify the re-prompting input helpers."""

    def test_prompt_int_retries_non_integer(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A non-integer answer is refused and asked again."""
        with _answers("abc", "12"):
            assert prompt_int("> ") == 12  # noqa: PLR2004
        assert INVALID_INTEGER in capsys.readouterr().out

    def test_prompt_int_retries_failed_check(self, capsys: pytest.CaptureFixture[str]) -> None:
        """An integer that fails the check is refused with its reason."""
        with _answers("300", "256"):
            assert prompt_int("> ", check=check_memory_size) == 256  # noqa: PLR2004
        assert "Error: Size must be a power of 2." in capsys.readouterr().out

    def test_prompt_int_eof(self) -> None:
        """End of input propagates."""
        with patch("builtins.input", side_effect=EOFError), pytest.raises(EOFError):
            prompt_int("> ")

    def test_prompt_config_enforces_ordering(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A page bigger than memory is refused, then the config is built."""
        with _answers("1000", "1024", "2048", "256", "512"):
            config = prompt_config()
        assert config.geometry == GEOMETRY
        out = capsys.readouterr().out
        assert "Page size cannot exceed total memory size." in out


class TestHandleChoice:
    """Verify each menu option."""

    def test_view_memory(self) -> None:
        """Option 1 prints the memory report."""
        _kernel, shell = _booted_shell()
        assert handle_choice("1", shell).startswith("=== Physical Memory Status ===")

    def test_view_page_table_without_processes(self) -> None:
        """Option 2 with no processes does not prompt at all."""
        _kernel, shell = _booted_shell()
        with patch("builtins.input") as fake_input:
            result = handle_choice("2", shell)
        assert result == "No processes available to display."
        fake_input.assert_not_called()

    def test_view_page_table(self) -> None:
        """Option 2 asks for a pid and shows its table."""
        _kernel, shell = _booted_shell()
        shell.execute("create 1 256")
        with _answers("1"):
            result = handle_choice("2", shell)
        assert result.startswith("Page Table for Process ID 1:")

    def test_view_page_table_bad_pid(self) -> None:
        """A non-integer pid is refused."""
        _kernel, shell = _booted_shell()
        shell.execute("create 1 256")
        with _answers("x"):
            assert handle_choice("2", shell) == INVALID_INTEGER

    def test_create_process_reprompts_size(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Option 3 asks again until the size is a power of two."""
        kernel, shell = _booted_shell()
        with _answers("1", "300", "256"):
            result = handle_choice("3", shell)
        assert result.startswith("Process created successfully!")
        assert "Process size must be a power of 2." in capsys.readouterr().out
        assert kernel.has_processes

    def test_create_process_reprompts_duplicate_pid(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Option 3 asks again when the pid is taken."""
        _kernel, shell = _booted_shell()
        shell.execute("create 1 256")
        with _answers("1", "2", "256"):
            result = handle_choice("3", shell)
        assert "Process ID: 2" in result
        assert "Process ID must be unique" in capsys.readouterr().out

    def test_exit(self) -> None:
        """Option 4 shuts the kernel down."""
        kernel, shell = _booted_shell()
        assert handle_choice("4", shell) == Shell.EXIT_SENTINEL
        assert kernel.state is KernelState.SHUTDOWN

    def test_invalid_option(self) -> None:
        """Other numbers are not menu options."""
        _kernel, shell = _booted_shell()
        result = handle_choice("7", shell)
        assert result == "Invalid option. Please select a valid option from the menu."

    def test_shell_command_passthrough(self) -> None:
        """Anything else runs as a shell command."""
        _kernel, shell = _booted_shell()
        assert handle_choice("ps", shell) == "No processes."


class TestRun:
    """Verify the full loop with a config file."""

    def test_session(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Create a process, view memory, and exit."""
        config = tmp_path / "sim.json"
        config.write_text(json.dumps({"memory_size": 2048, "page_size": 512,
                                      "max_process_size": 1024}))
        with _answers("3", "1", "1024", "1", "4"):
            run(config)
        out = capsys.readouterr().out
        assert "Process created successfully!" in out
        assert "Free Frames: 2 (50.00%)" in out
        assert "Exiting the simulator..." in out
        assert out.rstrip().endswith("Simulator halted.")

    def test_end_of_input_halts(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Ctrl+D at the menu still shuts down cleanly."""
        config = tmp_path / "sim.json"
        config.write_text("{}")
        with patch("builtins.input", side_effect=EOFError):
            run(config)
        assert "Simulator halted." in capsys.readouterr().out

    def test_bad_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A geometry that fails POST never reaches the menu."""
        config = tmp_path / "sim.json"
        config.write_text(json.dumps({"memory_size": 1000}))
        run(config)
        assert "Boot failed: POST failed" in capsys.readouterr().out
