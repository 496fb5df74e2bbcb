"""Flask application factory for the paging simulator web UI.

The ``create_app`` function boots a kernel, creates a shell, and
returns a Flask app with these endpoints:

- ``GET /`` — render the terminal HTML page with the boot log.
- ``POST /api/execute`` — execute a shell command and return JSON.
- ``GET /api/status`` — running state and the ``top`` summary.
- ``GET /api/memory`` — the physical memory report as JSON.
- ``GET /api/processes/<pid>`` — one page table as JSON.
"""

from __future__ import annotations

from flask import Flask, Response, jsonify, render_template, request

from paging_sim.bootloader import Bootloader, SimulatorConfig
from paging_sim.kernel import KernelState
from paging_sim.shell import Shell
from paging_sim.syscalls import SyscallError, SyscallNumber

_HTTP_BAD_REQUEST = 400
_HTTP_NOT_FOUND = 404
_HTTP_CONFLICT = 409


def create_app(config: SimulatorConfig | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Simulator configuration; defaults apply when None.

    Returns:
        A configured Flask application ready to serve.

    """
    bootloader = Bootloader(config=config)
    kernel = bootloader.boot()
    shell = Shell(kernel=kernel)

    boot_log = "\n".join(bootloader.boot_log + kernel.dmesg())

    app = Flask(__name__)

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the terminal HTML page."""
        return render_template("index.html", boot_log=boot_log)

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Execute a shell command and return JSON output.

        Expects JSON body: ``{"command": "..."}``
        """
        data = request.get_json(silent=True)
        if data is None or "command" not in data:
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST

        if kernel.state is not KernelState.RUNNING:
            return jsonify({"output": "Simulator halted.", "halted": True})

        command: str = data["command"]
        result = shell.execute(command)

        if result == Shell.EXIT_SENTINEL:
            return jsonify({"output": "Simulator halted.", "halted": True})

        return jsonify({"output": result, "halted": False})

    @app.route("/api/status")
    def status() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return running state and the status summary."""
        running = kernel.state is KernelState.RUNNING
        status_text = shell.execute("top") if running else "Simulator halted."
        return jsonify({"running": running, "status": status_text})

    @app.route("/api/memory")
    def memory() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return the physical memory report."""
        if kernel.state is not KernelState.RUNNING:
            return jsonify({"error": "Simulator halted."}), _HTTP_CONFLICT
        report = kernel.syscall(SyscallNumber.SYS_MEMORY_REPORT)
        return jsonify(report.to_dict())

    @app.route("/api/processes/<int:pid>")
    def page_table(  # pyright: ignore[reportUnusedFunction]
        pid: int,
    ) -> tuple[Response, int] | Response:
        """Return one process's page table, or 404."""
        if kernel.state is not KernelState.RUNNING:
            return jsonify({"error": "Simulator halted."}), _HTTP_CONFLICT
        try:
            report = kernel.syscall(SyscallNumber.SYS_PAGE_TABLE, pid=pid)
        except SyscallError as e:
            return jsonify({"error": str(e)}), _HTTP_NOT_FOUND
        return jsonify(report.to_dict())

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``paging-sim-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
