"""Flask application factory for the sandbox shell web UI.

The ``create_app`` function creates a filesystem (optionally seeded
with files), a shell, and returns a Flask app with four endpoints:

- ``GET /``: render the terminal HTML page.
- ``POST /api/execute``: execute a command line and return JSON.
- ``GET /api/commands``: list every command with usage and description.
- ``GET /api/log``: return the audit log, optionally filtered.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping

from flask import Flask, Response, jsonify, render_template, request

from sandbox_shell.fs import MemoryFileSystem, VirtualFileSystem
from sandbox_shell.logging import LogLevel
from sandbox_shell.shell import Shell, format_result

_HTTP_BAD_REQUEST = 400


def create_app(
    fs: VirtualFileSystem | None = None,
    seed: Mapping[str, str] | None = None,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        fs: The project filesystem; a new in-memory one when omitted.
        seed: ``{path: content}`` used to populate the new in-memory
              filesystem.  Ignored when *fs* is given.

    Returns:
        A configured Flask application ready to serve.

    """
    if fs is None:
        fs = MemoryFileSystem.from_files(seed or {})
    shell = Shell(fs=fs)

    app = Flask(__name__)

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the terminal HTML page."""
        return render_template("index.html", cwd=shell.cwd)

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Execute a command line and return JSON output.

        Expects JSON body: ``{"command": "..."}``

        Returns:
            JSON with ``exitCode``, ``stdout``, ``stderr``, ``cwd`` and
            the terminal-formatted ``output``.

        """
        data = request.get_json(silent=True)
        if data is None or "command" not in data:
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST

        command: str = data["command"]
        result = asyncio.run(shell.execute(command))
        return jsonify(
            {
                "exitCode": result.exit_code,
                "stdout": result.stdout,
                "stderr": result.stderr,
                "cwd": shell.cwd,
                "output": format_result(result),
            }
        )

    @app.route("/api/commands")
    def commands() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the command registry for tool discovery."""
        return jsonify(
            [
                {"name": info.name, "description": info.description, "usage": info.usage}
                for info in shell.list_commands()
            ]
        )

    @app.route("/api/log")
    def log() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return audit log entries.

        Accepts optional ``level`` (e.g. ``WARNING``) and ``source``
        query parameters.
        """
        level_name = request.args.get("level")
        try:
            min_level = LogLevel[level_name.upper()] if level_name else None
        except KeyError:
            return jsonify({"error": f"Unknown level: {level_name}"}), _HTTP_BAD_REQUEST
        entries = shell.log.filter(min_level=min_level, source=request.args.get("source"))
        return jsonify(
            [
                {"level": entry.level.name, "source": entry.source, "message": entry.message}
                for entry in entries
            ]
        )

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``sandbox-shell-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
