"""Flask application factory for the virtual-fs web UI.

The ``create_app`` function creates a fresh file system and shell and
returns a Flask app with three endpoints:

- ``GET /``: render the terminal HTML page.
- ``POST /api/execute``: execute a command and return JSON.
- ``GET /api/status``: return whether the session is open and the
  working directory.

Each app owns exactly one session.  Once ``quit`` has been executed,
the session is closed and further commands are refused.
"""

from __future__ import annotations

from flask import Flask, Response, jsonify, render_template, request

from virtual_fs import __version__
from virtual_fs.env import default_environment
from virtual_fs.fs.filesystem import FileSystem
from virtual_fs.logging import Logger
from virtual_fs.shell import Shell

_HTTP_BAD_REQUEST = 400

_CLOSED_MESSAGE = "Session closed."


def create_app() -> Flask:
    """Create and configure the Flask application.

    Returns:
        A configured Flask application ready to serve.

    """
    logger = Logger()
    shell = Shell(
        filesystem=FileSystem(logger=logger),
        env=default_environment(),
        logger=logger,
    )
    session = {"running": True}

    app = Flask(__name__)

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the terminal HTML page."""
        return render_template("index.html", version=__version__)

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Execute a shell command and return JSON output.

        Expects JSON body: ``{"command": "..."}``

        Returns:
            JSON with ``output`` and ``halted`` fields.

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or "command" not in data:
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST

        command = data["command"]
        if not isinstance(command, str):
            return jsonify({"error": "'command' must be a string"}), _HTTP_BAD_REQUEST

        if not session["running"]:
            return jsonify({"output": _CLOSED_MESSAGE, "halted": True})

        result = shell.execute(command)

        if result == Shell.EXIT_SENTINEL:
            session["running"] = False
            return jsonify({"output": _CLOSED_MESSAGE, "halted": True})

        return jsonify({"output": result, "halted": False})

    @app.route("/api/status")
    def status() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return session status for polling.

        Returns:
            JSON with ``running`` and ``cwd`` fields.

        """
        return jsonify({"running": session["running"], "cwd": shell.filesystem.current_dir()})

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``virtual-fs-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
