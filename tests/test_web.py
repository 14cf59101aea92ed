"""Tests for the browser-based web UI.

The web UI provides a Flask-based terminal interface, exposing the
shell via HTTP endpoints.  Tests use ``pytest.importorskip`` so they are
skipped gracefully when Flask is not installed.
"""

from __future__ import annotations

from typing import Any

import pytest

flask = pytest.importorskip("flask")

from virtual_fs.web.app import create_app  # noqa: E402

HTTP_OK = 200
HTTP_BAD_REQUEST = 400


def _create_client() -> Any:
    """Create a test client from a fresh app."""
    app = create_app()
    app.config["TESTING"] = True
    return app.test_client()


def _run(client: Any, command: str) -> dict[str, Any]:
    response = client.post("/api/execute", json={"command": command})
    assert response.status_code == HTTP_OK
    return response.get_json()


class TestAppCreation:
    """Verify app factory and landing page."""

    def test_create_app_returns_flask(self) -> None:
        """create_app should return a Flask application."""
        assert isinstance(create_app(), flask.Flask)

    def test_index_returns_html(self) -> None:
        """GET / should return the terminal page."""
        response = _create_client().get("/")
        assert response.status_code == HTTP_OK
        assert "text/html" in response.content_type
        assert b"virtual-fs" in response.data


class TestExecuteEndpoint:
    """Verify the /api/execute POST endpoint."""

    def test_commands_share_one_filesystem(self) -> None:
        """Successive requests operate on the same tree."""
        client = _create_client()
        assert _run(client, "mkdir quz") == {"output": "", "halted": False}
        _run(client, "cd quz")
        assert _run(client, "pwd")["output"] == "/quz/"

    def test_unknown_command_returns_error(self) -> None:
        """Unknown commands come back as output, not HTTP errors."""
        data = _run(_create_client(), "nonexistent_cmd")
        assert data["output"] == "unknown command: nonexistent_cmd"

    def test_missing_command_field(self) -> None:
        """A body without 'command' is a bad request."""
        response = _create_client().post("/api/execute", json={})
        assert response.status_code == HTTP_BAD_REQUEST
        assert "error" in response.get_json()

    def test_non_object_body_is_bad_request(self) -> None:
        """A JSON list instead of an object is a bad request."""
        response = _create_client().post("/api/execute", json=["pwd"])
        assert response.status_code == HTTP_BAD_REQUEST
        assert "error" in response.get_json()

    def test_non_string_command_is_bad_request(self) -> None:
        """A command that is not a string is rejected before execution."""
        response = _create_client().post("/api/execute", json={"command": 123})
        assert response.status_code == HTTP_BAD_REQUEST
        assert "string" in response.get_json()["error"]

    def test_quit_halts_session(self) -> None:
        """After quit every command is refused."""
        client = _create_client()
        assert _run(client, "quit")["halted"] is True
        data = _run(client, "pwd")
        assert data == {"output": "Session closed.", "halted": True}


class TestStatusEndpoint:
    """Verify the /api/status GET endpoint."""

    def test_status_reports_cwd(self) -> None:
        """Status should report the working directory."""
        client = _create_client()
        _run(client, "mkdir docs")
        _run(client, "cd docs")
        data = client.get("/api/status").get_json()
        assert data == {"running": True, "cwd": "/docs/"}

    def test_status_after_quit(self) -> None:
        """Status should show the session as closed after quit."""
        client = _create_client()
        _run(client, "quit")
        assert client.get("/api/status").get_json()["running"] is False
