"""Browser-based web UI for virtual-fs.

This package provides a Flask application that exposes the shell
through a web browser.  It is an **optional** extra: install with::

    pip install virtual-fs[web]

The ``create_app`` factory in ``app.py`` creates a file system and a
shell and serves three endpoints:

- ``GET /``: HTML terminal page.
- ``POST /api/execute``: execute a shell command and return JSON.
- ``GET /api/status``: session state and working directory.
"""
