"""Browser-based web UI for the sandbox shell.

This package provides a Flask application that exposes the shell
through a web browser.  It is an **optional** extra; install with::

    pip install sandbox-shell[web]

The ``create_app`` factory in ``app.py`` creates a project filesystem
and a shell, and serves:

- ``GET /``: HTML terminal page.
- ``POST /api/execute``: execute a command line and return JSON.
- ``GET /api/commands``: the command registry for discovery.
- ``GET /api/log``: the shell's audit log.
"""
