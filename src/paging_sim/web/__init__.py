"""Browser-based web UI for the paging simulator.

This package provides a Flask application that exposes the simulator
shell and its memory views through a web browser.  It is an
**optional** extra — install with::

    pip install paging-sim[web]

The ``create_app`` factory in ``app.py`` boots a kernel, creates a
shell, and serves an HTML terminal plus a small JSON API.
"""
