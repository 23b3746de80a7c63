"""Expose the application factory at package level.

``from shop import create_app`` is the entry point used by ``flask --app``
and by the WSGI server.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
