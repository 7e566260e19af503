"""Guestbook: a session-scoped visitor list with id-keyed rendering.

The package has two halves:

- :mod:`guestbook.mock` serves a static JSON array of visitors over HTTP.
- :mod:`guestbook.client` seeds a session from it, accepts submissions and
  renders the list, recomputing only rows whose identity changed.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
