"""Guestbook session client.

Currently exposed:

- :class:`Session` — owner of one store plus its loader, form and renderer.
- :class:`BootstrapLoader` — single-shot seeding from the data source.
- :class:`SubmissionForm` — two text fields and a submit action.
"""

from __future__ import annotations

from .bootstrap import BootstrapError, BootstrapLoader
from .form import SubmissionForm
from .session import Session

__all__ = ["BootstrapError", "BootstrapLoader", "Session", "SubmissionForm"]
