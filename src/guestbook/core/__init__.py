"""Core package initializer for Guestbook.

Holds the pieces shared by the mock server and the session client:
    from guestbook.core.settings import settings, load_settings, Settings, get_logger
    from guestbook.core.store import VisitorStore
    from guestbook.core.render import ListRenderer
"""

from __future__ import annotations

__all__ = ["__doc__"]
