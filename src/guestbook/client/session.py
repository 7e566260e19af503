"""
Guestbook session: the explicit owner of one visitor list.

A :class:`Session` builds one :class:`VisitorStore` and hands that same store
to the bootstrap loader (write: seed), the submission form (write: add) and
the list renderer (read: snapshot). Nothing else holds the store, and its
contents are dropped when the session closes.

Usage
-----
    with Session.from_settings() as session:
        session.start()                  # bootstrap once
        session.submit("Alice", "Hello")
        rows = session.render()
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from types import TracebackType

from guestbook.client.bootstrap import BootstrapLoader
from guestbook.client.form import SubmissionForm
from guestbook.core.contracts.visitor import VisitorEntry
from guestbook.core.render import DisplayFragment, ListRenderer
from guestbook.core.settings import Settings, get_logger, load_settings
from guestbook.core.store import VisitorStore

logger = get_logger("guestbook.session")


class Session:
    """One page session: store, loader, form and renderer wired together."""

    def __init__(
        self,
        source_url: str,
        *,
        timeout_seconds: float = 10.0,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.store = VisitorStore(today=today)
        self.loader = BootstrapLoader(
            store=self.store, url=source_url, timeout_seconds=timeout_seconds
        )
        self.form = SubmissionForm(self.store)
        self.renderer = ListRenderer()

    @classmethod
    def from_settings(
        cls,
        config: Settings | None = None,
        *,
        source_url: str | None = None,
    ) -> Session:
        """Build a session from settings; ``source_url`` overrides ``GUESTBOOK_SOURCE_URL``."""
        cfg = config or load_settings()
        return cls(source_url or cfg.source_url, timeout_seconds=cfg.fetch_timeout)

    # ------------------------------- Lifecycle ------------------------------

    def start(self) -> int:
        """Run the bootstrap fetch; returns the number of seeded entries."""
        return self.loader.load()

    def close(self) -> None:
        self.store.clear()
        logger.debug("Session closed")

    def __enter__(self) -> Session:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ------------------------------- Actions --------------------------------

    def submit(self, full_name: str, message: str) -> VisitorEntry | None:
        """Fill the form and submit it; ``None`` means nothing was added."""
        self.form.fill(full_name, message)
        return self.form.submit()

    def render(self) -> tuple[DisplayFragment, ...]:
        """Render the current store contents, newest first."""
        return self.renderer.render(self.store.snapshot())


__all__ = ["Session"]
