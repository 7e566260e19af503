"""
In-Memory Visitor Store for one guestbook session.

This module implements the ordered, newest-first list of visitor entries
owned by a single session.

Responsibilities
----------------
- **Seed**: Replace the contents with an initial collection (bootstrap).
- **Add**: Validate a submission, stamp it with an id and today's date,
  and prepend it.
- **Snapshot**: Hand out an immutable view for rendering.

Seeding Rules
-------------
``seed()`` overwrites freely until the first submission. After
``add_entry()`` has mutated the store, seeding is rejected with
:class:`SeedRejectedError` so that a late bootstrap response can never erase
what the visitor typed.

Note on Persistence
-------------------
This is a volatile memory store. When the session ends, all entries are
lost. Nothing is written back to the data source.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date

from pydantic import ValidationError

from guestbook.core.contracts.visitor import VisitorEntry, new_entry_id
from guestbook.core.settings import get_logger

logger = get_logger("guestbook.store")


class StoreError(Exception):
    """Base class for visitor store failures."""


class EntryValidationError(StoreError, ValueError):
    """A submission had an empty or whitespace-only field."""


class DuplicateEntryError(StoreError, ValueError):
    """Two entries in a seed collection share the same id."""


class SeedRejectedError(StoreError, RuntimeError):
    """The store was already mutated by a submission and cannot be re-seeded."""


class VisitorStore:
    """
    Ordered list of :class:`VisitorEntry`, newest first.

    Attributes
    ----------
    _entries : list[VisitorEntry]
        Current contents; index 0 is the newest entry.
    _rev : int
        Monotonically increasing revision counter (bumps on every mutation).
    _seeded : bool
        Whether ``seed()`` has run at least once.
    _mutated : bool
        Whether ``add_entry()`` has run at least once.
    """

    __slots__ = ("_entries", "_rev", "_seeded", "_mutated", "_today")

    def __init__(self, today: Callable[[], date] = date.today) -> None:
        self._entries: list[VisitorEntry] = []
        self._rev: int = 0
        self._seeded: bool = False
        self._mutated: bool = False
        self._today = today

    # ------------------------------- Mutations ------------------------------

    def seed(self, initial: Iterable[VisitorEntry]) -> None:
        """
        Replace the contents with ``initial``, preserving its order.

        Raises
        ------
        SeedRejectedError
            If a submission has already mutated the store.
        DuplicateEntryError
            If two entries in ``initial`` share an id.
        """
        if self._mutated:
            raise SeedRejectedError("store already holds submitted entries; refusing to re-seed")

        entries = list(initial)
        seen: set[str] = set()
        for entry in entries:
            if entry.id in seen:
                raise DuplicateEntryError(f"duplicate entry id in seed data: {entry.id}")
            seen.add(entry.id)

        self._entries = entries
        self._seeded = True
        self._rev += 1
        logger.debug("Seeded store with %d entries (rev %d)", len(entries), self._rev)

    def add_entry(self, full_name: str, message: str) -> VisitorEntry:
        """
        Create a new entry and prepend it.

        Parameters
        ----------
        full_name, message:
            Submitted text. Both must contain something besides whitespace.

        Returns
        -------
        VisitorEntry
            The created entry, already at position 0.

        Raises
        ------
        EntryValidationError
            If either field is empty or whitespace-only. The store is unchanged.
        """
        try:
            entry = VisitorEntry(
                full_name=full_name,
                message=message,
                visit_date=self._today(),
            )
        except ValidationError as exc:
            fields = ", ".join(str(e["loc"][0]) for e in exc.errors())
            raise EntryValidationError(f"missing required text: {fields}") from exc

        while any(e.id == entry.id for e in self._entries):
            entry = entry.model_copy(update={"id": new_entry_id()})

        self._entries.insert(0, entry)
        self._mutated = True
        self._rev += 1
        logger.debug("Added entry %s (rev %d)", entry.id, self._rev)
        return entry

    def clear(self) -> None:
        """Drop all entries and reset the seeding state (session teardown)."""
        self._entries = []
        self._seeded = False
        self._mutated = False
        self._rev += 1

    # ------------------------------- Reads ----------------------------------

    def snapshot(self) -> tuple[VisitorEntry, ...]:
        """Return the current entries as an immutable tuple, newest first."""
        return tuple(self._entries)

    @property
    def revision(self) -> int:
        """Revision counter; changes whenever the contents change."""
        return self._rev

    @property
    def is_seeded(self) -> bool:
        return self._seeded

    @property
    def is_mutated(self) -> bool:
        return self._mutated

    def __len__(self) -> int:
        return len(self._entries)


__all__ = [
    "DuplicateEntryError",
    "EntryValidationError",
    "SeedRejectedError",
    "StoreError",
    "VisitorStore",
]
