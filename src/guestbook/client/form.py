"""Submission form: two text fields and a submit action bound to a store."""

from __future__ import annotations

from guestbook.core.contracts.visitor import VisitorEntry
from guestbook.core.store import VisitorStore


class SubmissionForm:
    """
    Captures a full name and a message and turns them into a store entry.

    The form's only validation rule is that both fields hold text. An
    incomplete submit is a silent no-op that leaves the fields as typed; a
    complete one adds the entry and clears both fields.
    """

    def __init__(self, store: VisitorStore) -> None:
        self._store = store
        self.full_name: str = ""
        self.message: str = ""

    def fill(self, full_name: str, message: str) -> None:
        """Set both capture points at once."""
        self.full_name = full_name
        self.message = message

    def submit(self) -> VisitorEntry | None:
        """
        Submit the current field values.

        Returns
        -------
        VisitorEntry | None
            The created entry, or ``None`` when a field was empty.
        """
        full_name = self.full_name
        message = self.message
        if not full_name.strip() or not message.strip():
            return None

        entry = self._store.add_entry(full_name, message)
        self.full_name = ""
        self.message = ""
        return entry


__all__ = ["SubmissionForm"]
