"""
List and entry renderers with id-keyed reconciliation.

This module projects visitor entries into :class:`DisplayFragment` records,
the unit a front end (here: the terminal) draws as one row.

- :class:`EntryRenderer` renders a single entry and short-circuits when asked
  to render the same identity again.
- :class:`ListRenderer` renders an ordered list and keeps one
  ``EntryRenderer`` per identity key, so rows follow their entry, not their
  position.

Why keys matter
---------------
The guestbook prepends new entries. Keyed by position, every row would see
a different entry after a prepend and recompute. Keyed by ``VisitorEntry.id``
only the new row is computed; ``render_count`` makes this observable.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from guestbook.core.contracts.visitor import VisitorEntry


@dataclass(frozen=True, slots=True)
class DisplayFragment:
    """
    One rendered row.

    Attributes
    ----------
    key : str
        Identity key of the row; always the entry's ``id``.
    full_name, message : str
        Display text.
    visit_date : str
        Capture date as ``YYYY-MM-DD``.
    """

    key: str
    full_name: str
    message: str
    visit_date: str


def same_identity(previous: VisitorEntry | None, current: VisitorEntry) -> bool:
    """Change-detection comparison keyed on the id, then shallow field equality.

    A re-seed may hand back an entry with a known id but different text; that
    row must recompute.
    """
    if previous is None or previous.id != current.id:
        return False
    return previous is current or previous == current


class EntryRenderer:
    """Renders one entry, recomputing only when the entry id or its fields change."""

    __slots__ = ("_last_entry", "_last_fragment", "render_count")

    def __init__(self) -> None:
        self._last_entry: VisitorEntry | None = None
        self._last_fragment: DisplayFragment | None = None
        self.render_count: int = 0

    def render(self, entry: VisitorEntry) -> DisplayFragment:
        if self._last_fragment is not None and same_identity(self._last_entry, entry):
            return self._last_fragment

        fragment = DisplayFragment(
            key=entry.id,
            full_name=entry.full_name,
            message=entry.message,
            visit_date=entry.visit_date_text,
        )
        self._last_entry = entry
        self._last_fragment = fragment
        self.render_count += 1
        return fragment


class ListRenderer:
    """
    Renders an ordered list of entries, one fragment per entry.

    Entry renderers are reconciled by identity key: reused for ids seen in
    the previous pass, created for new ids, and dropped for ids that are gone.
    """

    def __init__(self) -> None:
        self._children: dict[str, EntryRenderer] = {}
        self.render_count: int = 0
        self.last_pass_count: int = 0

    def render(self, entries: Sequence[VisitorEntry]) -> tuple[DisplayFragment, ...]:
        """
        Project ``entries`` into fragments, preserving order.

        Raises
        ------
        ValueError
            If two entries share an id; keys must be unique within one pass.
        """
        children: dict[str, EntryRenderer] = {}
        fragments: list[DisplayFragment] = []
        recomputed = 0
        for entry in entries:
            if entry.id in children:
                raise ValueError(f"duplicate identity key in render pass: {entry.id}")
            child = self._children.get(entry.id) or EntryRenderer()
            children[entry.id] = child
            before = child.render_count
            fragments.append(child.render(entry))
            recomputed += child.render_count - before

        self._children = children
        self.last_pass_count = recomputed
        self.render_count += recomputed
        return tuple(fragments)

    def mounted_keys(self) -> tuple[str, ...]:
        """Identity keys of the rows rendered in the last pass, in order."""
        return tuple(self._children)


__all__ = ["DisplayFragment", "EntryRenderer", "ListRenderer", "same_identity"]
