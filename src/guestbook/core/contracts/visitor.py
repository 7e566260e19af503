"""
Visitor contracts: the immutable guestbook entry.

This module defines :class:`VisitorEntry`, the single record type shared by
the store, the renderers, the bootstrap loader and the mock data source.

Identity
--------
Every entry carries an ``id`` generated when the entry is created. The id is
the only identity used downstream (render keys, change detection); the
position of an entry in a list never identifies it, because new entries are
prepended and would shift every index.

Wire shape
----------
Python attributes are snake_case; the JSON shape served by the mock data
source is camelCase (``fullName``, ``visitDate``). Both names are accepted on
input and ``to_record()`` emits the camelCase form.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def new_entry_id() -> str:
    """Return a fresh, globally unique entry identifier."""
    return uuid.uuid4().hex


class VisitorEntry(BaseModel):
    """
    One visitor's submitted full name, message and capture date.

    Parameters
    ----------
    id:
        Stable unique identifier. Generated when omitted; never reassigned.
    full_name:
        Visitor name. Stripped; must not be empty.
    message:
        Visitor message. Stripped; must not be empty.
    visit_date:
        Capture date in the local process date. Defaults to today.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    id: str = Field(default_factory=new_entry_id, min_length=1)
    full_name: str = Field(min_length=1)
    message: str = Field(min_length=1)
    visit_date: date = Field(default_factory=date.today)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        """Numeric ids from hand-written fixtures are accepted as text."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("visit_date", mode="before")
    @classmethod
    def _date_part(cls, v: Any) -> Any:
        """Keep only the calendar part of full ISO timestamps."""
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> VisitorEntry:
        """
        Build an entry from a loosely-shaped source record.

        Keys with a ``None`` value are treated as missing, so a record without
        an ``id`` receives a generated one and a record without a
        ``visitDate`` is stamped with today's date.
        """
        cleaned = {k: v for k, v in record.items() if v is not None}
        return cls.model_validate(cleaned)

    def to_record(self) -> dict[str, Any]:
        """Return the camelCase, JSON-safe representation."""
        return self.model_dump(mode="json", by_alias=True)

    @property
    def visit_date_text(self) -> str:
        """The capture date as ``YYYY-MM-DD``."""
        return self.visit_date.isoformat()


__all__ = ["VisitorEntry", "new_entry_id"]
