# -----------------------------------------------------------------------------
# This module provides the bootstrap loader of a guestbook session:
#   - issues one read-only GET to the configured data source
#   - decodes the JSON array of visitor-shaped records
#   - seeds the session's VisitorStore exactly once
#
# The fetch uses only the Python standard library (`urllib.request`). Unit
# tests are expected to *mock* the internal `_get()` method so that no real
# HTTP calls are made during CI.
#
# Failure policy
# --------------
# A failed bootstrap is never fatal. Malformed URLs, network errors, truncated
# responses, HTTP error statuses, undecodable bodies, malformed records and
# rejected seeds are all logged at WARNING and leave the store untouched; the
# session stays usable with zero prior entries. There is no retry.
# -----------------------------------------------------------------------------
from __future__ import annotations

import http.client
import json
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from guestbook.core.contracts.visitor import VisitorEntry
from guestbook.core.settings import Settings, get_logger, load_settings
from guestbook.core.store import StoreError, VisitorStore

logger = get_logger("guestbook.bootstrap")


class BootstrapError(RuntimeError):
    """The data source could not be reached or returned an unusable body."""


@dataclass(slots=True)
class BootstrapLoader:
    """Single-shot loader that seeds a :class:`VisitorStore` from a data source.

    Parameters
    ----------
    store:
        The session's store. The loader only ever calls ``seed()`` on it.
    url:
        Fully-qualified URL of the data source (``GET`` returns a JSON array).
    timeout_seconds:
        Socket timeout for the request.
    """

    store: VisitorStore
    url: str
    timeout_seconds: float = 10.0
    loaded: bool = field(default=False, init=False)

    # --------------------------------------------------------------------- #
    # Constructors
    # --------------------------------------------------------------------- #
    @classmethod
    def from_settings(
        cls,
        store: VisitorStore,
        config: Settings | None = None,
    ) -> BootstrapLoader:
        """Construct a loader from ``GUESTBOOK_SOURCE_URL`` / ``GUESTBOOK_FETCH_TIMEOUT``."""
        cfg = config or load_settings()
        return cls(store=store, url=cfg.source_url, timeout_seconds=cfg.fetch_timeout)

    # --------------------------------------------------------------------- #
    # Public API
    # --------------------------------------------------------------------- #
    def load(self) -> int:
        """Fetch the initial visitors and seed the store.

        Returns
        -------
        int
            Number of entries seeded; ``0`` when the fetch or the seed failed,
            or when this loader already ran.
        """
        if self.loaded:
            logger.info("Bootstrap already ran for this session; skipping")
            return 0
        self.loaded = True

        try:
            records = self._get(url=self.url)
            entries = self._decode(records)
            self.store.seed(entries)
        except (BootstrapError, ValidationError, StoreError) as exc:
            logger.warning("Bootstrap from %s failed: %s", self.url, exc)
            return 0

        logger.info("Seeded %d visitors from %s", len(entries), self.url)
        return len(entries)

    # --------------------------------------------------------------------- #
    # Internal helpers
    # --------------------------------------------------------------------- #
    @staticmethod
    def _decode(records: Any) -> list[VisitorEntry]:
        """Turn the decoded JSON body into entries, in source order."""
        if not isinstance(records, list):
            raise BootstrapError(f"expected a JSON array, got {type(records).__name__}")

        entries: list[VisitorEntry] = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise BootstrapError(f"record {index} is not an object")
            entries.append(VisitorEntry.from_record(record))
        return entries

    def _get(self, *, url: str) -> Any:
        """Perform an HTTP GET request and decode the JSON response.

        This is the network seam for unit tests.

        Raises
        ------
        BootstrapError
            If the request fails for any reason, or if the response body
            cannot be decoded as JSON.
        """
        try:
            request = urllib.request.Request(
                url=url,
                headers={"Accept": "application/json"},
                method="GET",
            )
            with urllib.request.urlopen(request, timeout=self.timeout_seconds) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as exc:
            raise BootstrapError(f"HTTP error {exc.code}: {exc.reason}") from exc
        except urllib.error.URLError as exc:
            raise BootstrapError(f"network error: {exc.reason}") from exc
        except (OSError, http.client.HTTPException) as exc:
            raise BootstrapError(f"network error: {exc!r}") from exc
        except ValueError as exc:
            raise BootstrapError(f"invalid source URL {url!r}: {exc}") from exc

        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise BootstrapError("failed to decode response as JSON") from exc


__all__ = ["BootstrapError", "BootstrapLoader"]
