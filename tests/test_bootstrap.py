"""Unit tests for the bootstrap loader.

The network seam is `BootstrapLoader._get`; most tests patch it at the class
level. Two tests go one level lower and patch `urllib.request.urlopen` so the
request building and error mapping are exercised as well.
"""

from __future__ import annotations

import http.client
import io
import urllib.error
from typing import Any

import pytest

from guestbook.client.bootstrap import BootstrapError, BootstrapLoader
from guestbook.core.settings import Settings
from guestbook.core.store import VisitorStore

URL = "http://localhost:9191/"


def _loader(store: VisitorStore) -> BootstrapLoader:
    return BootstrapLoader(store=store, url=URL, timeout_seconds=1.0)


def _stub_get(monkeypatch: Any, body: Any) -> dict[str, Any]:
    captured: dict[str, Any] = {"calls": 0}

    def fake_get(self: BootstrapLoader, *, url: str) -> Any:
        captured["calls"] += 1
        captured["url"] = url
        return body

    monkeypatch.setattr(BootstrapLoader, "_get", fake_get)
    return captured


def _failing_get(monkeypatch: Any, exc: Exception) -> None:
    def fake_get(self: BootstrapLoader, *, url: str) -> Any:
        raise exc

    monkeypatch.setattr(BootstrapLoader, "_get", fake_get)


def test_seeds_store_with_fetched_records(monkeypatch: Any) -> None:
    """A one-element array becomes a one-element store, with a generated id."""
    captured = _stub_get(monkeypatch, [{"fullName": "Carol", "message": "Hi"}])
    store = VisitorStore()

    seeded = _loader(store).load()

    assert seeded == 1
    assert captured["url"] == URL
    (entry,) = store.snapshot()
    assert entry.full_name == "Carol"
    assert entry.message == "Hi"
    assert entry.id


def test_source_order_and_ids_are_kept(monkeypatch: Any) -> None:
    _stub_get(
        monkeypatch,
        [
            {"id": "n1", "fullName": "Newest", "message": "a", "visitDate": "2019-03-12"},
            {"id": "o1", "fullName": "Oldest", "message": "b", "visitDate": "2019-03-01"},
        ],
    )
    store = VisitorStore()

    _loader(store).load()

    assert [e.id for e in store.snapshot()] == ["n1", "o1"]


def test_connection_error_leaves_store_empty(monkeypatch: Any) -> None:
    _failing_get(monkeypatch, BootstrapError("network error: connection refused"))
    store = VisitorStore()

    assert _loader(store).load() == 0
    assert store.snapshot() == ()


@pytest.mark.parametrize(  # type: ignore[misc]
    "body",
    [
        {"fullName": "Carol", "message": "Hi"},
        "not a list",
        [1, 2, 3],
        [{"fullName": "", "message": "Hi"}],
        [{"message": "no name"}],
        [
            {"id": "dup", "fullName": "A", "message": "a"},
            {"id": "dup", "fullName": "B", "message": "b"},
        ],
    ],
)
def test_unusable_payload_leaves_store_empty(monkeypatch: Any, body: Any) -> None:
    _stub_get(monkeypatch, body)
    store = VisitorStore()

    assert _loader(store).load() == 0
    assert store.snapshot() == ()


def test_loads_only_once(monkeypatch: Any) -> None:
    captured = _stub_get(monkeypatch, [{"fullName": "Carol", "message": "Hi"}])
    loader = _loader(VisitorStore())

    assert loader.load() == 1
    assert loader.load() == 0
    assert captured["calls"] == 1


def test_late_seed_after_submission_is_not_applied(monkeypatch: Any) -> None:
    """A submission made before the bootstrap lands is never overwritten."""
    _stub_get(monkeypatch, [{"fullName": "Carol", "message": "Hi"}])
    store = VisitorStore()
    alice = store.add_entry("Alice", "Hello")

    assert _loader(store).load() == 0
    assert store.snapshot() == (alice,)


def test_from_settings_uses_configured_source() -> None:
    config = Settings(GUESTBOOK_SOURCE_URL="http://example.test/", GUESTBOOK_FETCH_TIMEOUT=2.5)

    loader = BootstrapLoader.from_settings(VisitorStore(), config)

    assert loader.url == "http://example.test/"
    assert loader.timeout_seconds == 2.5


def test_urlopen_failure_is_caught(monkeypatch: Any) -> None:
    """A refused connection at the socket level never escapes `load()`."""

    def refuse(request: Any, timeout: float) -> Any:
        raise urllib.error.URLError("Connection refused")

    monkeypatch.setattr("guestbook.client.bootstrap.urllib.request.urlopen", refuse)
    store = VisitorStore()

    assert _loader(store).load() == 0
    assert store.snapshot() == ()


def test_get_decodes_json_body(monkeypatch: Any) -> None:
    seen: dict[str, Any] = {}

    def fake_urlopen(request: Any, timeout: float) -> io.BytesIO:
        seen["method"] = request.get_method()
        seen["url"] = request.full_url
        seen["timeout"] = timeout
        return io.BytesIO(b'[{"fullName": "Carol", "message": "Hi"}]')

    monkeypatch.setattr("guestbook.client.bootstrap.urllib.request.urlopen", fake_urlopen)

    body = _loader(VisitorStore())._get(url=URL)

    assert body == [{"fullName": "Carol", "message": "Hi"}]
    assert seen == {"method": "GET", "url": URL, "timeout": 1.0}


def test_get_rejects_non_json_body(monkeypatch: Any) -> None:
    monkeypatch.setattr(
        "guestbook.client.bootstrap.urllib.request.urlopen",
        lambda request, timeout: io.BytesIO(b"<html>nope</html>"),
    )

    with pytest.raises(BootstrapError):
        _loader(VisitorStore())._get(url=URL)


def test_url_without_scheme_is_caught() -> None:
    """`--url localhost9191` is a typo, not a crash."""
    store = VisitorStore()
    loader = BootstrapLoader(store=store, url="localhost9191", timeout_seconds=1.0)

    assert loader.load() == 0
    assert store.snapshot() == ()


def test_get_maps_bad_url_to_bootstrap_error() -> None:
    with pytest.raises(BootstrapError, match="invalid source URL"):
        _loader(VisitorStore())._get(url="localhost9191")


class _TruncatedResponse(io.BytesIO):
    def read(self, *args: Any) -> bytes:
        raise http.client.IncompleteRead(b"[{", 10)


def test_truncated_response_is_caught(monkeypatch: Any) -> None:
    monkeypatch.setattr(
        "guestbook.client.bootstrap.urllib.request.urlopen",
        lambda request, timeout: _TruncatedResponse(),
    )
    store = VisitorStore()

    assert _loader(store).load() == 0
    assert store.snapshot() == ()
