"""Scenario tests for a full guestbook session (store + loader + form + renderer)."""

from __future__ import annotations

from datetime import date
from typing import Any

from guestbook.client.bootstrap import BootstrapError, BootstrapLoader
from guestbook.client.session import Session
from guestbook.core.settings import Settings

TODAY = date(2024, 5, 17)


def _session() -> Session:
    return Session("http://localhost:9191/", timeout_seconds=1.0, today=lambda: TODAY)


def test_components_share_one_store() -> None:
    session = _session()

    assert session.loader.store is session.store
    assert session.form._store is session.store


def test_alice_then_bob_scenario() -> None:
    session = _session()

    session.submit("Alice", "Hello")
    assert [e.to_record() | {"id": None} for e in session.store.snapshot()] == [
        {"id": None, "fullName": "Alice", "message": "Hello", "visitDate": "2024-05-17"}
    ]

    session.submit("Bob", "Hi")
    rows = session.render()

    assert [r.full_name for r in rows] == ["Bob", "Alice"]
    assert [r.key for r in rows] == [e.id for e in session.store.snapshot()]


def test_empty_name_submission_changes_nothing() -> None:
    session = _session()
    session.submit("Alice", "Hello")
    before = session.store.snapshot()

    assert session.submit("", "Hello") is None
    assert session.store.snapshot() == before


def test_bootstrap_then_submit(monkeypatch: Any) -> None:
    def fake_get(self: BootstrapLoader, *, url: str) -> Any:
        return [{"fullName": "Carol", "message": "Hi"}]

    monkeypatch.setattr(BootstrapLoader, "_get", fake_get)

    with _session() as session:
        assert session.start() == 1
        session.submit("Alice", "Hello")

        assert [r.full_name for r in session.render()] == ["Alice", "Carol"]


def test_failed_bootstrap_keeps_session_usable(monkeypatch: Any) -> None:
    def fake_get(self: BootstrapLoader, *, url: str) -> Any:
        raise BootstrapError("network error: connection refused")

    monkeypatch.setattr(BootstrapLoader, "_get", fake_get)

    with _session() as session:
        assert session.start() == 0
        assert session.render() == ()

        session.submit("Alice", "Hello")
        assert len(session.render()) == 1


def test_close_discards_entries() -> None:
    with _session() as session:
        session.submit("Alice", "Hello")
        store = session.store

    assert store.snapshot() == ()


def test_from_settings_uses_config_and_url_override() -> None:
    config = Settings(GUESTBOOK_SOURCE_URL="http://example.test/", GUESTBOOK_FETCH_TIMEOUT=2.5)

    from_config = Session.from_settings(config)
    overridden = Session.from_settings(config, source_url="http://other.test/")

    assert from_config.loader.url == "http://example.test/"
    assert from_config.loader.timeout_seconds == 2.5
    assert overridden.loader.url == "http://other.test/"
    assert overridden.loader.timeout_seconds == 2.5
