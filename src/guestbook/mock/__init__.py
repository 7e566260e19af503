"""Mock visitor data source (single-route FastAPI service)."""

from __future__ import annotations

from .app import create_app, load_payload

__all__ = ["create_app", "load_payload"]
