"""
ASGI Entry Point for the mock visitor data source.

This module exposes the `app` object required by ASGI servers (Uvicorn).
It loads environment variables from `.env` first so that the payload path
and port are available before the application factory runs.

Usage
-----
Run via the module entry point:
    $ uv run python -m guestbook.mock.server

Or via uvicorn directly:
    $ uv run uvicorn guestbook.mock.server:app --port 9191
"""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from guestbook.core.settings import get_logger, load_settings
from guestbook.mock.app import create_app

# Load environment variables from .env BEFORE building the application.
load_dotenv(dotenv_path=Path(".env"))

# Factory invocation
app = create_app()


def main(host: str | None = None, port: int | None = None) -> None:
    """Run the mock server on the configured host and port (default 9191)."""
    config = load_settings()
    bind_host = host or config.mock_host
    bind_port = port or config.mock_port

    get_logger("guestbook.mock").info("Mock Server running on PORT %d", bind_port)
    uvicorn.run(app, host=bind_host, port=bind_port, log_level="warning")


if __name__ == "__main__":
    main()
