# scripts/smoke.py
"""
Smoke Test Script for a live Guestbook setup.

Usage
-----
1. Start the mock data source in another terminal:
    $ uv run guestbook serve

2. Run the smoke test against it:
    $ uv run python scripts/smoke.py

3. Or against any other source:
    $ uv run python scripts/smoke.py --url http://localhost:9191/
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from guestbook.client.session import Session

# --------------------------------------------------------------------------- #
# Environment Setup
# --------------------------------------------------------------------------- #
env_path = Path(".env")
if env_path.exists():
    load_dotenv(env_path)
    print("✅ Loaded .env file")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)


def main() -> None:
    """Bootstrap, submit twice, and check that only new rows are recomputed."""
    parser = argparse.ArgumentParser(description="Run Guestbook Smoke Test")
    parser.add_argument("--url", "-u", type=str, help="Data source URL")
    args = parser.parse_args()

    with Session.from_settings(source_url=args.url) as session:
        url = session.loader.url
        seeded = session.start()
        print(f"🚀 Seeded {seeded} visitor(s) from {url}")
        session.render()

        for name, message in (("Alice", "Hello"), ("Bob", "Hi")):
            session.submit(name, message)
            rows = session.render()
            recomputed = session.renderer.last_pass_count
            print(f"   + {name}: {len(rows)} row(s), {recomputed} recomputed")
            if recomputed != 1 or rows[0].full_name != name:
                print("❌ Unexpected render result")
                sys.exit(1)

        if seeded == 0:
            print("⚠️  Bootstrap returned nothing. Is the mock server running?")
            sys.exit(1)

    print("✅ Smoke test passed")


if __name__ == "__main__":
    main()
