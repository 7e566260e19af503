# src/guestbook/cli.py
"""
Guestbook Command Line Interface (CLI).

This module implements the user-facing terminal interface using `typer` and `rich`.

Features
--------
- **Mock Server**: Serve the static visitor list other sessions bootstrap from.
- **Status Spinners**: Visual feedback while the bootstrap fetch is in flight.
- **Rich Rendering**: Draws the visitor list as a table, newest first.
- **Interactive Session**: A terminal form that prepends entries and shows how
  many rows were actually re-rendered.

Usage
-----
    # Start the mock data source on port 9191
    $ guestbook serve

    # Print the visitors once
    $ guestbook show

    # Sign the guestbook
    $ guestbook session --url http://localhost:9191/
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, Prompt
from rich.table import Table

from guestbook.client.session import Session
from guestbook.core.render import DisplayFragment

load_dotenv()

app = typer.Typer(
    help="Guestbook: a visitor list that re-renders only what changed.",
    rich_markup_mode="markdown",
)
console = Console()

UrlOption = Annotated[
    str | None,
    typer.Option(
        "--url",
        "-u",
        help="Data source to bootstrap from (defaults to GUESTBOOK_SOURCE_URL).",
    ),
]


# --------------------------------------------------------------------------- #
# Helpers: Rendering
# --------------------------------------------------------------------------- #


def _print_header() -> None:
    console.print(
        Panel.fit(
            "[bold cyan]Guestbook[/bold cyan]\nTesting [u]rendering[/u] performance.",
            border_style="cyan",
        )
    )


def _render_visitors(fragments: Sequence[DisplayFragment]) -> None:
    """
    Helper: Draw the rendered rows as a Rich table.

    Used by both `show` and `session` so the list looks the same everywhere.
    """
    if not fragments:
        console.print("[dim]No visitors yet.[/dim]")
        return

    table = Table(title="Visitors")
    table.add_column("Full Name", style="bold")
    table.add_column("Message")
    table.add_column("Visited", style="dim")
    for fragment in fragments:
        table.add_row(fragment.full_name, fragment.message, fragment.visit_date)
    console.print(table)


def _bootstrap(session: Session) -> None:
    """Helper: Run the bootstrap fetch behind a spinner."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f"[cyan]Loading visitors from {session.loader.url}...", total=None)
        seeded = session.start()

    if seeded:
        console.print(f"[dim]Loaded {seeded} visitor(s).[/dim]")
    else:
        console.print("[dim yellow]No visitors loaded; starting with an empty list.[/dim yellow]")


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def serve(
    host: Annotated[
        str | None,
        typer.Option("--host", help="Bind address (defaults to GUESTBOOK_MOCK_HOST)."),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", "-p", help="Listening port (defaults to GUESTBOOK_MOCK_PORT)."),
    ] = None,
) -> None:
    """
    Run the mock visitor data source.

    Serves the static visitor list on `GET /` with permissive CORS headers.
    """
    try:
        from guestbook.mock.server import main as run_server

        run_server(host=host, port=port)
    except (OSError, ValueError) as e:
        console.print(f"\n[bold red]❌ Server Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e


@app.command()  # type: ignore[misc]
def show(url: UrlOption = None) -> None:
    """Bootstrap from the data source and print the visitor list once."""
    with Session.from_settings(source_url=url) as session:
        _bootstrap(session)
        _render_visitors(session.render())


@app.command("session")  # type: ignore[misc]
def run_session(url: UrlOption = None) -> None:
    """
    Sign the guestbook interactively.

    Each submission is prepended to the list. Leaving either field blank adds
    nothing.
    """
    _print_header()
    with Session.from_settings(source_url=url) as session:
        _bootstrap(session)
        _render_visitors(session.render())

        while True:
            full_name = Prompt.ask("Full Name", default="", show_default=False)
            message = Prompt.ask("Message", default="", show_default=False)

            entry = session.submit(full_name, message)
            if entry is None:
                console.print("[yellow]Both fields are required; nothing added.[/yellow]")
            else:
                _render_visitors(session.render())
                console.print(
                    f"[dim]{session.renderer.last_pass_count} row(s) re-rendered.[/dim]"
                )

            if not Confirm.ask("Add another message?", default=True):
                break

        console.print(f"[bold green]✅ Done![/bold green] {len(session.store)} visitor(s) this session.")


if __name__ == "__main__":
    app()
