"""
adapters.cli.main - CLI adapter for the user directory client.

The terminal counterpart of a directory view: it asks SessionStore whether a
session is active (and "redirects" by exiting when it is not), then drives
DirectoryController and prints its notifications.

Commands
--------
  login      Sign in and save the token locally (~/.user-directory/session.json)
  logout     Clear the stored token
  status     Show whether a session is active
  users      List one page of users            (requires login)
  edit       Edit a user on a given page        (requires login)
  delete     Delete a user on a given page      (requires login)

Usage
-----
  python src/adapters/cli/main.py login --email eve.holt@reqres.in
  python src/adapters/cli/main.py users --page 2
  python src/adapters/cli/main.py edit 7 --page 2 --first-name Mike
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

# ── Ensure src/ is on the path when run as a script ──
_SRC = Path(__file__).resolve().parent.parent.parent
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from application.services.directory import DirectoryController
from application.services.session import SessionStore
from domain.entities import UserRecord
from domain.exceptions import AuthenticationError
from domain.models import DirectoryPage, Notification
from factory import ServiceFactory
from infrastructure.config import Settings

__version__ = "1.0.0"

console = Console()
app = typer.Typer(
    help="User Directory CLI",
    add_completion=False,
    no_args_is_help=True,
)

# Set by tests (or an embedding application) to bypass Settings.from_env().
_factory: ServiceFactory | None = None


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def set_factory(factory: ServiceFactory | None) -> None:
    global _factory
    _factory = factory


def get_factory() -> ServiceFactory:
    global _factory
    if _factory is None:
        _factory = ServiceFactory(Settings.from_env())
    return _factory


def _require_session() -> SessionStore:
    """Return the active session or exit with a user-friendly error."""
    session = get_factory().session_store()
    if not session.is_authenticated:
        console.print(
            "[bold red]Not logged in.[/bold red] "
            "Run [bold]login[/bold] first."
        )
        raise typer.Exit(code=1)
    return session


def _make_controller() -> DirectoryController:
    _require_session()
    controller = get_factory().create_directory_controller()
    controller.subscribe(_print_notification)
    return controller


def _print_notification(notification: Notification) -> None:
    style = "bold red" if notification.is_error else "bold green"
    console.print(f"[{style}]{notification.title}:[/{style}] {notification.description}")


async def _load_or_exit(controller: DirectoryController, page: int) -> None:
    with console.status(f"[bold cyan]Loading page {page}…", spinner="dots"):
        loaded = await controller.load_page(page)
    if not loaded:
        raise typer.Exit(code=1)


def _find_or_exit(controller: DirectoryController, user_id: int) -> UserRecord:
    record = controller.find(user_id)
    if record is None:
        console.print(
            f"[bold red]User {user_id} is not on page {controller.current_page}.[/bold red]"
        )
        raise typer.Exit(code=1)
    return record


def _render_page(page: DirectoryPage) -> None:
    t = Table(box=box.SIMPLE, padding=(0, 2))
    t.add_column("ID", style="bold", justify="right")
    t.add_column("Name")
    t.add_column("Email")
    t.add_column("Avatar", style="dim")
    for record in page.records:
        t.add_row(
            str(record.id),
            record.full_name or "[dim]—[/dim]",
            record.email,
            record.avatar_url or f"[bold]{record.initials}[/bold]",
        )
    console.print(Panel(t, title="Users", border_style="blue"))
    console.print(f"Page [bold]{page.page}[/bold] of [bold]{page.total_pages}[/bold]")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"user-directory v{__version__}")
        raise typer.Exit()


# ---------------------------------------------------------------------------
# Commands: Auth
# ---------------------------------------------------------------------------

@app.command()
def login(
    email: str = typer.Option(..., "--email", "-e", prompt=True),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
) -> None:
    """Sign in to the directory service."""
    session = get_factory().session_store()

    async def _run() -> None:
        try:
            await session.login(email, password)
        except AuthenticationError:
            console.print(
                "[bold red]Login failed.[/bold red] "
                "Check your email and password."
            )
            raise typer.Exit(code=1)

    asyncio.run(_run())
    console.print(Panel(
        f"[bold green]Logged in![/bold green] Welcome, [bold]{email}[/bold].\n"
        "Run [bold]users[/bold] to browse the directory.",
        border_style="green",
    ))


@app.command()
def logout() -> None:
    """Sign out and clear the stored token."""
    session = get_factory().session_store()
    was_authenticated = session.is_authenticated
    session.logout()
    if was_authenticated:
        console.print("[green]Logged out.[/green]")
    else:
        console.print("[dim]Not currently logged in.[/dim]")


@app.command()
def status() -> None:
    """Show whether a session is active."""
    if get_factory().session_store().is_authenticated:
        console.print("[green]Logged in.[/green]")
    else:
        console.print("[dim]Not logged in.[/dim]")


# ---------------------------------------------------------------------------
# Commands: Directory (requires login)
# ---------------------------------------------------------------------------

@app.command()
def users(
    page: int = typer.Option(1, "--page", "-n", min=1, help="1-based page number."),
) -> None:
    """List one page of users."""
    controller = _make_controller()

    async def _run() -> None:
        await _load_or_exit(controller, page)
        _render_page(controller.page)

    asyncio.run(_run())


@app.command()
def edit(
    user_id: int = typer.Argument(..., help="ID of the user to edit."),
    page: int = typer.Option(1, "--page", "-n", min=1, help="Page the user is on."),
    email: Optional[str] = typer.Option(None, "--email"),
    first_name: Optional[str] = typer.Option(None, "--first-name"),
    last_name: Optional[str] = typer.Option(None, "--last-name"),
    avatar: Optional[str] = typer.Option(None, "--avatar"),
) -> None:
    """Edit a user. Fields not given as options are prompted for."""
    controller = _make_controller()
    asyncio.run(_load_or_exit(controller, page))
    record = _find_or_exit(controller, user_id)
    controller.begin_edit(record)

    interactive = all(v is None for v in (email, first_name, last_name, avatar))
    updated = UserRecord(
        id=record.id,
        email=_field("Email", email, record.email, interactive),
        first_name=_field("First name", first_name, record.first_name, interactive),
        last_name=_field("Last name", last_name, record.last_name, interactive),
        avatar_url=_field("Avatar URL", avatar, record.avatar_url, interactive),
    )
    if updated == record:
        controller.cancel_edit()
        console.print("[dim]Nothing to change.[/dim]")
        return

    async def _run() -> bool:
        with console.status("[bold cyan]Saving…", spinner="dots"):
            return await controller.confirm_edit(updated)

    if not asyncio.run(_run()):
        controller.cancel_edit()
        raise typer.Exit(code=1)


def _field(label: str, given: Optional[str], current: str, interactive: bool) -> str:
    if given is not None:
        return given
    if interactive:
        return Prompt.ask(f"[bold]{label}[/bold]", default=current)
    return current


@app.command()
def delete(
    user_id: int = typer.Argument(..., help="ID of the user to delete."),
    page: int = typer.Option(1, "--page", "-n", min=1, help="Page the user is on."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """Delete a user."""
    controller = _make_controller()
    asyncio.run(_load_or_exit(controller, page))
    record = _find_or_exit(controller, user_id)
    controller.begin_delete(record)

    label = record.full_name or f"user #{record.id}"
    if not yes and not Confirm.ask(
        f"Delete [bold]{label}[/bold]? This action cannot be undone."
    ):
        controller.cancel_delete()
        console.print("[dim]Cancelled.[/dim]")
        return

    async def _run() -> bool:
        with console.status("[bold cyan]Deleting…", spinner="dots"):
            return await controller.confirm_delete(record.id)

    if not asyncio.run(_run()):
        controller.cancel_delete()
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# Global options
# ---------------------------------------------------------------------------

@app.callback()
def _callback(
    version: bool = typer.Option(
        False, "--version", "-v",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """User Directory CLI"""
    _configure_logging(get_factory().config.log_level)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
