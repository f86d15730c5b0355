import asyncio

import typer
from rich.console import Console
from rich.table import Table

from code_helper.config import load_settings
from code_helper.core.ports.users import UserStore
from code_helper.errors import ConfigError

users_app = typer.Typer(help="Inspect the user store.")
console = Console()


def _get_store() -> UserStore:
    from code_helper.db.factory import create_user_store

    return create_user_store(load_settings(require_api_key=False))


@users_app.command("list")
def list_users() -> None:
    """List registered users (password hashes are never shown)."""
    try:
        store = _get_store()
    except ConfigError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc

    async def _run() -> None:
        try:
            users = await store.list_users()
        finally:
            await store.dispose()
        table = Table(show_lines=False)
        for h in ("id", "name", "email"):
            table.add_column(h)
        for user in users:
            table.add_row(str(user.id), user.name, user.email)
        console.print(table)
        console.print(f"({len(users)} users)")

    asyncio.run(_run())
