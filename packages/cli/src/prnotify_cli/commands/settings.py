"""settings command: read and change notification preferences."""

from __future__ import annotations

import asyncio

import click
from rich.console import Console

console = Console()


def _require_store(ctx):
    from prnotify_store.noop import NoOpStore

    store = ctx.obj.get("store") if ctx.obj else None
    if store is None or isinstance(store, NoOpStore):
        raise click.UsageError(
            "No store configured. Add 'store: sqlite' or 'store: gist' to .prnotify.yml, "
            "or run `prnotify init` to set one up."
        )
    return store


@click.group("settings")
def settings_cmd():
    """Show or change a user's notification preference."""


@settings_cmd.command("show")
@click.argument("user")
@click.pass_context
def show_cmd(ctx, user: str):
    """Show whether USER receives notifications."""
    store = ctx.obj["store"]
    settings = asyncio.run(store.get_user_settings(user))

    if settings.is_enabled:
        suffix = "" if settings.enabled is not None else " [dim](default)[/dim]"
        console.print(f"{user}: [green]enabled[/green]{suffix}")
    else:
        console.print(f"{user}: [red]disabled[/red]")


@settings_cmd.command("set")
@click.argument("user")
@click.option("--enable/--disable", "enabled", required=True, help="Turn notifications on or off.")
@click.pass_context
def set_cmd(ctx, user: str, enabled: bool):
    """Turn notifications on or off for USER."""
    from prnotify_store.models import UserSettings

    store = _require_store(ctx)
    asyncio.run(store.set_user_settings(user, UserSettings(user_id=user, enabled=enabled)))

    state = "[green]enabled[/green]" if enabled else "[red]disabled[/red]"
    console.print(f"Notifications {state} for {user}.")
