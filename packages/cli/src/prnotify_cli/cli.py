"""CLI entry point for prnotify.

Commands:
  notify    resolve recipients for a PR event and send notifications
  settings  show or change a user's notification preference
  init      interactive setup wizard for new teams
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console

from prnotify_cli.commands.init import init_cmd
from prnotify_cli.commands.notify import notify_cmd
from prnotify_cli.commands.settings import settings_cmd

console = Console()


def _build_store(config: dict):
    """Instantiate the configured settings store from .prnotify.yml settings.

    Store selection hierarchy:
      store: gist   → GistStore  (requires gist_id and github_token, else UsageError)
      store: sqlite → SQLiteStore (uses store_path, default .prnotify.db)
      (default)     → NoOpStore  (everyone opted in, nothing persisted)
    """
    from prnotify_store.noop import NoOpStore

    store_type = config.get("store", "noop")

    if store_type == "gist":
        from prnotify_store.gist import GistStore

        gist_id = config.get("gist_id")
        token = config.get("github_token")
        if not gist_id:
            raise click.UsageError("store: gist requires gist_id in .prnotify.yml. Run `prnotify init` to create one.")
        if not token:
            raise click.UsageError("store: gist requires a GitHub token with gist scope. Set PRNOTIFY_GITHUB_TOKEN.")
        return GistStore(gist_id=gist_id, token=token)

    if store_type == "sqlite":
        from prnotify_store.sqlite import SQLiteStore

        return SQLiteStore(db_path=config.get("store_path") or ".prnotify.db")

    return NoOpStore()


def _build_chat_service(config: dict):
    """Instantiate the configured chat transport.

      chat: webhook → WebhookChatService (requires webhook_url)
      (default)     → ConsoleChatService
    """
    from prnotify_core.chat.console import ConsoleChatService

    if config.get("chat") == "webhook":
        from prnotify_core.chat.webhook import WebhookChatService

        url = config.get("webhook_url")
        if not url:
            raise click.UsageError("chat: webhook requires webhook_url in config or PRNOTIFY_WEBHOOK_URL.")
        return WebhookChatService(url=url, timeout=float(config.get("webhook_timeout") or 10.0))

    return ConsoleChatService(console=console)


@click.group()
@click.version_option(
    version=importlib.metadata.version("prnotify"),
    prog_name="prnotify",
)
@click.option(
    "--config",
    "config_path",
    default=".prnotify.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRNOTIFY_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log resolution details to stderr.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Notify the right people about PR comments, reviews and review requests."""
    from prnotify_core.config import load_config
    from prnotify_cli.auth import resolve_github_token

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    ctx.ensure_object(dict)

    config = load_config(config_path)

    # Resolve token early so all subcommands share the same resolution.
    token = resolve_github_token()
    if token:
        config["github_token"] = token

    store = _build_store(config)
    ctx.obj["store"] = store
    ctx.obj["config"] = config
    ctx.call_on_close(store.close)


main.add_command(notify_cmd)
main.add_command(settings_cmd)
main.add_command(init_cmd)
