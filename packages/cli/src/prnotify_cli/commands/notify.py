"""notify command: send notifications for one PR event.

Meant to be called by a host process per incoming event, typically the
GitHub Actions workflow generated by `prnotify init`:

    prnotify notify comment --repo owner/name --pr 12 --comment-id 345
    prnotify notify review-request --repo owner/name --pr 12 --reviewer bob
    prnotify notify review --repo owner/name --pr 12 --review-id 678
"""

from __future__ import annotations

import asyncio

import click
from github import GithubException
from rich.console import Console

from prnotify_core.errors import PrNotifyError
from prnotify_core.handlers import Handlers
from prnotify_core.types import PRID
from prnotify_core.vcs.github import GitHubVCS

console = Console()


def _event_options(f):
    """Options shared by every event subcommand."""
    f = click.option(
        "--shadow",
        "-s",
        is_flag=True,
        help="Dry-run mode: print notifications instead of sending them.",
    )(f)
    f = click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")(f)
    f = click.option("--repo", required=True, help="GitHub repository in owner/name format.")(f)
    return f


def _build_handlers(ctx: click.Context, repo: str, shadow: bool) -> Handlers:
    from prnotify_cli.cli import _build_chat_service
    from prnotify_core.chat.console import ConsoleChatService

    config = ctx.obj["config"]
    token = config.get("github_token")
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )

    chat_service = ConsoleChatService(console=console) if shadow else _build_chat_service(config)
    try:
        vcs = GitHubVCS.from_token(repo, token)
    except GithubException as e:
        raise click.ClickException(f"Could not open repository {repo}: {e}") from e
    return Handlers(store=ctx.obj["store"], vcs=vcs, chat_service=chat_service)


async def _closing(coro, chat_service):
    try:
        return await coro
    finally:
        await chat_service.aclose()


def _run(handlers: Handlers, coro) -> list[str]:
    """Run a handler coroutine and translate domain errors into CLI errors.

    The chat transport is closed once the event is handled, whatever the outcome.
    """
    try:
        return asyncio.run(_closing(coro, handlers.chat_service))
    except PrNotifyError as e:
        raise click.ClickException(str(e)) from e
    except GithubException as e:
        raise click.ClickException(f"GitHub API error ({e.status}): {e.data}") from e


def _report(recipients: list[str], shadow: bool) -> None:
    if not recipients:
        console.print("[yellow]No one to notify.[/yellow]")
        return
    verb = "Would notify" if shadow else "Notified"
    console.print(f"[green]{verb} {len(recipients)} user(s):[/green] {', '.join(recipients)}")


@click.group("notify")
def notify_cmd():
    """Resolve recipients for a PR event and send notifications."""


@notify_cmd.command("comment")
@_event_options
@click.option("--comment-id", required=True, help="ID of the new review comment.")
@click.pass_context
def comment_cmd(ctx, repo: str, pr_number: int, shadow: bool, comment_id: str):
    """Notify everyone involved in the thread of a new review comment."""
    handlers = _build_handlers(ctx, repo, shadow)
    pr_id = PRID(str(pr_number))

    async def run():
        comments = await handlers.vcs.get_comments_by_pr(pr_id)
        comment = next((c for c in comments if c.id == comment_id), None)
        if comment is None:
            raise click.ClickException(f"Comment {comment_id} not found on PR #{pr_number}.")
        return await handlers.handle_new_comment(comment)

    _report(_run(handlers, run()), shadow)


@notify_cmd.command("review-request")
@_event_options
@click.option("--reviewer", required=True, help="Login of the user whose review was requested.")
@click.pass_context
def review_request_cmd(ctx, repo: str, pr_number: int, shadow: bool, reviewer: str):
    """Notify the user whose review was requested."""
    handlers = _build_handlers(ctx, repo, shadow)
    pr_id = PRID(str(pr_number))

    async def run():
        requests = await handlers.vcs.get_review_requests_by_pr(pr_id)
        matching = [r for r in requests if r.requestee == reviewer]
        if not matching:
            raise click.ClickException(f"No review request for {reviewer} on PR #{pr_number}.")
        # The latest request is the one that triggered this event.
        return await handlers.handle_new_review_request(matching[-1])

    _report(_run(handlers, run()), shadow)


@notify_cmd.command("review")
@_event_options
@click.option("--review-id", required=True, help="ID of the submitted review.")
@click.pass_context
def review_cmd(ctx, repo: str, pr_number: int, shadow: bool, review_id: str):
    """Notify the PR author and users mentioned in a submitted review."""
    handlers = _build_handlers(ctx, repo, shadow)
    pr_id = PRID(str(pr_number))

    async def run():
        reviews = await handlers.vcs.get_reviews_by_pr(pr_id)
        review = next((r for r in reviews if r.id == review_id), None)
        if review is None:
            raise click.ClickException(f"Review {review_id} not found on PR #{pr_number}.")
        return await handlers.handle_new_review(review)

    _report(_run(handlers, run()), shadow)
