"""init command: interactive setup wizard for new teams.

Writes .prnotify.yml, optionally creates a private Gist holding the team's
notification settings, and optionally generates a GitHub Actions workflow
that calls `prnotify notify` for every review comment, review and review
request on the repository.
"""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from pathlib import Path

import click
import yaml
from rich.console import Console

console = Console()
logger = logging.getLogger(__name__)

_CONFIG_PATH = ".prnotify.yml"
_SETTINGS_FILENAME = "prnotify_settings.json"

_WORKFLOW_TEMPLATE = """\
name: PR Notifications

on:
  pull_request_review_comment:
    types: [created]
  pull_request_review:
    types: [submitted]
  pull_request:
    types: [review_requested]

jobs:
  notify:
    runs-on: ubuntu-latest
    permissions:
      contents: read
      pull-requests: read

    steps:
      - uses: actions/checkout@v4

      - name: Set up Python
        uses: actions/setup-python@v5
        with:
          python-version: "3.12"

      - name: Install prnotify
        run: pip install "prnotify=={version}"

      - name: Notify on review comment
        if: github.event_name == 'pull_request_review_comment'
        env:
          GITHUB_TOKEN: ${{{{ secrets.{token_secret} }}}}{webhook_env}
        run: |
          prnotify notify comment \\
            --repo ${{{{ github.repository }}}} \\
            --pr ${{{{ github.event.pull_request.number }}}} \\
            --comment-id ${{{{ github.event.comment.id }}}}

      - name: Notify on review
        if: github.event_name == 'pull_request_review'
        env:
          GITHUB_TOKEN: ${{{{ secrets.{token_secret} }}}}{webhook_env}
        run: |
          prnotify notify review \\
            --repo ${{{{ github.repository }}}} \\
            --pr ${{{{ github.event.pull_request.number }}}} \\
            --review-id ${{{{ github.event.review.id }}}}

      - name: Notify on review request
        if: github.event_name == 'pull_request' && github.event.requested_reviewer
        env:
          GITHUB_TOKEN: ${{{{ secrets.{token_secret} }}}}{webhook_env}
        run: |
          prnotify notify review-request \\
            --repo ${{{{ github.repository }}}} \\
            --pr ${{{{ github.event.pull_request.number }}}} \\
            --reviewer ${{{{ github.event.requested_reviewer.login }}}}
"""

_WEBHOOK_ENV = "\n          PRNOTIFY_WEBHOOK_URL: ${{ secrets.PRNOTIFY_WEBHOOK_URL }}"


@click.command("init")
@click.option("--repo", default=None, help="GitHub repository (owner/name). Auto-detected from git remote.")
def init_cmd(repo: str | None):
    """Set up prnotify for your team.

    Creates .prnotify.yml, optionally creates a shared GitHub Gist for
    notification settings, and generates a GitHub Actions workflow.
    """
    console.print("\n[bold cyan]prnotify init[/bold cyan] — team setup wizard\n")

    if repo is None:
        repo = _detect_repo_from_git()
        if repo:
            console.print(f"[dim]Detected repository: {repo}[/dim]")
        else:
            repo = click.prompt("GitHub repository (owner/name)")

    # --- Chat transport ---
    console.print("Chat transport:")
    console.print("  [bold]console[/bold]  — print notifications to the job log (default)")
    console.print("  [bold]webhook[/bold]  — POST notifications to a relay URL")
    chat = click.prompt("Chat transport", type=click.Choice(["console", "webhook"]), default="console")

    config: dict = {"chat": chat}
    if chat == "webhook":
        console.print(
            "[dim]Keep the URL out of the repo: set PRNOTIFY_WEBHOOK_URL "
            "(a repository secret in Actions).[/dim]"
        )

    # --- Settings store ---
    console.print("\nNotification settings store:")
    console.print("  [bold]none[/bold]    — everyone is notified (default)")
    console.print("  [bold]sqlite[/bold]  — local SQLite file (good for a single host)")
    console.print("  [bold]gist[/bold]    — shared GitHub Gist, zero infrastructure (recommended for teams)")
    store_type = click.prompt(
        "Store backend",
        type=click.Choice(["none", "sqlite", "gist"]),
        default="none",
    )

    if store_type == "sqlite":
        db_path = click.prompt("SQLite database path", default=".prnotify.db")
        config["store"] = "sqlite"
        if db_path != ".prnotify.db":
            config["store_path"] = db_path
        console.print(f"[green]SQLite store configured at {db_path}[/green]")

    elif store_type == "gist":
        console.print(
            "\n[yellow]Note:[/yellow] Gist store requires a token with [bold]gist[/bold] scope. "
            "The built-in GITHUB_TOKEN in Actions does not cover Gists — "
            "use a PAT stored as a repository secret (e.g. PRNOTIFY_GITHUB_TOKEN)."
        )
        gist_id = _create_settings_gist(repo)
        if gist_id:
            console.print(f"[green]Created settings Gist: {gist_id}[/green]")
            config["store"] = "gist"
            config["gist_id"] = gist_id
        else:
            console.print("[yellow]Gist creation failed — add gist_id manually to .prnotify.yml[/yellow]")

    _write_config(config)
    console.print(f"[green]Created {_CONFIG_PATH}[/green]")

    # --- GitHub Actions workflow ---
    if click.confirm("\nGenerate .github/workflows/prnotify.yml for GitHub Actions?", default=True):
        token_secret = "PRNOTIFY_GITHUB_TOKEN" if config.get("store") == "gist" else "GITHUB_TOKEN"
        _write_workflow(token_secret, webhook=chat == "webhook")
        console.print("[green]Created .github/workflows/prnotify.yml[/green]")
        needed = []
        if token_secret != "GITHUB_TOKEN":
            needed.append(token_secret)
        if chat == "webhook":
            needed.append("PRNOTIFY_WEBHOOK_URL")
        if needed:
            console.print(
                f"\n[yellow]Remember to add [bold]{', '.join(needed)}[/bold] to your "
                "GitHub repository secrets (Settings → Secrets → Actions).[/yellow]"
            )

    console.print("\n[bold green]Setup complete![/bold green]")
    console.print(f"Try it with: [bold]prnotify notify comment --repo {repo} --pr <number> --comment-id <id> --shadow[/bold]")


def _detect_repo_from_git() -> str | None:
    """Try to detect the GitHub repo slug from the git remote URL."""
    try:
        result = subprocess.run(
            ["git", "remote", "get-url", "origin"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    url = result.stdout.strip()
    # https://github.com/owner/repo.git and git@github.com:owner/repo.git
    if "github.com" not in url:
        return None
    slug = url.split("github.com")[-1].lstrip("/:").removesuffix(".git")
    return slug if "/" in slug else None


def _create_settings_gist(repo: str) -> str | None:
    """Create a private Gist for team notification settings and return its ID."""
    # gh names Gist files after their path, so the temp file needs the final name.
    tmp_dir = tempfile.mkdtemp(prefix="prnotify-")
    named_path = os.path.join(tmp_dir, _SETTINGS_FILENAME)
    with open(named_path, "w") as f:
        f.write("{}")

    try:
        result = subprocess.run(
            [
                "gh",
                "gist",
                "create",
                "--public=false",
                "--desc",
                f"prnotify settings for {repo}",
                named_path,
            ],
            capture_output=True,
            text=True,
            timeout=15,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.warning("gh gist create could not run: %s", e)
        return None
    finally:
        os.unlink(named_path)
        os.rmdir(tmp_dir)

    if result.returncode == 0:
        gist_url = result.stdout.strip()
        return gist_url.rstrip("/").split("/")[-1]
    logger.warning("gh gist create failed: %s", result.stderr.strip())
    return None


def _write_config(config: dict) -> None:
    """Write or update .prnotify.yml, preserving any existing keys."""
    path = Path(_CONFIG_PATH)
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text()) or {}
    existing.update(config)
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))


def _get_version() -> str:
    """Read the current prnotify version from the installed package metadata."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("prnotify")
    except PackageNotFoundError:
        return "0.1.0"


def _write_workflow(token_secret: str, webhook: bool) -> None:
    """Write the GitHub Actions workflow file."""
    workflow_dir = Path(".github/workflows")
    workflow_dir.mkdir(parents=True, exist_ok=True)
    (workflow_dir / "prnotify.yml").write_text(
        _WORKFLOW_TEMPLATE.format(
            version=_get_version(),
            token_secret=token_secret,
            webhook_env=_WEBHOOK_ENV if webhook else "",
        )
    )
