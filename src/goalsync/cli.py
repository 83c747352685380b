"""CLI entry point for goalsync.

- serve: run the webhook server
- sync-parent: sync one issue from its ancestors
- sync-children: push one Goal/Sub-Goal/Project issue's title to its descendants
"""

from __future__ import annotations

import asyncio
import os
import sys

import click

from goalsync import __version__
from goalsync.config import ConfigError, Settings
from goalsync.github import GitHubError
from goalsync.logging import setup_logging


def _load_settings(project_id: str | None, require_webhook_secret: bool) -> Settings:
    env = dict(os.environ)
    if project_id is not None:
        env["GH_PROJECT_ID"] = project_id
    return Settings.from_env(env, require_webhook_secret=require_webhook_secret)


def _run_sync(direction: str, issue_id: str, project_id: str | None, verbose: bool) -> None:
    from goalsync.api.app import AppSyncRunner  # noqa: PLC0415

    setup_logging(level="DEBUG" if verbose else None)

    try:
        settings = _load_settings(project_id, require_webhook_secret=False)
        runner = AppSyncRunner(settings)
        if direction == "ancestors":
            result = asyncio.run(runner.sync_from_ancestors(issue_id, settings.project_id))
        else:
            result = asyncio.run(runner.sync_descendants(issue_id, settings.project_id))
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)
    except GitHubError as e:
        click.echo(f"Sync failed: {e}", err=True)
        sys.exit(1)

    click.echo(result.status)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """goalsync - sync GitHub issue hierarchies with GitHub Project fields."""
    pass


@main.command()
@click.option("--host", default="0.0.0.0", show_default=True, help="Interface to bind")
@click.option("--port", type=int, default=None, help="Port to listen on (default: $PORT or 8080)")
def serve(host: str, port: int | None) -> None:
    """Run the webhook server."""
    import uvicorn  # noqa: PLC0415

    from goalsync.api.app import create_app  # noqa: PLC0415

    setup_logging()

    try:
        settings = Settings.from_env()
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)

    uvicorn.run(create_app(settings), host=host, port=port or settings.port)


@main.command("sync-parent")
@click.argument("issue_id")
@click.option("--project-id", default=None, help="Project node ID (default: $GH_PROJECT_ID)")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def sync_parent(issue_id: str, project_id: str | None, verbose: bool) -> None:
    """Set ISSUE_ID's project fields from its Goal, Sub-Goal and Project ancestors."""
    _run_sync("ancestors", issue_id, project_id, verbose)


@main.command("sync-children")
@click.argument("issue_id")
@click.option("--project-id", default=None, help="Project node ID (default: $GH_PROJECT_ID)")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def sync_children(issue_id: str, project_id: str | None, verbose: bool) -> None:
    """Push ISSUE_ID's title onto the project fields of all its descendants."""
    _run_sync("descendants", issue_id, project_id, verbose)


if __name__ == "__main__":
    main()
