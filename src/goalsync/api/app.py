"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from goalsync import __version__
from goalsync.api.dependencies import (
    close_settings,
    close_sync_runner,
    init_settings,
    init_sync_runner,
)
from goalsync.api.models import WebhookResponse
from goalsync.api.routes import webhook
from goalsync.config import ConfigError, Settings
from goalsync.github import GitHubAppAuth, GitHubError, GitHubGraphQLClient, StaticTokenAuth
from goalsync.sync import SyncOrchestrator

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    import httpx

    from goalsync.api.dependencies import SyncRunner
    from goalsync.github import TokenProvider
    from goalsync.sync import SyncResult

logger = logging.getLogger("goalsync.api")


def create_token_provider(settings: Settings) -> TokenProvider:
    """Pick App authentication when configured, else the static token."""
    if settings.uses_app_auth:
        return GitHubAppAuth(
            app_id=str(settings.app_id),
            installation_id=str(settings.app_installation_id),
            private_key=str(settings.app_private_key),
        )
    if settings.token:
        return StaticTokenAuth(settings.token)
    raise ConfigError("No GitHub credentials configured")


class AppSyncRunner:
    """App-level runner matching the SyncRunner protocol.

    Creates a GraphQL client with a fresh token per event and delegates to
    the SyncOrchestrator.
    """

    def __init__(
        self,
        settings: Settings,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._token_provider = token_provider or create_token_provider(settings)
        self._transport = transport

    async def _run(self, direction: str, issue_id: str, project_id: str) -> SyncResult:
        token = await self._token_provider.get_token()
        async with GitHubGraphQLClient(token, transport=self._transport) as client:
            orchestrator = SyncOrchestrator.from_executor(client, self._settings)
            if direction == "ancestors":
                return await orchestrator.sync_from_ancestors(issue_id, project_id)
            return await orchestrator.sync_descendants(issue_id, project_id)

    async def sync_from_ancestors(self, issue_id: str, project_id: str) -> SyncResult:
        return await self._run("ancestors", issue_id, project_id)

    async def sync_descendants(self, issue_id: str, project_id: str) -> SyncResult:
        return await self._run("descendants", issue_id, project_id)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    settings: Settings | None = getattr(app.state, "settings", None)
    runner: SyncRunner | None = getattr(app.state, "sync_runner", None)
    if settings is None:
        try:
            settings = Settings.from_env()
        except ConfigError as e:
            # Requests answer 500 until the environment is fixed
            logger.error("goalsync is not configured: %s", e)

    if settings is not None:
        init_settings(settings)
        init_sync_runner(runner or AppSyncRunner(settings))

    yield
    # Shutdown
    close_sync_runner()
    close_settings()


def create_app(
    settings: Settings | None = None, sync_runner: SyncRunner | None = None
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; loaded from the environment at startup
            when omitted.
        sync_runner: Runner for sync operations; defaults to AppSyncRunner.
    """
    app = FastAPI(
        title="goalsync",
        description="Syncs GitHub issue hierarchies with GitHub Project fields",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings
    app.state.sync_runner = sync_runner

    @app.exception_handler(GitHubError)
    async def github_error_handler(_request: Request, exc: GitHubError) -> JSONResponse:
        logger.error("Sync failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=WebhookResponse(success=False, error=str(exc)).model_dump(),
        )

    app.include_router(webhook.router)

    return app


# Default app instance
app = create_app()
