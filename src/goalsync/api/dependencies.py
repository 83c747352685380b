"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import TYPE_CHECKING, Annotated, Protocol

from fastapi import Depends, HTTPException, status

from goalsync.config import Settings

if TYPE_CHECKING:
    from goalsync.sync import SyncResult


class SyncRunner(Protocol):
    """Interface for running one sync per webhook event."""

    async def sync_from_ancestors(self, issue_id: str, project_id: str) -> SyncResult:
        """Sync an issue whose parent changed."""
        ...

    async def sync_descendants(self, issue_id: str, project_id: str) -> SyncResult:
        """Sync the descendants of an edited issue."""
        ...


# Global Settings instance (initialized on app startup)
_settings: Settings | None = None


def init_settings(settings: Settings) -> Settings:
    """Initialize the global Settings instance."""
    global _settings  # noqa: PLW0603
    _settings = settings
    return _settings


def close_settings() -> None:
    """Drop the global Settings instance."""
    global _settings  # noqa: PLW0603
    _settings = None


def get_settings() -> Generator[Settings, None, None]:
    """Dependency that provides the Settings instance."""
    if _settings is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=(
                "GH_PROJECT_ID, GH_WEBHOOK_SECRET and GH_TOKEN or "
                "GH_APP_ID, GH_APP_INSTALLATION_ID, GH_APP_PRIVATE_KEY not set"
            ),
        )
    yield _settings


# Type alias for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Global SyncRunner instance (initialized on app startup)
_sync_runner: SyncRunner | None = None


def init_sync_runner(runner: SyncRunner) -> None:
    """Initialize the global SyncRunner instance."""
    global _sync_runner  # noqa: PLW0603
    _sync_runner = runner


def close_sync_runner() -> None:
    """Drop the global SyncRunner instance."""
    global _sync_runner  # noqa: PLW0603
    _sync_runner = None


def get_sync_runner() -> Generator[SyncRunner, None, None]:
    """Dependency that provides the SyncRunner instance."""
    if _sync_runner is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Sync runner not initialized",
        )
    yield _sync_runner


# Type alias for dependency injection
SyncRunnerDep = Annotated[SyncRunner, Depends(get_sync_runner)]
