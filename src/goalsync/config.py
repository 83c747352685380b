"""Runtime configuration loaded from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_PORT = 8080
DEFAULT_ANCESTOR_DEPTH = 5
MAX_ANCESTOR_DEPTH = 20


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True)
class FieldNames:
    """Names of the board fields goalsync reads and writes.

    The legacy single-select Goal field and the free-text Goal field live side
    by side on the board, so the text field carries a suffix.
    """

    legacy_goal: str = "Goal"
    team: str = "Team"
    goal: str = "Goal (v2)"
    sub_goal: str = "Sub-Goal"
    project: str = "Project"


@dataclass
class Settings:
    """goalsync settings.

    Attributes:
        project_id: Node ID of the GitHub Project (V2) board to keep in sync.
        webhook_secret: Secret used to sign webhook deliveries.
        token: Static GitHub token, used when no App credentials are set.
        app_id: GitHub App ID.
        app_installation_id: Installation ID of the App on the organization.
        app_private_key: PEM private key of the App.
        port: Port for the webhook server.
        ancestor_depth: Number of parent hops fetched for classification.
        team_map: Repository full name to team name overrides.
        fields: Board field names.
    """

    project_id: str
    webhook_secret: str | None = None
    token: str | None = None
    app_id: str | None = None
    app_installation_id: str | None = None
    app_private_key: str | None = None
    port: int = DEFAULT_PORT
    ancestor_depth: int = DEFAULT_ANCESTOR_DEPTH
    team_map: Mapping[str, str] | None = None
    fields: FieldNames = field(default_factory=FieldNames)

    @property
    def uses_app_auth(self) -> bool:
        """Whether GitHub App credentials are fully configured."""
        return bool(self.app_id and self.app_installation_id and self.app_private_key)

    @classmethod
    def from_env(
        cls, env: Mapping[str, str] | None = None, *, require_webhook_secret: bool = True
    ) -> Settings:
        """Build settings from environment variables.

        Args:
            env: Mapping to read from. Defaults to os.environ.
            require_webhook_secret: Whether GH_WEBHOOK_SECRET must be set.
                The CLI's one-shot sync commands don't need it.

        Raises:
            ConfigError: If required variables are missing or invalid.
        """
        if env is None:
            env = os.environ

        missing = []
        project_id = env.get("GH_PROJECT_ID", "")
        if not project_id:
            missing.append("GH_PROJECT_ID")

        webhook_secret = env.get("GH_WEBHOOK_SECRET") or None
        if require_webhook_secret and not webhook_secret:
            missing.append("GH_WEBHOOK_SECRET")

        token = env.get("GH_TOKEN") or None
        app_keys = ("GH_APP_ID", "GH_APP_INSTALLATION_ID", "GH_APP_PRIVATE_KEY")
        app_values = {key: env.get(key) or None for key in app_keys}
        if not token and not all(app_values.values()):
            missing.extend(key for key, value in app_values.items() if not value)

        if missing:
            raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

        team_map = None
        team_map_path = env.get("GOALSYNC_TEAM_MAP")
        if team_map_path:
            team_map = load_team_map(team_map_path)

        private_key = app_values["GH_APP_PRIVATE_KEY"]
        if private_key:
            # Single-line env values carry escaped newlines
            private_key = private_key.replace("\\n", "\n")

        return cls(
            project_id=project_id,
            webhook_secret=webhook_secret,
            token=token,
            app_id=app_values["GH_APP_ID"],
            app_installation_id=app_values["GH_APP_INSTALLATION_ID"],
            app_private_key=private_key,
            port=_parse_int(env, "PORT", DEFAULT_PORT),
            ancestor_depth=parse_ancestor_depth(
                _parse_int(env, "GOALSYNC_ANCESTOR_DEPTH", DEFAULT_ANCESTOR_DEPTH)
            ),
            team_map=team_map,
        )


def _parse_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from e


def parse_ancestor_depth(depth: int) -> int:
    """Validate the number of parent hops to fetch."""
    if not 1 <= depth <= MAX_ANCESTOR_DEPTH:
        raise ConfigError(
            f"Ancestor depth must be between 1 and {MAX_ANCESTOR_DEPTH}, got {depth}"
        )
    return depth


def load_team_map(path: str | Path) -> dict[str, str]:
    """Load a repository to team mapping from a YAML file.

    The file holds a flat mapping, e.g.::

        getsentry/sentry-python: Web Backend SDKs

    Raises:
        ConfigError: If the file is missing or not a string mapping.
    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Team map file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in team map {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise ConfigError(f"Team map {path} must map repository names to team names")
    return dict(data)
