"""TeamResolver - maps repositories to teams."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

# Repository full name -> option name of the board's Team field
DEFAULT_TEAM_MAP: Mapping[str, str] = MappingProxyType(
    {
        "getsentry/sentry-javascript": "Web Frontend SDKs",
        "getsentry/sentry-python": "Web Backend SDKs",
    }
)


class TeamResolver:
    """Static lookup of the team owning a repository.

    Matching is exact on "owner/name"; a repository without an entry leaves
    the Team field untouched.
    """

    def __init__(self, team_map: Mapping[str, str] | None = None) -> None:
        if team_map is None:
            team_map = DEFAULT_TEAM_MAP
        self._team_map: Mapping[str, str] = MappingProxyType(dict(team_map))

    @property
    def team_map(self) -> Mapping[str, str]:
        return self._team_map

    def team_for(self, repo_full_name: str | None) -> str | None:
        if not repo_full_name:
            return None
        return self._team_map.get(repo_full_name)
