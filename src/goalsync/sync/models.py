"""Data models for the sync engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from goalsync.github.models import Issue


class IssueType(str, Enum):
    """Issue types that feed board fields."""

    GOAL = "Goal"
    SUB_GOAL = "Sub-Goal"
    PROJECT = "Project"

    @classmethod
    def parse(cls, name: str | None) -> IssueType | None:
        """Return the matching IssueType, or None for any other issue type."""
        for member in cls:
            if member.value == name:
                return member
        return None


class SyncStatus(str, Enum):
    """Outcome messages reported back to the webhook caller.

    An edited issue without sub-issues reports NO_CHILD_ISSUES rather than OK,
    so callers matching on "OK" only see it when a propagation ran.
    """

    GOAL_NOT_FOUND = "Goal issue not found, skipping..."
    ISSUE_IS_GOAL = "Issue is goal issue, skipping..."
    ROOT_NOT_IN_PROJECT = "Root issue is not in specified project, skipping..."
    ISSUE_ADDED = "Issue added to project"
    UP_TO_DATE = "Issue project item is up-to-date"
    SKIPPED_ISSUE_TYPE = "Skipped because of issue type"
    ISSUE_NOT_IN_PROJECT = "Issue is not in specified project, skipping..."
    NO_CHILD_ISSUES = "No child issues found, skipping..."
    OK = "OK"


@dataclass(frozen=True)
class AncestorClassification:
    """Nearest Goal, Sub-Goal and Project issue above (or at) an issue."""

    goal: Issue | None = None
    sub_goal: Issue | None = None
    project: Issue | None = None

    @property
    def goal_name(self) -> str | None:
        return self.goal.title if self.goal else None

    @property
    def sub_goal_name(self) -> str | None:
        return self.sub_goal.title if self.sub_goal else None

    @property
    def project_name(self) -> str | None:
        return self.project.title if self.project else None


@dataclass
class SyncResult:
    """Result of a sync run.

    Attributes:
        status: Human readable outcome.
        updated_items: Number of project items that received writes.
    """

    status: str
    updated_items: int = 0

    @classmethod
    def of(cls, status: SyncStatus, updated_items: int = 0) -> SyncResult:
        return cls(status=status.value, updated_items=updated_items)
