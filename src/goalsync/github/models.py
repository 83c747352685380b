"""Data models for issues, project items and project fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SingleSelectValue:
    """Current value of a single-select field on a project item."""

    id: str
    name: str
    option_id: str

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | None) -> SingleSelectValue | None:
        # fieldValueByName yields {} when the value has another field type
        if not payload or "name" not in payload:
            return None
        return cls(
            id=str(payload.get("id", "")),
            name=str(payload["name"]),
            option_id=str(payload.get("optionId", "")),
        )


@dataclass(frozen=True)
class ProjectItem:
    """An issue's entry on one project board."""

    id: str
    project_id: str
    project_title: str = ""
    goal: SingleSelectValue | None = None  # legacy single-select Goal
    team: SingleSelectValue | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> ProjectItem:
        project = payload.get("project") or {}
        return cls(
            id=str(payload["id"]),
            project_id=str(project.get("id", "")),
            project_title=str(project.get("title", "")),
            goal=SingleSelectValue.from_payload(payload.get("goal")),
            team=SingleSelectValue.from_payload(payload.get("team")),
        )


@dataclass(frozen=True)
class Issue:
    """A GitHub issue with the slice of its hierarchy that was fetched.

    Attributes:
        id: GraphQL node ID.
        title: Issue title.
        number: Issue number (display only).
        issue_type: Name of the issue type, e.g. "Goal", or None.
        project_items: The issue's items, one per project board.
        parent: Parent issue, populated by ancestry fetches.
        sub_issues: Direct sub-issues, populated by one-level child fetches.
        repository: "owner/name" of the repository, on the fetched root only.
    """

    id: str
    title: str
    number: int = 0
    issue_type: str | None = None
    project_items: list[ProjectItem] = field(default_factory=list)
    parent: Issue | None = None
    sub_issues: list[Issue] = field(default_factory=list)
    repository: str | None = None

    def item_for(self, project_id: str) -> ProjectItem | None:
        """Return this issue's item on the given project, if any."""
        for item in self.project_items:
            if item.project_id == project_id:
                return item
        return None

    def ancestors(self) -> list[Issue]:
        """Return the fetched parent chain, nearest first."""
        chain = []
        node = self.parent
        while node is not None:
            chain.append(node)
            node = node.parent
        return chain

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Issue:
        """Build an Issue from a GraphQL node, recursing into parent and sub-issues."""
        issue_type = payload.get("issueType") or {}
        items = (payload.get("projectItems") or {}).get("nodes") or []
        sub_issues = (payload.get("subIssues") or {}).get("nodes") or []
        parent = payload.get("parent")
        repository = payload.get("repository") or {}

        return cls(
            id=str(payload["id"]),
            title=str(payload.get("title", "")),
            number=int(payload.get("number") or 0),
            issue_type=issue_type.get("name"),
            project_items=[ProjectItem.from_payload(node) for node in items if node],
            parent=cls.from_payload(parent) if parent else None,
            sub_issues=[cls.from_payload(node) for node in sub_issues if node],
            repository=repository.get("nameWithOwner"),
        )


@dataclass(frozen=True)
class SingleSelectField:
    """A single-select project field with its option catalog."""

    id: str
    name: str
    options: dict[str, str] = field(default_factory=dict)  # name -> option_id

    def option_id(self, name: str) -> str | None:
        return self.options.get(name)

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | None) -> SingleSelectField | None:
        if not payload or "id" not in payload:
            return None
        return cls(
            id=str(payload["id"]),
            name=str(payload.get("name", "")),
            options={opt["name"]: opt["id"] for opt in payload.get("options") or []},
        )


@dataclass(frozen=True)
class ProjectFields:
    """Field catalog of a project board, resolved by field name.

    Any attribute is None when the board has no field of that name (or the
    field has a different type than expected).
    """

    goals: SingleSelectField | None = None
    teams: SingleSelectField | None = None
    goal_field_id: str | None = None
    sub_goal_field_id: str | None = None
    project_field_id: str | None = None
