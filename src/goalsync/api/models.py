"""Pydantic models for the webhook API."""

from pydantic import BaseModel, ConfigDict


class WebhookResponse(BaseModel):
    """Response body of the webhook endpoint."""

    success: bool
    status: str | None = None
    error: str | None = None


class GitHubIssue(BaseModel):
    """The part of a webhook issue payload goalsync reads."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    node_id: str | None = None
    number: int | None = None
    title: str | None = None


class SubIssuesEvent(BaseModel):
    """Payload of a `sub_issues` webhook event."""

    model_config = ConfigDict(extra="ignore")

    action: str
    sub_issue: GitHubIssue | None = None
    parent_issue: GitHubIssue | None = None


class IssuesEvent(BaseModel):
    """Payload of an `issues` webhook event."""

    model_config = ConfigDict(extra="ignore")

    action: str
    issue: GitHubIssue | None = None
