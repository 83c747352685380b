"""AncestorResolver - finds the nearest classified ancestors of an issue."""

from __future__ import annotations

from typing import TYPE_CHECKING

from goalsync.sync.models import AncestorClassification, IssueType

if TYPE_CHECKING:
    from goalsync.github.models import Issue


def find_nearest(issue: Issue, issue_type: IssueType) -> Issue | None:
    """Return the closest issue of the given type, starting with the issue itself."""
    node: Issue | None = issue
    while node is not None:
        if node.issue_type == issue_type.value:
            return node
        node = node.parent
    return None


class AncestorResolver:
    """Classifies an issue by the closest Goal, Sub-Goal and Project above it.

    Only the fetched part of the parent chain is visible, so ancestors beyond
    the fetch depth never take part.
    """

    def classify(self, issue: Issue) -> AncestorClassification:
        return AncestorClassification(
            goal=find_nearest(issue, IssueType.GOAL),
            sub_goal=find_nearest(issue, IssueType.SUB_GOAL),
            project=find_nearest(issue, IssueType.PROJECT),
        )
