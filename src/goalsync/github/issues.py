"""IssueTreeClient - fetches slices of the issue hierarchy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from goalsync.config import DEFAULT_ANCESTOR_DEPTH, FieldNames, parse_ancestor_depth
from goalsync.github.exceptions import IssueNotFoundError
from goalsync.github.models import Issue
from goalsync.github.queries import GET_SUB_ISSUES, build_get_parent_issue

if TYPE_CHECKING:
    from goalsync.github.client import GraphQLExecutor

logger = logging.getLogger("goalsync.github.issues")


class IssueTreeClient:
    """Fetches an issue together with its ancestor chain or its sub-issues.

    Every fetched node carries its issue type and its project items, including
    the legacy Goal and Team values of each item.
    """

    def __init__(
        self,
        executor: GraphQLExecutor,
        ancestor_depth: int = DEFAULT_ANCESTOR_DEPTH,
        fields: FieldNames | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            executor: GraphQL executor used for all queries
            ancestor_depth: Number of parent hops fetched by fetch_ancestry
            fields: Board field names read from each project item
        """
        self.executor = executor
        self.ancestor_depth = parse_ancestor_depth(ancestor_depth)
        self.fields = fields or FieldNames()
        self._parent_query = build_get_parent_issue(self.ancestor_depth)

    def _variables(self, issue_id: str) -> dict[str, Any]:
        return {
            "issueId": issue_id,
            "legacyGoalField": self.fields.legacy_goal,
            "teamField": self.fields.team,
        }

    async def fetch_ancestry(self, issue_id: str) -> Issue:
        """Fetch an issue with its parent chain.

        Ancestors more than `ancestor_depth` hops away are not fetched. The
        returned root carries the repository's full name.

        Raises:
            IssueNotFoundError: If the node doesn't exist or is not an issue
        """
        data = await self.executor.execute(self._parent_query, self._variables(issue_id))
        node = data.get("node")
        if not node or "id" not in node:
            raise IssueNotFoundError(f"Issue {issue_id} not found")

        issue = Issue.from_payload(node)
        logger.info(
            'Fetched GitHub issue "%s" from repo "%s" with %d ancestor(s)',
            issue.title,
            issue.repository,
            len(issue.ancestors()),
        )
        return issue

    async def fetch_one_level_children(self, issue_id: str) -> Issue:
        """Fetch an issue with its direct sub-issues (no deeper levels).

        Raises:
            IssueNotFoundError: If the node doesn't exist or is not an issue
        """
        data = await self.executor.execute(GET_SUB_ISSUES, self._variables(issue_id))
        node = data.get("node")
        if not node or "id" not in node:
            raise IssueNotFoundError(f"Issue {issue_id} not found")

        issue = Issue.from_payload(node)
        logger.debug(
            'Fetched GitHub issue "%s" (type %s) with %d sub-issue(s)',
            issue.title,
            issue.issue_type,
            len(issue.sub_issues),
        )
        return issue
