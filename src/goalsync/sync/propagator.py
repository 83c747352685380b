"""DescendantPropagator - pushes a classified issue's title onto its subtree."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from goalsync.sync.models import IssueType

if TYPE_CHECKING:
    from goalsync.github.issues import IssueTreeClient
    from goalsync.github.models import Issue
    from goalsync.github.writer import ProjectItemWriter

logger = logging.getLogger("goalsync.sync.propagator")

# apply_fields keyword for each issue type
FIELD_FOR_TYPE = {
    IssueType.GOAL: "goal_name",
    IssueType.SUB_GOAL: "sub_goal_name",
    IssueType.PROJECT: "project_name",
}


class DescendantPropagator:
    """Writes an edited Goal/Sub-Goal/Project title into all of its descendants.

    Sub-issues are walked depth-first and strictly one after another, each
    child's whole subtree before its next sibling, to stay well inside the
    GraphQL rate limit. Descendants that are not on the board are not added,
    but their own sub-issues are still visited.
    """

    def __init__(self, tree: IssueTreeClient, writer: ProjectItemWriter) -> None:
        self.tree = tree
        self.writer = writer

    async def propagate(self, edited_issue: Issue, label: IssueType, project_id: str) -> int:
        """Propagate the edited issue's title to every reachable descendant.

        Args:
            edited_issue: The edited issue, fetched with its direct sub-issues.
            label: The edited issue's own type; selects the text field.
            project_id: Board whose items are updated.

        Returns:
            Number of project items written.

        Raises:
            ValueError: If the edited issue's type doesn't match the label.
        """
        if edited_issue.issue_type != label.value:
            raise ValueError(
                f"Issue {edited_issue.id} has type {edited_issue.issue_type!r}, "
                f"cannot propagate it as {label.value!r}"
            )

        logger.info(
            'Updating child issues for issue "%s" (%s)...', edited_issue.title, edited_issue.id
        )
        visited = {edited_issue.id}
        return await self._update_children(edited_issue, edited_issue, label, project_id, visited)

    async def _update_children(
        self,
        node: Issue,
        edited_issue: Issue,
        label: IssueType,
        project_id: str,
        visited: set[str],
    ) -> int:
        updated = 0
        for sub_issue in node.sub_issues:
            # Hierarchies are acyclic on GitHub, but nothing enforces it here
            if sub_issue.id in visited:
                logger.warning("Issue %s already visited, skipping to avoid a cycle", sub_issue.id)
                continue
            visited.add(sub_issue.id)

            if await self._update_item(sub_issue, edited_issue, label, project_id):
                updated += 1

            children = await self.tree.fetch_one_level_children(sub_issue.id)
            updated += await self._update_children(
                children, edited_issue, label, project_id, visited
            )
        return updated

    async def _update_item(
        self, issue: Issue, edited_issue: Issue, label: IssueType, project_id: str
    ) -> bool:
        item = issue.item_for(project_id)
        if item is None:
            logger.info("Issue %s is not in specified project, skipping...", issue.id)
            return False

        await self.writer.apply_fields(
            project_id, item.id, **{FIELD_FOR_TYPE[label]: edited_issue.title}
        )
        return True
