"""SyncOrchestrator - runs one sync for one webhook event."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from goalsync.github.fields import ProjectFieldCatalog
from goalsync.github.issues import IssueTreeClient
from goalsync.github.writer import ProjectItemWriter
from goalsync.sync.models import IssueType, SyncResult, SyncStatus
from goalsync.sync.propagator import DescendantPropagator
from goalsync.sync.resolver import AncestorResolver
from goalsync.sync.teams import TeamResolver

if TYPE_CHECKING:
    from goalsync.config import Settings
    from goalsync.github.client import GraphQLExecutor

logger = logging.getLogger("goalsync.sync")


class SyncOrchestrator:
    """Keeps project board fields in line with the issue hierarchy.

    Two directions are supported:
    - sync_from_ancestors: an issue's parent changed, so its own item takes
      the names of its nearest Goal, Sub-Goal and Project ancestors.
    - sync_descendants: a Goal, Sub-Goal or Project issue was edited, so its
      title is pushed onto all of its descendants.

    Expected skips come back as a status; GitHub errors propagate.
    """

    def __init__(
        self,
        tree: IssueTreeClient,
        writer: ProjectItemWriter,
        team_resolver: TeamResolver | None = None,
        resolver: AncestorResolver | None = None,
        propagator: DescendantPropagator | None = None,
    ) -> None:
        self.tree = tree
        self.writer = writer
        self.team_resolver = team_resolver or TeamResolver()
        self.resolver = resolver or AncestorResolver()
        self.propagator = propagator or DescendantPropagator(tree, writer)

    @classmethod
    def from_executor(
        cls, executor: GraphQLExecutor, settings: Settings | None = None
    ) -> SyncOrchestrator:
        """Wire up all components on top of one GraphQL executor."""
        if settings is None:
            tree = IssueTreeClient(executor)
            catalog = ProjectFieldCatalog(executor)
            team_resolver = TeamResolver()
        else:
            tree = IssueTreeClient(
                executor, ancestor_depth=settings.ancestor_depth, fields=settings.fields
            )
            catalog = ProjectFieldCatalog(executor, fields=settings.fields)
            team_resolver = TeamResolver(settings.team_map)
        return cls(
            tree=tree,
            writer=ProjectItemWriter(executor, catalog=catalog),
            team_resolver=team_resolver,
        )

    async def sync_from_ancestors(self, issue_id: str, project_id: str) -> SyncResult:
        """Update an issue's item from its nearest classified ancestors.

        Args:
            issue_id: Node ID of the issue whose parent changed.
            project_id: Node ID of the project board.
        """
        issue = await self.tree.fetch_ancestry(issue_id)
        classification = self.resolver.classify(issue)
        goal_issue = classification.goal

        if goal_issue is None:
            return SyncResult.of(SyncStatus.GOAL_NOT_FOUND)

        if goal_issue.id == issue.id:
            return SyncResult.of(SyncStatus.ISSUE_IS_GOAL)

        if goal_issue.item_for(project_id) is None:
            return SyncResult.of(SyncStatus.ROOT_NOT_IN_PROJECT)

        goal_name = goal_issue.title
        team_name = self.team_resolver.team_for(issue.repository)
        item = issue.item_for(project_id)
        catalog = await self.writer.catalog.resolve(project_id)

        if item is None:
            item_id = await self.writer.ensure_membership(project_id, issue)
            logger.info("Updating goal for issue %s to %s...", issue.id, goal_name)
            await self.writer.set_legacy_goal(project_id, item_id, goal_name, catalog)
            await self.writer.apply_fields(
                project_id,
                item_id,
                goal_name=goal_name,
                sub_goal_name=classification.sub_goal_name,
                project_name=classification.project_name,
                team_name=team_name,
                catalog=catalog,
            )
            return SyncResult.of(SyncStatus.ISSUE_ADDED, updated_items=1)

        if item.goal is None or item.goal.name != goal_name:
            logger.info(
                "Issue with ID %s is in project but has incorrect goal, updating...", issue.id
            )
            await self.writer.set_legacy_goal(project_id, item.id, goal_name, catalog)

        # The team is the field most likely to be correct already
        team_changed = team_name is not None and (item.team is None or item.team.name != team_name)
        await self.writer.apply_fields(
            project_id,
            item.id,
            goal_name=goal_name,
            sub_goal_name=classification.sub_goal_name,
            project_name=classification.project_name,
            team_name=team_name if team_changed else None,
            catalog=catalog,
        )
        return SyncResult.of(SyncStatus.UP_TO_DATE, updated_items=1)

    async def sync_descendants(self, issue_id: str, project_id: str) -> SyncResult:
        """Push an edited Goal, Sub-Goal or Project title onto its descendants.

        Args:
            issue_id: Node ID of the edited issue.
            project_id: Node ID of the project board.
        """
        issue = await self.tree.fetch_one_level_children(issue_id)
        logger.info('Fetched GitHub issue "%s" with issue type "%s"', issue.title, issue.issue_type)

        label = IssueType.parse(issue.issue_type)
        if label is None:
            logger.info(
                "Child issues are only updated for issues of types %s, but this has %s",
                ", ".join(t.value for t in IssueType),
                issue.issue_type,
            )
            return SyncResult.of(SyncStatus.SKIPPED_ISSUE_TYPE)

        if issue.item_for(project_id) is None:
            return SyncResult.of(SyncStatus.ISSUE_NOT_IN_PROJECT)

        if not issue.sub_issues:
            logger.info('No child issues found for issue "%s", skipping...', issue.title)
            return SyncResult.of(SyncStatus.NO_CHILD_ISSUES)

        updated = await self.propagator.propagate(issue, label, project_id)
        logger.info("Updated %d descendant item(s) of issue %s", updated, issue.id)
        return SyncResult.of(SyncStatus.OK, updated_items=updated)
