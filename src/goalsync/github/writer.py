"""ProjectItemWriter - writes field values on project items."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from goalsync.github.fields import ProjectFieldCatalog
from goalsync.github.queries import (
    ADD_PROJECT_TO_ISSUE,
    UPDATE_OPTION_FIELD,
    UPDATE_TEXT_FIELD,
)

if TYPE_CHECKING:
    from goalsync.github.client import GraphQLExecutor
    from goalsync.github.models import Issue, ProjectFields

logger = logging.getLogger("goalsync.github.writer")


class ProjectItemWriter:
    """Adds issues to a board and sets field values on their items.

    Text fields are overwritten on every call without reading them first.
    Single-select values are set by option name; an unknown option is logged
    and skipped.
    """

    def __init__(
        self, executor: GraphQLExecutor, catalog: ProjectFieldCatalog | None = None
    ) -> None:
        """Initialize the writer.

        Args:
            executor: GraphQL executor used for mutations
            catalog: Field catalog; defaults to one over the same executor
        """
        self.executor = executor
        self.catalog = catalog or ProjectFieldCatalog(executor)

    async def set_text(self, project_id: str, item_id: str, field_id: str, text: str) -> None:
        """Overwrite a text field on a project item."""
        await self.executor.execute(
            UPDATE_TEXT_FIELD,
            {"projectId": project_id, "itemId": item_id, "fieldId": field_id, "text": text},
        )

    async def set_option(
        self, project_id: str, item_id: str, field_id: str, option_id: str
    ) -> None:
        """Set a single-select field on a project item."""
        await self.executor.execute(
            UPDATE_OPTION_FIELD,
            {
                "projectId": project_id,
                "itemId": item_id,
                "fieldId": field_id,
                "optionId": option_id,
            },
        )

    async def apply_fields(
        self,
        project_id: str,
        item_id: str,
        *,
        goal_name: str | None = None,
        sub_goal_name: str | None = None,
        project_name: str | None = None,
        team_name: str | None = None,
        catalog: ProjectFields | None = None,
    ) -> list[str]:
        """Write the given values onto a project item.

        Only values that are provided are written, and only when the board
        has the matching field. The catalog is resolved once per call unless a
        resolved one is passed in.
        Callers pass team_name only when it differs from the current value.

        Returns:
            Names of the fields that were written ("goal", "sub_goal",
            "project", "team").
        """
        logger.info(
            'Updating fields on the project: Goal="%s", Sub-Goal="%s", Project="%s", Team="%s"',
            goal_name or "<none>",
            sub_goal_name or "<none>",
            project_name or "<none>",
            team_name or "<none>",
        )
        if catalog is None:
            catalog = await self.catalog.resolve(project_id)
        written = []

        text_values = (
            ("goal", catalog.goal_field_id, goal_name),
            ("sub_goal", catalog.sub_goal_field_id, sub_goal_name),
            ("project", catalog.project_field_id, project_name),
        )
        for key, field_id, value in text_values:
            if field_id and value:
                await self.set_text(project_id, item_id, field_id, value)
                written.append(key)

        if team_name:
            option_id = catalog.teams.option_id(team_name) if catalog.teams else None
            if catalog.teams and option_id:
                await self.set_option(project_id, item_id, catalog.teams.id, option_id)
                written.append("team")
            else:
                logger.info("Team with name %s not found in project, skipping...", team_name)

        return written

    async def set_legacy_goal(
        self,
        project_id: str,
        item_id: str,
        goal_name: str,
        catalog: ProjectFields | None = None,
    ) -> bool:
        """Set the legacy single-select Goal field by option name.

        The legacy field coexists with the text Goal field while boards are
        migrated, so it is written through its own path.

        Returns:
            True if the value was written, False if the field or option is
            missing from the board.
        """
        if catalog is None:
            catalog = await self.catalog.resolve(project_id)

        option_id = catalog.goals.option_id(goal_name) if catalog.goals else None
        if not catalog.goals or not option_id:
            logger.info("Goal with name %s not found in project, skipping...", goal_name)
            return False

        await self.set_option(project_id, item_id, catalog.goals.id, option_id)
        return True

    async def ensure_membership(self, project_id: str, issue: Issue) -> str:
        """Return the issue's item ID on the project, adding it if needed."""
        item = issue.item_for(project_id)
        if item is not None:
            return item.id

        logger.info("Issue with ID %s is not in project %s, adding it...", issue.id, project_id)
        data = await self.executor.execute(
            ADD_PROJECT_TO_ISSUE, {"projectId": project_id, "issueId": issue.id}
        )
        item_id = str(data["addProjectV2ItemById"]["item"]["id"])
        logger.info("Added issue %s to project as item %s", issue.id, item_id)
        return item_id
