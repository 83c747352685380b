"""ProjectFieldCatalog - resolves a board's fields by name."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from goalsync.config import FieldNames
from goalsync.github.models import ProjectFields, SingleSelectField
from goalsync.github.queries import GET_PROJECT

if TYPE_CHECKING:
    from goalsync.github.client import GraphQLExecutor

logger = logging.getLogger("goalsync.github.fields")


def _field_id(payload: dict | None) -> str | None:
    if not payload:
        return None
    return payload.get("id")


class ProjectFieldCatalog:
    """Looks up field IDs and option catalogs of a project board.

    Nothing is cached: every call reads the board schema again, so edits to
    the board's fields are picked up by the next write.
    """

    def __init__(self, executor: GraphQLExecutor, fields: FieldNames | None = None) -> None:
        self.executor = executor
        self.fields = fields or FieldNames()

    async def resolve(self, project_id: str) -> ProjectFields:
        """Resolve the project's field catalog.

        Fields missing from the board come back as None rather than raising.
        """
        data = await self.executor.execute(
            GET_PROJECT,
            {
                "projectId": project_id,
                "legacyGoalField": self.fields.legacy_goal,
                "teamField": self.fields.team,
                "goalField": self.fields.goal,
                "subGoalField": self.fields.sub_goal,
                "projectField": self.fields.project,
            },
        )
        node = data.get("node")
        if not node:
            logger.warning("Project %s not found, no fields resolved", project_id)
            return ProjectFields()

        catalog = ProjectFields(
            goals=SingleSelectField.from_payload(node.get("goals")),
            teams=SingleSelectField.from_payload(node.get("teams")),
            goal_field_id=_field_id(node.get("goalField")),
            sub_goal_field_id=_field_id(node.get("subGoalField")),
            project_field_id=_field_id(node.get("projectField")),
        )
        logger.debug("Resolved fields of project %s: %s", project_id, catalog)
        return catalog
