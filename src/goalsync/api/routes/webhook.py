"""GitHub webhook endpoint."""

import json
import logging

from fastapi import APIRouter, Header, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from goalsync.api.dependencies import SettingsDep, SyncRunnerDep
from goalsync.api.models import IssuesEvent, SubIssuesEvent, WebhookResponse
from goalsync.api.signature import verify_signature

logger = logging.getLogger("goalsync.api")

router = APIRouter(tags=["webhook"])

INDEX_TEXT = (
    "This is a webhook server for syncing Github issues with Github projects.\n"
    "Point the webhook to the /webhook endpoint."
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=WebhookResponse(success=False, error=message).model_dump(),
    )


@router.get("/", response_class=PlainTextResponse)
def index() -> str:
    """Describe the service."""
    return INDEX_TEXT


@router.post("/webhook", response_model=WebhookResponse)
async def webhook(
    request: Request,
    settings: SettingsDep,
    runner: SyncRunnerDep,
    x_github_event: str | None = Header(default=None),
    x_hub_signature_256: str | None = Header(default=None),
) -> WebhookResponse | JSONResponse:
    """Handle a GitHub webhook delivery.

    - `sub_issues`: the sub-issue's parent changed, sync it from its ancestors.
    - `issues` with action `edited`: push the issue's title to its descendants.

    Other events are acknowledged without doing anything.
    """
    body = await request.body()

    if not settings.webhook_secret:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "GH_WEBHOOK_SECRET not set")

    if not verify_signature(settings.webhook_secret, body, x_hub_signature_256):
        logger.warning("Rejected %s delivery with invalid signature", x_github_event)
        return _error(status.HTTP_401_UNAUTHORIZED, "Unauthorized")

    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid JSON payload")

    try:
        if x_github_event == "sub_issues":
            event = SubIssuesEvent.model_validate(payload)
            logger.info('sub_issues event with action "%s" received', event.action)

            issue_id = event.sub_issue.node_id if event.sub_issue else None
            if not issue_id:
                return _error(status.HTTP_400_BAD_REQUEST, "sub_issue_id not found")

            logger.info("Syncing Github project for issue %s", issue_id)
            result = await runner.sync_from_ancestors(issue_id, settings.project_id)

        elif x_github_event == "issues":
            issues_event = IssuesEvent.model_validate(payload)
            logger.info('issues event with action "%s" received', issues_event.action)

            if issues_event.action != "edited":
                return WebhookResponse(
                    success=True,
                    status=f"nothing to do (issues action is {json.dumps(issues_event.action)})",
                )

            issue_id = issues_event.issue.node_id if issues_event.issue else None
            if not issue_id:
                return _error(status.HTTP_400_BAD_REQUEST, "issue_id not found")

            logger.info("Syncing Github project for child issues of %s", issue_id)
            result = await runner.sync_descendants(issue_id, settings.project_id)

        else:
            return WebhookResponse(success=True, status="nothing to do")

    except ValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, f"Invalid {x_github_event} payload: {e}")

    logger.info(result.status)
    return WebhookResponse(success=True, status=result.status)
