"""
Webhook endpoints for Azure DevOps Service Hooks.
"""

import json
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from pr_policy.config import Settings, get_settings
from pr_policy.models.api_response import WebhookResponse
from pr_policy.services.policy_checker import handle_webhook
from pr_policy.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])

_STATUS_LABELS = {200: "ok", 400: "error", 404: "not_found"}


async def _read_payload(request: Request) -> Optional[Any]:
    body = await request.body()
    logger.debug(f"Data Received: {body.decode('utf-8', errors='replace')}")

    if not body.strip():
        return None

    try:
        return json.loads(body)
    except ValueError:
        logger.info("Service hook body is not valid JSON")
        return None


@router.api_route(
    "/azure-devops/pr",
    methods=["GET", "POST"],
    response_model=WebhookResponse,
    responses={
        400: {"model": WebhookResponse, "description": "Configuration or validation error"},
        404: {"model": WebhookResponse, "description": "Request did not contain an Azure DevOps PR"},
    },
)
async def handle_pr_webhook(
    request: Request,
    validate_changelog: Optional[str] = Query(None, alias="validateChangelog"),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """
    Validate a pull request on an Azure DevOps service hook.

    Checks that the PR updates the GitVersion file with a higher version and
    updates the change log, then posts the result as a PR status.

    Args:
        request: FastAPI request object
        validate_changelog: ``false`` makes the change log optional
        settings: Application settings

    Returns:
        200 when validation ran, 400 on configuration or processing errors,
        404 when the payload is not a pull request event
    """
    logger.info("Service Hook Received.")

    changelog_optional = (validate_changelog or "").lower() == "false"
    payload = await _read_payload(request)

    result = await handle_webhook(payload, changelog_optional, settings)

    response = WebhookResponse(
        status=_STATUS_LABELS.get(result.status_code, "error"),
        message=result.message,
    )
    return JSONResponse(status_code=result.status_code, content=response.model_dump())
