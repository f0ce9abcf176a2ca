"""
Nylas router - integration creation and message endpoints for hosted-auth mailboxes.
"""

import logging
from typing import Any
from urllib.parse import quote

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from app.api.payloads import (
    APIError,
    ConversationMessageResponse,
    CreateIntegrationRequest,
    SendRequest,
    StatusResponse,
    UploadRequest,
)
from app.container import ApplicationContainer
from app.controllers.integration.integration_controller import IntegrationController
from app.controllers.nylas.nylas_controller import NylasController

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/create-integration",
    response_model=StatusResponse,
    responses={
        400: {"model": APIError, "description": "Unsupported kind or integration already exists"},
        404: {"model": APIError, "description": "Account not found"},
        502: {"model": APIError, "description": "Connecting to the provider failed"},
    },
    summary="Create an integration",
)
@inject
async def create_integration(
    payload: CreateIntegrationRequest,
    integration_controller: IntegrationController = Depends(
        Provide[ApplicationContainer.controllers.integration_controller]
    ),
) -> StatusResponse:
    logger.info(f"Creating integration; kind: {payload.kind}, integration: {payload.integration_id}")
    await integration_controller.create_integration(
        account_id=payload.account_id,
        erxes_api_id=payload.integration_id,
        kind=payload.kind,
        facebook_page_ids=payload.facebook_page_ids,
    )
    return StatusResponse(status="ok")


@router.get(
    "/get-message",
    response_model=ConversationMessageResponse,
    responses={
        400: {"model": APIError, "description": "Message id not provided"},
        404: {"model": APIError, "description": "Integration, account or message not found"},
    },
    summary="Get a stored message",
)
@inject
async def get_message(
    erxes_api_message_id: str | None = Query(None, alias="erxesApiMessageId"),
    integration_id: str = Query(..., alias="integrationId"),
    nylas_controller: NylasController = Depends(Provide[ApplicationContainer.controllers.nylas_controller]),
) -> ConversationMessageResponse:
    message = await nylas_controller.get_message(erxes_api_message_id, integration_id)
    return ConversationMessageResponse.model_validate(message)


@router.post(
    "/upload",
    responses={404: {"model": APIError, "description": "Integration or account not found"}},
    summary="Upload a file to nylas",
)
@inject
async def upload(
    payload: UploadRequest,
    nylas_controller: NylasController = Depends(Provide[ApplicationContainer.controllers.nylas_controller]),
) -> dict[str, Any]:
    return await nylas_controller.upload(payload.name, payload.path, payload.type, payload.erxes_api_id)


def content_disposition(filename: str) -> str:
    """Attachment header value; names that need escaping are sent RFC 6266 encoded."""
    quoted = quote(filename)
    if quoted != filename:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{filename}"'


@router.get(
    "/get-attachment",
    response_class=Response,
    responses={404: {"model": APIError, "description": "Integration or account not found"}},
    summary="Download an attachment",
)
@inject
async def get_attachment(
    attachment_id: str = Query(..., alias="attachmentId"),
    integration_id: str = Query(..., alias="integrationId"),
    filename: str = Query(...),
    nylas_controller: NylasController = Depends(Provide[ApplicationContainer.controllers.nylas_controller]),
) -> Response:
    content = await nylas_controller.get_attachment(attachment_id, integration_id)
    return Response(
        content=content,
        media_type="application/octet-stream",
        headers={"Content-Disposition": content_disposition(filename)},
    )


@router.post(
    "/send",
    response_model=StatusResponse,
    responses={
        400: {"model": APIError, "description": "Invalid message data"},
        404: {"model": APIError, "description": "Integration or account not found"},
    },
    summary="Send a message",
)
@inject
async def send(
    payload: SendRequest,
    nylas_controller: NylasController = Depends(Provide[ApplicationContainer.controllers.nylas_controller]),
) -> StatusResponse:
    result = await nylas_controller.send(payload.data, payload.erxes_api_id)
    return StatusResponse(**result)
