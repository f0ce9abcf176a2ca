"""
Nylas webhook router - challenge validation and delta delivery.
"""

import json
import logging

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse

from app.container import ApplicationContainer
from app.controllers.nylas.delta_dispatcher import DeltaDispatcher
from app.exceptions import AuthenticationError

logger = logging.getLogger(__name__)
router = APIRouter()

SIGNATURE_HEADER = "X-Nylas-Signature"


@router.get(
    "/webhook",
    response_class=PlainTextResponse,
    summary="Validate webhook",
    description="Echoes the challenge Nylas sends when the webhook is registered",
)
async def validate_webhook(challenge: str = Query("", description="Challenge to echo")) -> PlainTextResponse:
    return PlainTextResponse(challenge)


@router.post(
    "/webhook",
    response_class=PlainTextResponse,
    responses={401: {"description": "Signature verification failed"}},
    summary="Receive webhook deltas",
)
@inject
async def receive_webhook(
    request: Request,
    dispatcher: DeltaDispatcher = Depends(Provide[ApplicationContainer.controllers.delta_dispatcher]),
) -> PlainTextResponse:
    """
    Verify the delivery signature, then sync every ``message.created`` delta.

    Failures of individual deltas are logged by the dispatcher; the delivery itself is
    acknowledged once the signature is valid.
    """
    raw_body = await request.body()
    if not dispatcher.verify_signature(raw_body, request.headers.get(SIGNATURE_HEADER)):
        raise AuthenticationError(f"{SIGNATURE_HEADER} failed verification")

    try:
        payload = json.loads(raw_body)
    except json.JSONDecodeError:
        logger.warning("Nylas webhook body is not valid JSON, nothing to process")
        payload = {}

    if isinstance(payload, dict):
        await dispatcher.dispatch(payload)
    else:
        logger.warning(f"Unexpected nylas webhook payload type: {type(payload).__name__}")

    return PlainTextResponse("success")
