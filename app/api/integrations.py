"""
Integrations router - internal endpoint used by the CRM to remove an integration.
"""

import logging

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from app.api.payloads import APIError, DeletionSummaryResponse, RemoveIntegrationRequest
from app.container import ApplicationContainer
from app.controllers.integration.teardown_controller import TeardownController

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/remove",
    response_model=DeletionSummaryResponse,
    responses={
        400: {"model": APIError, "description": "Unsupported provider kind"},
        404: {"model": APIError, "description": "Integration or account not found"},
        502: {"model": APIError, "description": "Revoking external subscriptions failed"},
    },
    summary="Remove an integration",
    description="Revokes external subscriptions and deletes the integration with all mirrored data",
)
@inject
async def remove_integration(
    payload: RemoveIntegrationRequest,
    teardown_controller: TeardownController = Depends(Provide[ApplicationContainer.controllers.teardown_controller]),
) -> DeletionSummaryResponse:
    summary = await teardown_controller.remove_integration(payload.integration_id)
    return DeletionSummaryResponse(**summary.to_dict())
