from fastapi import APIRouter

from app.api.integrations import router as integrations_router
from app.api.nylas import router as nylas_router
from app.api.webhook import router as webhook_router

api_router = APIRouter()

api_router.include_router(webhook_router, tags=["webhook"])
api_router.include_router(nylas_router, tags=["nylas"])
api_router.include_router(integrations_router, prefix="/integrations", tags=["integrations"])
