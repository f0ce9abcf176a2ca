"""
API models package for Pydantic response/request models.
"""

from .error import APIError
from .integrations import (
    CreateIntegrationRequest,
    DeletionSummaryResponse,
    RemoveIntegrationRequest,
    StatusResponse,
)
from .nylas import ConversationMessageResponse, SendRequest, UploadRequest

__all__ = [
    "APIError",
    "ConversationMessageResponse",
    "CreateIntegrationRequest",
    "DeletionSummaryResponse",
    "RemoveIntegrationRequest",
    "SendRequest",
    "StatusResponse",
    "UploadRequest",
]
