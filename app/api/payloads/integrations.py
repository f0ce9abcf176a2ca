"""
Pydantic models for integration lifecycle endpoints.
"""

from pydantic import BaseModel, Field


class CreateIntegrationRequest(BaseModel):
    account_id: str = Field(..., alias="accountId", description="Public id of the connected account")
    integration_id: str = Field(..., alias="integrationId", description="CRM-side integration id")
    kind: str = Field(..., description="Provider kind, e.g. nylas-gmail or facebook-messenger")
    facebook_page_ids: list[str] | None = Field(None, alias="facebookPageIds", description="Facebook page ids")


class RemoveIntegrationRequest(BaseModel):
    integration_id: str = Field(
        ..., alias="integrationId", description="CRM-side integration id or the public id of the account"
    )


class StatusResponse(BaseModel):
    status: str = Field("ok", description="Operation status")


class DeletionSummaryResponse(BaseModel):
    """Number of rows removed per collection."""

    posts: int = 0
    comments: int = 0
    customers: int = 0
    conversations: int = 0
    messages: int = 0
    integrations: int = 0
