"""
Pydantic models for the Nylas message endpoints.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UploadRequest(BaseModel):
    name: str = Field(..., description="File name")
    path: str = Field(..., description="Local path of the file to upload")
    type: str = Field(..., description="MIME type of the file")
    erxes_api_id: str = Field(..., alias="erxesApiId", description="CRM-side integration id")


class SendRequest(BaseModel):
    data: str = Field(..., description="JSON encoded message: to, cc, bcc, subject, body, attachments, ...")
    erxes_api_id: str = Field(..., alias="erxesApiId", description="CRM-side integration id")


class ConversationMessageResponse(BaseModel):
    """A stored conversation message as returned by get-message."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    integration_id: int = Field(..., alias="integrationId")
    conversation_id: int = Field(..., alias="conversationId")
    customer_id: int | None = Field(None, alias="customerId")
    erxes_api_message_id: str | None = Field(None, alias="erxesApiMessageId")
    message_id: str = Field(..., alias="messageId")
    thread_id: str | None = Field(None, alias="threadId")
    subject: str | None = None
    body: str | None = None
    snippet: str | None = None
    from_: list[dict[str, Any]] | None = Field(None, alias="from")
    to: list[dict[str, Any]] | None = None
    cc: list[dict[str, Any]] | None = None
    bcc: list[dict[str, Any]] | None = None
    reply_to: list[dict[str, Any]] | None = Field(None, alias="replyTo")
    files: list[dict[str, Any]] | None = None
    labels: list[dict[str, Any]] | None = None
    unread: bool | None = None
    date: datetime | None = None
    integration_email: str | None = Field(None, alias="integrationEmail")
