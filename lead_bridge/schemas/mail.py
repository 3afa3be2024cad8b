"""
Pydantic schemas for the mail bridge.

Rendered emails and envelopes are frozen: built once per request, sent once.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LeadKind(str, Enum):
    LEAD = "lead"
    PREQUAL = "prequal"


class NormalizedPayload(BaseModel):
    """Flattened view of a webhook payload."""

    model_config = ConfigDict(frozen=True)

    attributes: dict[str, Any] = Field(default_factory=dict)
    additional_info: dict[str, Any] = Field(default_factory=dict)
    is_prequal: bool = False


class RenderedEmail(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: LeadKind
    subject: str
    body: str


class MailEnvelope(BaseModel):
    """Everything the transport needs to send one message."""

    model_config = ConfigDict(frozen=True)

    sender: str
    to: list[str]
    cc: list[str] = Field(default_factory=list)
    reply_to: str | None = None
    subject: str
    body: str


class SendResult(BaseModel):
    """Delivery metadata reported by the transport."""

    message_id: str
    accepted: list[str] = Field(default_factory=list)
    rejected: list[str] = Field(default_factory=list)
    response: str = ""


class SentRecipients(BaseModel):
    to: list[str]
    cc: list[str]


class DeliveryResponse(BaseModel):
    """Success body for POST /api/send."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    test: bool
    kind: LeadKind
    sent: SentRecipients
    message_id: str = Field(..., alias="messageId")
