"""
Submission relay: token gate, kind gate, render, send.

Everything here runs once per request; either one email is sent or none is.
"""

import hmac
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from lead_bridge.config import Settings
from lead_bridge.errors import AuthError, ValidationError
from lead_bridge.schemas.mail import (
    DeliveryResponse,
    LeadKind,
    MailEnvelope,
    SentRecipients,
)
from lead_bridge.services.fields import split_recipients
from lead_bridge.services.mailer import MailTransport
from lead_bridge.services.normalizer import normalize
from lead_bridge.services.templates import render

logger = logging.getLogger(__name__)


class InboundRequest(BaseModel):
    """
    Transport-neutral view of the HTTP request.

    Non-POST methods never reach the relay (the route answers them); method is
    kept for the debug log.
    """

    model_config = ConfigDict(frozen=True)

    method: str
    query: dict[str, str] = Field(default_factory=dict)
    body: dict[str, Any] = Field(default_factory=dict)


def check_token(inbound: InboundRequest, settings: Settings) -> None:
    """Only a non-empty string equal to BRIDGE_TOKEN passes; numbers are never coerced."""
    token = inbound.query.get("token") or inbound.body.get("token")
    if not isinstance(token, str) or not token:
        raise AuthError()
    if not hmac.compare_digest(token.encode("utf-8"), settings.bridge_token.encode("utf-8")):
        raise AuthError()


def is_test_mode(inbound: InboundRequest, settings: Settings) -> bool:
    return settings.test_mode or inbound.query.get("test") == "1" or bool(inbound.body.get("test"))


def parse_kind(inbound: InboundRequest) -> LeadKind:
    kind = inbound.body.get("kind")
    if kind not in (LeadKind.LEAD.value, LeadKind.PREQUAL.value):
        raise ValidationError()
    return LeadKind(kind)


def build_envelope(subject: str, body: str, settings: Settings, *, test_mode: bool) -> MailEnvelope:
    """Test mode goes to the test list with no CC; live mode adds the CC list."""
    if test_mode:
        to = split_recipients(settings.mail_to_test)
        cc: list[str] = []
    else:
        to = split_recipients(settings.mail_to_live)
        cc = split_recipients(settings.mail_cc_live)

    return MailEnvelope(
        sender=settings.mail_from,
        to=to,
        cc=cc,
        reply_to=settings.mail_reply_to,
        subject=subject,
        body=body,
    )


async def relay_submission(
    inbound: InboundRequest,
    settings: Settings,
    transport: MailTransport,
) -> DeliveryResponse:
    """
    Relay one webhook submission as an email.

    Raises AuthError (401) or ValidationError (400) before anything is sent;
    TransportError (500) if the SMTP send fails.
    """
    # ── 1. Gates (nothing is sent past a failure here) ───────────────────────
    check_token(inbound, settings)
    test_mode = is_test_mode(inbound, settings)
    kind = parse_kind(inbound)

    # ── 2. Normalize + render ────────────────────────────────────────────────
    normalized = normalize(inbound.body)
    rendered = render(kind, normalized, settings.mail_subj_prefix)
    envelope = build_envelope(rendered.subject, rendered.body, settings, test_mode=test_mode)

    if settings.debug_mailer:
        logger.info(
            "[MAILER] IN: method=%s kind=%s template=%s test=%s from=%s to=%s cc=%s reply_to=%s "
            "a_keys=%s add_keys=%s subj_len=%d text_len=%d",
            inbound.method,
            kind.value,
            rendered.kind.value,
            test_mode,
            envelope.sender,
            envelope.to,
            envelope.cc,
            envelope.reply_to,
            sorted(normalized.attributes),
            sorted(normalized.additional_info),
            len(rendered.subject),
            len(rendered.body),
        )

    # ── 3. Send (network I/O) ───────────────────────────────────────────────
    result = await transport.send(envelope)

    if settings.debug_mailer:
        logger.info(
            "[MAILER] SENT: message_id=%s accepted=%s rejected=%s response=%s",
            result.message_id,
            result.accepted,
            result.rejected,
            result.response,
        )

    return DeliveryResponse(
        test=test_mode,
        kind=kind,
        sent=SentRecipients(to=envelope.to, cc=envelope.cc),
        message_id=result.message_id,
    )
