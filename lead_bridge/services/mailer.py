"""
Outbound mail transport.

The route depends only on MailTransport.send(); SmtpTransport is the production
implementation over aiosmtplib, and tests substitute a fake.
"""

import logging
from email.message import EmailMessage
from email.utils import make_msgid, parseaddr
from functools import lru_cache
from typing import Protocol

import aiosmtplib

from lead_bridge.config import Settings, get_settings
from lead_bridge.errors import TransportError
from lead_bridge.schemas.mail import MailEnvelope, SendResult

logger = logging.getLogger(__name__)


class MailTransport(Protocol):
    async def send(self, envelope: MailEnvelope) -> SendResult: ...


class SmtpTransport:
    """Sends one message per call over a fresh SMTP connection."""

    def __init__(
        self,
        *,
        host: str,
        port: int,
        username: str,
        password: str,
        use_tls: bool = True,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpTransport":
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_user,
            password=settings.smtp_pass,
            use_tls=settings.smtp_secure,
        )

    async def send(self, envelope: MailEnvelope) -> SendResult:
        message = build_message(envelope)
        recipients = [*envelope.to, *envelope.cc]

        try:
            errors, response = await aiosmtplib.send(
                message,
                hostname=self.host,
                port=self.port,
                username=self.username,
                password=self.password,
                use_tls=self.use_tls,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            raise TransportError(f"SMTP send failed: {e}") from e

        return SendResult(
            message_id=str(message["Message-ID"]),
            accepted=[r for r in recipients if r not in errors],
            rejected=list(errors),
            response=response,
        )


def build_message(envelope: MailEnvelope) -> EmailMessage:
    """Plaintext MIME message with a generated Message-ID."""
    message = EmailMessage()
    message["From"] = envelope.sender
    message["To"] = ", ".join(envelope.to)
    if envelope.cc:
        message["Cc"] = ", ".join(envelope.cc)
    if envelope.reply_to:
        message["Reply-To"] = envelope.reply_to
    message["Subject"] = envelope.subject
    message["Message-ID"] = make_msgid(domain=_sender_domain(envelope.sender))
    message.set_content(envelope.body)
    return message


def _sender_domain(sender: str) -> str | None:
    """Domain of the From address, used for Message-ID."""
    _, address = parseaddr(sender)
    if "@" in address:
        return address.rsplit("@", 1)[1]
    return None


@lru_cache
def get_transport() -> MailTransport:
    """Process-wide transport, built on first use from the loaded settings."""
    settings = get_settings()
    logger.info(
        "SMTP transport configured for %s:%s (tls=%s)",
        settings.smtp_host,
        settings.smtp_port,
        settings.smtp_secure,
    )
    return SmtpTransport.from_settings(settings)
