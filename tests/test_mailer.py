"""
SmtpTransport against a patched aiosmtplib.send.
"""
import aiosmtplib
import pytest

from lead_bridge.errors import TransportError
from lead_bridge.schemas.mail import MailEnvelope
from lead_bridge.services.mailer import SmtpTransport, build_message


def _envelope(**overrides):
    fields = dict(
        sender="Lendnet.io <notify@lendnet.io>",
        to=["info@lyftcapital.com"],
        cc=["sean@lendnet.io"],
        reply_to="sean@lendnet.io",
        subject="[Lendnet.io] New Business Loan Lead",
        body="Business Name: Acme\n",
    )
    fields.update(overrides)
    return MailEnvelope(**fields)


def _transport(**overrides):
    fields = dict(host="smtp.test", port=465, username="u", password="p", use_tls=True)
    fields.update(overrides)
    return SmtpTransport(**fields)


def test_build_message_headers():
    message = build_message(_envelope())

    [sender] = message["From"].addresses
    assert sender.addr_spec == "notify@lendnet.io"
    assert sender.display_name == "Lendnet.io"
    assert message["To"] == "info@lyftcapital.com"
    assert message["Cc"] == "sean@lendnet.io"
    assert message["Reply-To"] == "sean@lendnet.io"
    assert message["Subject"] == "[Lendnet.io] New Business Loan Lead"
    assert message["Message-ID"].endswith("@lendnet.io>")
    assert message.get_content() == "Business Name: Acme\n"


def test_build_message_omits_empty_cc():
    message = build_message(_envelope(cc=[]))
    assert message["Cc"] is None


@pytest.mark.asyncio
async def test_send_reports_message_id_and_recipients(monkeypatch):
    calls = []

    async def fake_send(message, **kwargs):
        calls.append((message, kwargs))
        return {"sean@lendnet.io": (550, "mailbox unavailable")}, "250 OK queued"

    monkeypatch.setattr(aiosmtplib, "send", fake_send)

    result = await _transport().send(_envelope())

    [(message, kwargs)] = calls
    assert kwargs == {
        "hostname": "smtp.test",
        "port": 465,
        "username": "u",
        "password": "p",
        "use_tls": True,
    }
    assert result.message_id == message["Message-ID"]
    assert result.accepted == ["info@lyftcapital.com"]
    assert result.rejected == ["sean@lendnet.io"]
    assert result.response == "250 OK queued"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [aiosmtplib.SMTPException("auth rejected"), ConnectionRefusedError("refused")],
)
async def test_send_failures_become_transport_error(monkeypatch, error):
    async def failing_send(message, **kwargs):
        raise error

    monkeypatch.setattr(aiosmtplib, "send", failing_send)

    with pytest.raises(TransportError, match="SMTP send failed"):
        await _transport().send(_envelope())
