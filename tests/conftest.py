"""
Shared fixtures: injected settings, a recording fake transport, and a TestClient
wired to both through dependency overrides.
"""
import pytest
from fastapi.testclient import TestClient

from lead_bridge.config import get_settings, load_settings
from lead_bridge.main import app
from lead_bridge.services.mailer import get_transport
from tests.fakes import TOKEN, FakeTransport


@pytest.fixture
def settings():
    return load_settings(
        smtp_user="mailer",
        smtp_pass="pw",
        bridge_token=TOKEN,
        mail_to_test="qa@lendnet.io",
        mail_to_live="info@lyftcapital.com, ops@lyftcapital.com",
        mail_cc_live="sean@lendnet.io",
        test_mode=False,
        debug_mailer=True,
    )


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(settings, transport):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_transport] = lambda: transport
    yield TestClient(app)
    app.dependency_overrides.clear()
