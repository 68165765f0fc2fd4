"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from castattest.config import Settings
from castattest.main import create_app

from tests.helpers import PRIVATE_KEY, SECRET, RECIPIENT, FakeAttestationClient


@pytest.fixture
def settings() -> Settings:
    """Fully configured settings that ignore the process environment file."""
    return Settings(
        _env_file=None,
        zapier_secret=SECRET,
        private_key=PRIVATE_KEY,
        alchemy_key="alchemy-test-key",
        prometheus_enabled=False,
    )


@pytest.fixture
def fake_client() -> FakeAttestationClient:
    return FakeAttestationClient()


@pytest.fixture
def client(settings: Settings, fake_client: FakeAttestationClient) -> TestClient:
    return TestClient(create_app(settings, attestation_client=fake_client))


@pytest.fixture
def cast_payload() -> dict:
    """Webhook body as sent by the automation platform."""
    return {
        "cast_hash": "0xabc123",
        "fid": "42",
        "attest_wallet": RECIPIENT,
        "cast_content": "hello",
        "cast_image_link": "",
        "assoc_brand": "acme",
        "token": SECRET,
    }
