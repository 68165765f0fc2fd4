"""Tests for the webhook HTTP surface."""

from eth_abi import decode
from fastapi.testclient import TestClient

from castattest.config import Settings
from castattest.errors import SubmissionError
from castattest.main import create_app
from castattest.routers.mint import LIVENESS_MESSAGE

from tests.helpers import FAKE_TX_HASH, RECIPIENT, SECRET, FakeAttestationClient

CAST_TYPES = ["uint32", "uint32", "string", "string", "string", "string"]


def test_mint_success(client: TestClient, fake_client: FakeAttestationClient, cast_payload: dict):
    resp = client.post("/api/mint", json=cast_payload)

    assert resp.status_code == 200
    body = resp.json()
    assert body["tx_hash"] == FAKE_TX_HASH
    assert FAKE_TX_HASH in body["message"]

    assert len(fake_client.submissions) == 1
    _, recipient, data = fake_client.submissions[0]
    assert recipient == RECIPIENT
    _, fid, cast_hash, content, image, brand = decode(CAST_TYPES, data)
    assert (fid, cast_hash, content, image, brand) == (42, "abc123", "hello", "", "acme")


def test_mint_accepts_lowercase_wallet(client: TestClient, fake_client: FakeAttestationClient, cast_payload: dict):
    cast_payload["attest_wallet"] = RECIPIENT.lower()

    resp = client.post("/api/mint", json=cast_payload)

    assert resp.status_code == 200
    assert fake_client.submissions[0][1] == RECIPIENT


def test_mint_wrong_token(client: TestClient, fake_client: FakeAttestationClient, cast_payload: dict):
    cast_payload["token"] = "wrong"

    resp = client.post("/api/mint", json=cast_payload)

    assert resp.status_code == 401
    assert resp.json()["error"] == "invalid_token"
    assert fake_client.submissions == []


def test_mint_missing_field(client: TestClient, fake_client: FakeAttestationClient, cast_payload: dict):
    del cast_payload["assoc_brand"]

    resp = client.post("/api/mint", json=cast_payload)

    assert resp.status_code == 400
    assert resp.json()["error"] == "invalid_request"
    assert fake_client.submissions == []


def test_mint_unknown_field(client: TestClient, fake_client: FakeAttestationClient, cast_payload: dict):
    cast_payload["channel"] = "memes"

    resp = client.post("/api/mint", json=cast_payload)

    assert resp.status_code == 400
    assert fake_client.submissions == []


def test_mint_bad_values(client: TestClient, fake_client: FakeAttestationClient, cast_payload: dict):
    for field, value in [
        ("fid", "not-a-number"),
        ("fid", -1),
        ("fid", 2**32),
        ("fid", True),
        ("fid", False),
        ("cast_hash", "0xnothex"),
        ("attest_wallet", "0xDEAD"),
    ]:
        payload = {**cast_payload, field: value}
        resp = client.post("/api/mint", json=payload)
        assert resp.status_code == 400, (field, value)

    assert fake_client.submissions == []


def test_mint_non_json_body(client: TestClient, fake_client: FakeAttestationClient):
    resp = client.post(
        "/api/mint",
        content=b"cast_hash=0xabc",
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    assert fake_client.submissions == []


def test_mint_wrong_method(client: TestClient):
    for method in ("PUT", "PATCH", "DELETE"):
        resp = client.request(method, "/api/mint")
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid request"


def test_mint_head_and_options_rejected(client: TestClient, fake_client: FakeAttestationClient):
    for method in ("HEAD", "OPTIONS"):
        resp = client.request(method, "/api/mint")
        assert resp.status_code == 400, method

    assert fake_client.submissions == []


def test_mint_bool_fid_rejected(client: TestClient, fake_client: FakeAttestationClient, cast_payload: dict):
    cast_payload["fid"] = True

    resp = client.post("/api/mint", json=cast_payload)

    assert resp.status_code == 400
    assert resp.json()["details"][0]["loc"] == ["body", "fid"]
    assert fake_client.submissions == []


def test_validation_error_does_not_echo_token(client: TestClient, cast_payload: dict):
    del cast_payload["assoc_brand"]

    resp = client.post("/api/mint", json=cast_payload)

    assert resp.status_code == 400
    assert SECRET not in resp.text
    assert all("input" not in err for err in resp.json()["details"])


def test_lazily_built_service_is_reused(settings, cast_payload: dict):
    app = create_app(settings, attestation_client=FakeAttestationClient())
    client = TestClient(app)

    client.post("/api/mint", json=cast_payload)
    service = app.state.attestation_service
    client.post("/api/mint", json=cast_payload)

    assert service is not None
    assert app.state.attestation_service is service


def test_mint_liveness(client: TestClient, fake_client: FakeAttestationClient):
    resp = client.get("/api/mint")

    assert resp.status_code == 200
    assert resp.text == LIVENESS_MESSAGE
    assert fake_client.submissions == []


def test_mint_submission_failure(settings: Settings, cast_payload: dict):
    fake = FakeAttestationClient(error=SubmissionError("execution reverted"))
    client = TestClient(create_app(settings, attestation_client=fake))

    resp = client.post("/api/mint", json=cast_payload)

    assert resp.status_code == 502
    body = resp.json()
    assert body["error"] == "submission_failed"
    assert "reverted" not in body["message"]


def test_mint_submission_failure_debug(settings: Settings, cast_payload: dict):
    settings.debug = True
    fake = FakeAttestationClient(error=SubmissionError("execution reverted"))
    client = TestClient(create_app(settings, attestation_client=fake))

    resp = client.post("/api/mint", json=cast_payload)

    assert resp.status_code == 502
    assert "reverted" in resp.json()["message"]


def test_mint_without_private_key(cast_payload: dict):
    settings = Settings(
        _env_file=None,
        zapier_secret=SECRET,
        alchemy_key="alchemy-test-key",
        prometheus_enabled=False,
    )
    client = TestClient(create_app(settings))

    resp = client.post("/api/mint", json=cast_payload)

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "internal_server_error"
    assert "PRIVATE_KEY" not in body["message"]


def test_mint_same_cast_twice(client: TestClient, fake_client: FakeAttestationClient, cast_payload: dict):
    assert client.post("/api/mint", json=cast_payload).status_code == 200
    assert client.post("/api/mint", json=cast_payload).status_code == 200

    assert len(fake_client.submissions) == 2
