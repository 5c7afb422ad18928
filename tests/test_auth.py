"""Tests for the API-key gate in isolation and on routes."""
import pytest

from adapters.entry.http.auth import ApiKeyGate
from core.domain.exceptions import UnauthorizedError

from conftest import network_payload


class TestApiKeyGate:
    def test_open_access_without_key(self):
        gate = ApiKeyGate(None)
        assert not gate.enabled
        gate.check(None)
        gate.check("anything")

    def test_missing_header(self):
        with pytest.raises(UnauthorizedError, match="API key required"):
            ApiKeyGate("secret").check(None)

    def test_wrong_key(self):
        with pytest.raises(UnauthorizedError, match="Invalid API key"):
            ApiKeyGate("secret").check("secret-but-longer")

    def test_matching_key(self):
        ApiKeyGate("secret").check("secret")


def test_no_key_configured_allows_mutation(client):
    response = client.post("/api/v1/networks", json=network_payload())
    assert response.status_code == 201


def test_key_required(secured_client):
    response = secured_client.post("/api/v1/networks", json=network_payload())
    assert response.status_code == 401
    assert response.json() == {"error": "API key required"}


def test_invalid_key(secured_client):
    response = secured_client.post(
        "/api/v1/networks", json=network_payload(), headers={"X-API-Key": "wrong"}
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid API key"}


def test_valid_key(secured_client, auth_headers):
    response = secured_client.post("/api/v1/networks", json=network_payload(), headers=auth_headers)
    assert response.status_code == 201


def test_reads_are_never_gated(secured_client):
    assert secured_client.get("/api/v1/health").status_code == 200
    assert secured_client.get("/api/v1/networks").status_code == 200
    assert secured_client.get("/api/v1/config").status_code == 200
    assert secured_client.get("/api/v1/pools").status_code == 200


@pytest.mark.parametrize(
    "method,url,body",
    [
        ("put", "/api/v1/config", {"recheck_interval": 5}),
        ("put", "/api/v1/networks/8453", {"name": "x"}),
        ("put", "/api/v1/networks/8453/factories", {"v2_factory_to_fee": {}, "aero_factory_addresses": []}),
        ("delete", "/api/v1/networks/8453", None),
        ("post", "/api/v1/pools", {"network_id": 8453, "address": "0x" + "1" * 40}),
        ("put", "/api/v1/pools/65f000000000000000000000", {"address": "0x" + "1" * 40}),
        ("post", "/api/v1/paths", {"chain_id": 8453, "anchor_token": "0x" + "1" * 40, "paths": []}),
        ("put", "/api/v1/paths/65f000000000000000000000", {"chain_id": 1}),
        ("delete", "/api/v1/paths/65f000000000000000000000", None),
        ("post", "/api/v1/paths/65f000000000000000000000/undelete", None),
        ("delete", "/api/v1/paths/65f000000000000000000000/hard", None),
        ("delete", "/api/v1/pools/65f000000000000000000000", None),
        ("delete", "/api/v1/pools/65f000000000000000000000/hard", None),
        ("post", "/api/v1/tokens", {"network_id": 8453, "address": "0x" + "1" * 40}),
        ("put", "/api/v1/tokens/65f000000000000000000000", {"symbol": "X"}),
        ("delete", "/api/v1/tokens/network/8453/address/0x" + "1" * 40, None),
    ],
)
def test_protected_routes(secured_client, method, url, body):
    kwargs = {"json": body} if body is not None else {}
    response = getattr(secured_client, method)(url, **kwargs)
    assert response.status_code == 401
    assert response.json() == {"error": "API key required"}
