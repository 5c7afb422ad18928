"""HTTP tests for /api/v1/config."""
import pytest

import adapters.external.database.config_repository_mongodb as config_repo_module

BASE = "/api/v1/config"


def test_bootstrap_defaults(client):
    response = client.get(BASE)
    assert response.status_code == 200
    body = response.json()
    assert body["max_amount_usd"] == 1000.0
    assert body["recheck_interval"] == 60
    assert body["created_at"] is not None


def test_bootstrap_does_not_overwrite(make_client):
    first = make_client()
    assert first.put(BASE, json={"max_amount_usd": 250.0}).status_code == 200

    second = make_client()
    assert second.get(BASE).json()["max_amount_usd"] == 250.0


def test_partial_update_keeps_other_field(client):
    response = client.put(BASE, json={"recheck_interval": 15})
    assert response.status_code == 200
    body = response.json()
    assert body["recheck_interval"] == 15
    assert body["max_amount_usd"] == 1000.0

    assert client.get(BASE).json() == body


def test_empty_update_only_advances_updated_at(client, monkeypatch):
    before = client.get(BASE).json()
    monkeypatch.setattr(config_repo_module, "now_ts", lambda: before["updated_at"] + 100)

    response = client.put(BASE, json={})
    assert response.status_code == 200
    after = response.json()
    assert after["updated_at"] == before["updated_at"] + 100
    assert after["created_at"] == before["created_at"]
    assert after["max_amount_usd"] == before["max_amount_usd"]
    assert after["recheck_interval"] == before["recheck_interval"]


@pytest.mark.parametrize(
    "body,fragment",
    [
        ({"max_amount_usd": 0}, "max_amount_usd"),
        ({"max_amount_usd": -10}, "max_amount_usd"),
        ({"recheck_interval": 0}, "recheck_interval"),
        ({"recheck_interval": "soon"}, "recheck_interval"),
        ({"max_amount_usd": None}, "max_amount_usd cannot be null"),
    ],
)
def test_update_validation(client, body, fragment):
    response = client.put(BASE, json=body)
    assert response.status_code == 400
    assert fragment in response.json()["error"]
    assert client.get(BASE).json()["max_amount_usd"] == 1000.0


def test_missing_config_is_404(client, mongo_db):
    client.portal.call(mongo_db["configs"].delete_many, {})
    response = client.get(BASE)
    assert response.status_code == 404
    assert response.json() == {"error": "Config not found"}


def test_update_recreates_missing_config(client, mongo_db):
    client.portal.call(mongo_db["configs"].delete_many, {})
    response = client.put(BASE, json={"recheck_interval": 30})
    assert response.status_code == 200
    assert response.json()["recheck_interval"] == 30
    assert response.json()["max_amount_usd"] == 1000.0
