"""HTTP tests for /api/v1/pools."""
import pytest
from pymongo.errors import PyMongoError

from adapters.external.database.pool_repository_mongodb import PoolRepositoryMongoDB

from conftest import POOL_A, POOL_B, network_payload

BASE = "/api/v1/pools"


@pytest.fixture
def base_client(client):
    assert client.post("/api/v1/networks", json=network_payload()).status_code == 201
    return client


def _create(client, address=POOL_A, network_id=8453):
    return client.post(BASE, json={"network_id": network_id, "address": address})


def test_create_requires_existing_network(client):
    response = _create(client)
    assert response.status_code == 400
    assert response.json() == {"error": "network_id: network with chain_id 8453 does not exist"}


def test_create_and_lookup_case_insensitive(base_client):
    response = _create(base_client)
    assert response.status_code == 201
    assert response.json()["address"] == POOL_A
    assert "address_key" not in response.json()

    found = base_client.get(f"{BASE}/network/8453/address/{POOL_A.lower()}")
    assert found.status_code == 200
    assert found.json()["id"] == response.json()["id"]
    assert found.json()["address"] == POOL_A


def test_lookup_other_address_is_404(base_client):
    _create(base_client)
    response = base_client.get(f"{BASE}/network/8453/address/{POOL_B}")
    assert response.status_code == 404
    assert response.json() == {"error": f"Pool with network_id 8453 and address {POOL_B} not found"}


def test_lookup_invalid_address(base_client):
    response = base_client.get(f"{BASE}/network/8453/address/0x123")
    assert response.status_code == 400
    assert response.json()["error"].startswith("address:")


def test_duplicate_ignores_case(base_client):
    assert _create(base_client).status_code == 201
    response = _create(base_client, address=POOL_A.lower())
    assert response.status_code == 409
    assert base_client.get(f"{BASE}/network/8453/count").json() == {"count": 1}


def test_same_address_on_other_network(base_client):
    base_client.post("/api/v1/networks", json=network_payload(chain_id=10))
    assert _create(base_client).status_code == 201
    assert _create(base_client, network_id=10).status_code == 201
    assert len(base_client.get(BASE).json()) == 2
    assert [p["network_id"] for p in base_client.get(f"{BASE}/network/10").json()] == [10]


def test_count(base_client):
    assert base_client.get(f"{BASE}/network/8453/count").json() == {"count": 0}
    _create(base_client, POOL_A)
    _create(base_client, POOL_B)
    assert base_client.get(f"{BASE}/network/8453/count").json() == {"count": 2}
    assert base_client.get(f"{BASE}/network/1/count").json() == {"count": 0}


def test_update_address(base_client):
    pool_id = _create(base_client).json()["id"]
    response = base_client.put(f"{BASE}/{pool_id}", json={"address": POOL_B})
    assert response.status_code == 200
    assert response.json()["address"] == POOL_B
    assert response.json()["network_id"] == 8453
    assert base_client.get(f"{BASE}/network/8453/address/{POOL_B.lower()}").status_code == 200
    assert base_client.get(f"{BASE}/network/8453/address/{POOL_A}").status_code == 404


def test_update_to_unknown_network(base_client):
    pool_id = _create(base_client).json()["id"]
    response = base_client.put(f"{BASE}/{pool_id}", json={"network_id": 999})
    assert response.status_code == 400
    assert "999" in response.json()["error"]


def test_update_missing(base_client):
    response = base_client.put(f"{BASE}/65f000000000000000000000", json={"address": POOL_B})
    assert response.status_code == 404
    assert response.json() == {"error": "Pool with id 65f000000000000000000000 not found"}


def test_invalid_id(base_client):
    response = base_client.put(f"{BASE}/not-an-id", json={"address": POOL_B})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid id format: not-an-id"}


def test_soft_delete_keeps_pool_listed(base_client):
    pool_id = _create(base_client).json()["id"]
    assert base_client.delete(f"{BASE}/{pool_id}").status_code == 204

    listed = base_client.get(BASE).json()
    assert [(p["id"], p["deleted"]) for p in listed] == [(pool_id, True)]

    response = base_client.delete(f"{BASE}/{pool_id}")
    assert response.status_code == 404
    assert response.json() == {"error": f"Pool with id {pool_id} not found or already deleted"}


def test_soft_deleted_pool_rejects_updates(base_client):
    pool_id = _create(base_client).json()["id"]
    base_client.delete(f"{BASE}/{pool_id}")
    response = base_client.put(f"{BASE}/{pool_id}", json={"address": POOL_B})
    assert response.status_code == 404
    assert response.json() == {"error": f"Pool with id {pool_id} not found"}


def test_hard_delete_requires_soft_delete(base_client):
    pool_id = _create(base_client).json()["id"]

    response = base_client.delete(f"{BASE}/{pool_id}/hard")
    assert response.status_code == 404
    assert response.json() == {"error": f"Pool with id {pool_id} not found or not soft-deleted"}

    base_client.delete(f"{BASE}/{pool_id}")
    assert base_client.delete(f"{BASE}/{pool_id}/hard").status_code == 204
    assert base_client.get(BASE).json() == []
    # the address is free again
    assert _create(base_client).status_code == 201


def test_update_missing_pool_checked_before_network(base_client):
    response = base_client.put(f"{BASE}/65f000000000000000000000", json={"network_id": 999})
    assert response.status_code == 404
    assert response.json() == {"error": "Pool with id 65f000000000000000000000 not found"}


def test_update_to_taken_address_conflicts(base_client):
    pool_a = _create(base_client, POOL_A).json()
    _create(base_client, POOL_B)

    response = base_client.put(f"{BASE}/{pool_a['id']}", json={"address": POOL_B.lower()})
    assert response.status_code == 409
    assert response.json() == {"error": "Pool with this network_id and address already exists"}

    stored = base_client.get(f"{BASE}/network/8453/address/{POOL_A}").json()
    assert stored == pool_a


def test_database_failure_is_500(base_client, monkeypatch):
    async def broken(self, *args, **kwargs):
        raise PyMongoError("connection reset")

    monkeypatch.setattr(PoolRepositoryMongoDB, "list_all", broken)
    response = base_client.get(BASE)
    assert response.status_code == 500
    assert response.json() == {"error": "Database error: connection reset"}


def test_pools_survive_network_delete(base_client):
    _create(base_client)
    assert base_client.delete("/api/v1/networks/8453").status_code == 204
    assert base_client.get(f"{BASE}/network/8453/count").json() == {"count": 1}
