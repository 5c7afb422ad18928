"""
Pytest configuration for arb-config-api.

Provides fixtures for:
- an in-process MongoDB (mongomock-motor) so the real Mongo repositories and
  their unique indexes are exercised
- TestClients in open-access and API-key modes
- sample payloads
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, List, Optional

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from config.settings import Settings
from main import create_app

API_KEY = "test-api-key"

WETH_BASE = "0x4200000000000000000000000000000000000006"
USDC_BASE = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
MULTICALL3 = "0xcA11bde05977b3631167028862bE2a173976CA11"
V2_FACTORY = "0x8909Dc15e40173Ff4699343b6eB8132c65e18eC6"
AERO_FACTORY = "0x420DD381b31aEf6683db6B902084cB0FFECe40Da"

POOL_A = "0xd0b53D9277642d899DF5C87A3966A349A798F224"
POOL_B = "0x88A43bbDF9D098eEC7bCEda4e2494615dfD9bB9C"
TOKEN_X = "0x50c5725949A6F0c72E6C4a641F24049A917DB0Cb"


@pytest.fixture
def mongo_db():
    return AsyncMongoMockClient()["arb_config_test"]


@pytest.fixture
def make_client(mongo_db) -> Iterator[Callable[..., TestClient]]:
    """
    Factory for TestClients sharing one database; lifespan (indexes + config
    bootstrap) runs on enter.
    """
    opened: List[TestClient] = []

    def _make(api_key: Optional[str] = None) -> TestClient:
        cfg = Settings(API_KEY=api_key, LOG_LEVEL="DEBUG", CORS_ORIGINS=["http://localhost:3000"])
        client = TestClient(create_app(cfg, db=mongo_db))
        client.__enter__()
        opened.append(client)
        return client

    yield _make

    for client in opened:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()


@pytest.fixture
def secured_client(make_client) -> TestClient:
    return make_client(API_KEY)


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"X-API-Key": API_KEY}


def network_payload(chain_id: int = 8453, **overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "chain_id": chain_id,
        "name": "Base",
        "rpcs": ["https://mainnet.base.org", "https://base.llamarpc.com"],
        "websocket_urls": ["wss://base-rpc.publicnode.com"],
        "block_explorer": "https://basescan.org",
        "wrap_native": WETH_BASE,
        "min_profit_usd": 1.5,
        "v2_factory_to_fee": {V2_FACTORY: 30},
        "aero_factory_addresses": [AERO_FACTORY],
        "multicall_address": MULTICALL3,
        "max_blocks_per_batch": 500,
        "wait_time_fetch": 250,
    }
    payload.update(overrides)
    return payload


def path_payload(chain_id: int = 8453, **overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "chain_id": chain_id,
        "anchor_token": WETH_BASE,
        "paths": [
            [
                {"pool": POOL_A, "token_in": WETH_BASE, "token_out": USDC_BASE},
                {"pool": POOL_B, "token_in": USDC_BASE, "token_out": WETH_BASE},
            ]
        ],
    }
    payload.update(overrides)
    return payload
