from __future__ import annotations

from typing import Dict, List, Optional

from core.domain.entities.base_entity import MongoEntity


class NetworkEntity(MongoEntity):
    """
    A blockchain network the bot operates on, keyed by chain_id.

    Address-shaped fields are stored exactly as submitted (lowercase or checksum casing).
    """

    chain_id: int
    name: Optional[str] = None

    rpcs: List[str]
    websocket_urls: Optional[List[str]] = None
    block_explorer: Optional[str] = None

    wrap_native: str
    min_profit_usd: float

    # Factory configuration, always replaced together via the factories update
    v2_factory_to_fee: Optional[Dict[str, int]] = None
    aero_factory_addresses: Optional[List[str]] = None

    multicall_address: Optional[str] = None
    max_blocks_per_batch: int
    wait_time_fetch: int  # ms
