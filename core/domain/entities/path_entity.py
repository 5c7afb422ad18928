from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from core.domain.entities.base_entity import MongoEntity
from core.services.validation_service import AddressService


class PoolHop(BaseModel):
    """
    One swap step: trade token_in for token_out through pool.
    """

    pool: str
    token_in: str
    token_out: str


class PathEntity(MongoEntity):
    """
    Multi-hop swap routes organized around an anchor token on one chain.

    `paths` holds route alternatives; each route is an ordered list of hops.
    There is no natural key: paths are addressed by id. A soft-deleted path
    stays readable and can be restored; updates skip it.
    """

    chain_id: int
    anchor_token: str
    anchor_token_key: str = ""

    paths: List[List[PoolHop]] = []

    deleted_at: Optional[int] = None  # set by soft delete

    @property
    def deleted(self) -> bool:
        return self.deleted_at is not None

    def normalize(self) -> "PathEntity":
        self.anchor_token_key = AddressService.key(self.anchor_token)
        return self

    def pool_addresses(self) -> List[str]:
        """
        Distinct pool addresses referenced by any hop, in first-seen order.
        """
        seen: dict[str, str] = {}
        for route in self.paths:
            for hop in route:
                seen.setdefault(AddressService.key(hop.pool), hop.pool)
        return list(seen.values())
