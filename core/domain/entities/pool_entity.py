from __future__ import annotations

from typing import Optional

from core.domain.entities.base_entity import MongoEntity
from core.services.validation_service import AddressService


class PoolEntity(MongoEntity):
    """
    A liquidity pool known on a network.

    Identity is (network_id, address). `address` keeps the submitted casing;
    `address_key` is its lowercase form and backs the unique index and lookups.
    """

    network_id: int
    address: str
    address_key: str = ""

    deleted_at: Optional[int] = None  # set by soft delete

    @property
    def deleted(self) -> bool:
        return self.deleted_at is not None

    def normalize(self) -> "PoolEntity":
        """
        Recompute address_key from address.

        Returns:
            The same entity instance (mutated) for fluent usage.
        """
        self.address_key = AddressService.key(self.address)
        return self
