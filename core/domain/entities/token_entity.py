from __future__ import annotations

from typing import Optional

from core.domain.entities.base_entity import MongoEntity
from core.services.validation_service import AddressService


class TokenEntity(MongoEntity):
    """
    An ERC-20 style token known on a network, identified by (network_id, address).

    Metadata is optional: tokens are often registered before name/symbol/decimals are fetched.
    """

    network_id: int
    address: str
    address_key: str = ""

    name: Optional[str] = None
    symbol: Optional[str] = None
    decimals: Optional[int] = None

    def normalize(self) -> "TokenEntity":
        self.address_key = AddressService.key(self.address)
        return self
