from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from core.domain.entities.network_entity import NetworkEntity


class NetworkRepository(ABC):
    """
    Abstraction for network persistence, keyed by chain_id.
    """

    @abstractmethod
    async def ensure_indexes(self) -> None: ...

    @abstractmethod
    async def list_all(self) -> List[NetworkEntity]: ...

    @abstractmethod
    async def get_by_chain_id(self, chain_id: int) -> Optional[NetworkEntity]: ...

    @abstractmethod
    async def exists(self, chain_id: int) -> bool: ...

    @abstractmethod
    async def insert(self, network: NetworkEntity) -> NetworkEntity:
        """
        Insert a new network.

        Raises:
            ConflictError: chain_id is already taken (enforced by the unique index).
        """
        raise NotImplementedError

    @abstractmethod
    async def update(self, chain_id: int, changes: Dict[str, Any]) -> Optional[NetworkEntity]:
        """
        Apply a partial update. Fields absent from `changes` are left untouched.

        Returns:
            The updated network, or None if chain_id is unknown.
        """
        raise NotImplementedError

    @abstractmethod
    async def update_factories(
        self,
        chain_id: int,
        *,
        v2_factory_to_fee: Dict[str, int],
        aero_factory_addresses: List[str],
    ) -> Optional[NetworkEntity]:
        """
        Replace both factory fields in a single write.
        """
        raise NotImplementedError

    @abstractmethod
    async def delete(self, chain_id: int) -> bool: ...
