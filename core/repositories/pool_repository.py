from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from core.domain.entities.pool_entity import PoolEntity


class PoolRepository(ABC):
    """Repository interface for pools, identified by id or (network_id, address)."""

    @abstractmethod
    async def ensure_indexes(self) -> None: ...

    @abstractmethod
    async def list_all(self) -> List[PoolEntity]: ...

    @abstractmethod
    async def list_by_network(self, network_id: int) -> List[PoolEntity]: ...

    @abstractmethod
    async def count_by_network(self, network_id: int) -> int: ...

    @abstractmethod
    async def get_by_id(self, pool_id: str) -> Optional[PoolEntity]: ...

    @abstractmethod
    async def get_by_address(self, network_id: int, address: str) -> Optional[PoolEntity]: ...

    @abstractmethod
    async def insert(self, pool: PoolEntity) -> PoolEntity:
        """
        Raises:
            ConflictError: (network_id, address) is already taken.
        """
        raise NotImplementedError

    @abstractmethod
    async def insert_if_missing(self, pool: PoolEntity) -> bool:
        """
        Insert unless (network_id, address) exists. Returns True when a pool was created.
        """
        raise NotImplementedError

    @abstractmethod
    async def update(self, pool_id: str, changes: Dict[str, Any]) -> Optional[PoolEntity]:
        """
        Apply changes to a live pool; None if missing or soft-deleted.
        """
        raise NotImplementedError

    @abstractmethod
    async def soft_delete(self, pool_id: str) -> bool:
        """
        Stamp deleted_at. Returns False if the pool is missing or already deleted.
        """
        raise NotImplementedError

    @abstractmethod
    async def hard_delete(self, pool_id: str) -> bool:
        """
        Remove the document, only if it was soft-deleted before.
        """
        raise NotImplementedError
