from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from core.domain.entities.token_entity import TokenEntity


class TokenRepository(ABC):
    """Repository interface for tokens, identified by id or (network_id, address)."""

    @abstractmethod
    async def ensure_indexes(self) -> None: ...

    @abstractmethod
    async def list_all(self) -> List[TokenEntity]: ...

    @abstractmethod
    async def list_by_network(self, network_id: int) -> List[TokenEntity]: ...

    @abstractmethod
    async def count_by_network(self, network_id: int) -> int: ...

    @abstractmethod
    async def get_by_address(self, network_id: int, address: str) -> Optional[TokenEntity]: ...

    @abstractmethod
    async def insert(self, token: TokenEntity) -> TokenEntity:
        """
        Raises:
            ConflictError: (network_id, address) is already taken.
        """
        raise NotImplementedError

    @abstractmethod
    async def update(self, token_id: str, changes: Dict[str, Any]) -> Optional[TokenEntity]: ...

    @abstractmethod
    async def delete_by_address(self, network_id: int, address: str) -> bool: ...
