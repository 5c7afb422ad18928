from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from core.domain.entities.path_entity import PathEntity


class PathRepository(ABC):
    """
    Abstraction for swap path persistence. Paths have no natural key.
    """

    @abstractmethod
    async def ensure_indexes(self) -> None: ...

    @abstractmethod
    async def list_all(self) -> List[PathEntity]: ...

    @abstractmethod
    async def list_by_anchor_token(self, anchor_token: str) -> List[PathEntity]:
        """
        List paths whose anchor token matches (case-insensitive).
        """
        raise NotImplementedError

    @abstractmethod
    async def list_by_chain_id(self, chain_id: int) -> List[PathEntity]: ...

    @abstractmethod
    async def get_by_id(self, path_id: str) -> Optional[PathEntity]: ...

    @abstractmethod
    async def insert(self, path: PathEntity) -> PathEntity: ...

    @abstractmethod
    async def update(self, path_id: str, changes: Dict[str, Any]) -> Optional[PathEntity]:
        """
        Apply changes to a live path; None if missing or soft-deleted.
        """
        raise NotImplementedError

    @abstractmethod
    async def soft_delete(self, path_id: str) -> bool: ...

    @abstractmethod
    async def hard_delete(self, path_id: str) -> bool:
        """
        Remove the document, only if it was soft-deleted before.
        """
        raise NotImplementedError

    @abstractmethod
    async def restore(self, path_id: str) -> Optional[PathEntity]:
        """
        Clear deleted_at; None if the path does not exist.
        """
        raise NotImplementedError
