from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from core.domain.entities.config_entity import ConfigEntity


class ConfigRepository(ABC):
    """
    Abstraction for reading/writing the runtime config singleton.
    """

    @abstractmethod
    async def ensure_indexes(self) -> None: ...

    @abstractmethod
    async def get_runtime(self) -> Optional[ConfigEntity]:
        """
        Retrieve the runtime config, if present.
        """
        raise NotImplementedError

    @abstractmethod
    async def create_if_missing(self, cfg: ConfigEntity) -> ConfigEntity:
        """
        Insert `cfg` only when no runtime config exists; return whatever is stored.
        """
        raise NotImplementedError

    @abstractmethod
    async def update_runtime(self, *, changes: Dict[str, Any], defaults: Dict[str, Any]) -> ConfigEntity:
        """
        Merge `changes` into the runtime config in one atomic write.

        If no config exists yet, it is created from `changes` with `defaults`
        filling the fields `changes` does not carry.
        """
        raise NotImplementedError
