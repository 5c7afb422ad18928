from __future__ import annotations

import logging
from typing import Any, Dict

from core.domain.entities.config_entity import ConfigEntity
from core.domain.exceptions import NotFoundError
from core.repositories.config_repository import ConfigRepository


class ConfigUseCase:
    """
    Use case for the runtime config singleton (profit thresholds, recheck interval).

    Updates are field-level merges: anything absent from the payload keeps its value.
    """

    def __init__(
        self,
        *,
        config_repo: ConfigRepository,
        default_max_amount_usd: float,
        default_recheck_interval: int,
    ) -> None:
        self._repo = config_repo
        self._defaults = {
            "max_amount_usd": float(default_max_amount_usd),
            "recheck_interval": int(default_recheck_interval),
        }
        self._logger = logging.getLogger(self.__class__.__name__)

    async def get_config(self) -> ConfigEntity:
        cfg = await self._repo.get_runtime()
        if cfg is None:
            raise NotFoundError("Config not found")
        return cfg

    async def update_config(self, changes: Dict[str, Any]) -> ConfigEntity:
        """
        Merge the present fields into the config, creating it from defaults if missing.

        An empty payload only advances updated_at.
        """
        stored = await self._repo.update_runtime(changes=changes, defaults=self._defaults)
        self._logger.info("Config updated fields=%s", sorted(changes))
        return stored

    async def bootstrap(self) -> ConfigEntity:
        """
        Ensure a config document exists so GET /config works on a fresh database.
        """
        return await self._repo.create_if_missing(ConfigEntity(**self._defaults))
