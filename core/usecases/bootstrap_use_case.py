from __future__ import annotations

import logging

from core.repositories.config_repository import ConfigRepository
from core.repositories.network_repository import NetworkRepository
from core.repositories.path_repository import PathRepository
from core.repositories.pool_repository import PoolRepository
from core.repositories.token_repository import TokenRepository
from core.usecases.config_use_case import ConfigUseCase


class BootstrapUseCase:
    """
    Startup tasks: make sure every collection has its indexes (unique natural
    keys included) and that the runtime config document exists.
    """

    def __init__(
        self,
        *,
        config_repo: ConfigRepository,
        network_repo: NetworkRepository,
        pool_repo: PoolRepository,
        token_repo: TokenRepository,
        path_repo: PathRepository,
        config_use_case: ConfigUseCase,
    ) -> None:
        self._repos = (config_repo, network_repo, pool_repo, token_repo, path_repo)
        self._config_uc = config_use_case
        self._logger = logging.getLogger(self.__class__.__name__)

    async def execute(self) -> None:
        for repo in self._repos:
            await repo.ensure_indexes()

        cfg = await self._config_uc.bootstrap()
        self._logger.info(
            "Runtime config ready max_amount_usd=%s recheck_interval=%s",
            cfg.max_amount_usd,
            cfg.recheck_interval,
        )
