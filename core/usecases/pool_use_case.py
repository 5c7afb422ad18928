from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from core.domain.entities.pool_entity import PoolEntity
from core.domain.exceptions import DomainValidationError, NotFoundError
from core.repositories.network_repository import NetworkRepository
from core.repositories.pool_repository import PoolRepository
from core.services.validation_service import AddressService


class PoolUseCase:
    """
    Use case for liquidity pools.

    network_id is a soft reference: it is checked against the network registry
    when written, never cascaded. Deletes are soft first; reads include
    soft-deleted pools.
    """

    def __init__(self, *, pool_repo: PoolRepository, network_repo: NetworkRepository) -> None:
        self._repo = pool_repo
        self._networks = network_repo
        self._logger = logging.getLogger(self.__class__.__name__)

    async def list_pools(self) -> List[PoolEntity]:
        return await self._repo.list_all()

    async def list_by_network(self, network_id: int) -> List[PoolEntity]:
        return await self._repo.list_by_network(network_id)

    async def count_by_network(self, network_id: int) -> int:
        return await self._repo.count_by_network(network_id)

    async def get_by_address(self, network_id: int, address: str) -> PoolEntity:
        pool = await self._repo.get_by_address(network_id, address)
        if pool is None:
            raise NotFoundError(f"Pool with network_id {network_id} and address {address} not found")
        return pool

    async def create_pool(self, *, network_id: int, address: str) -> PoolEntity:
        await self._require_network(network_id)
        stored = await self._repo.insert(PoolEntity(network_id=network_id, address=address))
        self._logger.info("Pool created network_id=%s address=%s", network_id, address)
        return stored

    async def update_pool(self, pool_id: str, changes: Dict[str, Any]) -> PoolEntity:
        """
        Partial update of a live pool. Soft-deleted pools are treated as missing.
        """
        existing = await self._repo.get_by_id(pool_id)
        if existing is None or existing.deleted:
            raise NotFoundError(f"Pool with id {pool_id} not found")

        changes = dict(changes)
        if "network_id" in changes:
            await self._require_network(changes["network_id"])
        if "address" in changes:
            changes["address_key"] = AddressService.key(changes["address"])

        stored = await self._repo.update(pool_id, changes)
        if stored is None:
            raise NotFoundError(f"Pool with id {pool_id} not found")
        self._logger.info("Pool updated id=%s fields=%s", pool_id, sorted(changes))
        return stored

    async def delete_pool(self, pool_id: str) -> None:
        """
        Soft delete: the pool stays readable with deleted=true.
        """
        if not await self._repo.soft_delete(pool_id):
            raise NotFoundError(f"Pool with id {pool_id} not found or already deleted")
        self._logger.info("Pool soft deleted id=%s", pool_id)

    async def hard_delete_pool(self, pool_id: str) -> None:
        if not await self._repo.hard_delete(pool_id):
            raise NotFoundError(f"Pool with id {pool_id} not found or not soft-deleted")
        self._logger.info("Pool hard deleted id=%s", pool_id)

    async def register_pools(self, network_id: int, addresses: Iterable[str]) -> int:
        """
        Create-if-missing for every address. Never conflicts.

        Returns:
            Number of pools that did not exist before.
        """
        created = 0
        for address in addresses:
            if await self._repo.insert_if_missing(PoolEntity(network_id=network_id, address=address)):
                created += 1
        if created:
            self._logger.info("Registered %s new pools for network_id=%s", created, network_id)
        return created

    async def _require_network(self, network_id: int) -> None:
        if not await self._networks.exists(network_id):
            raise DomainValidationError(f"network_id: network with chain_id {network_id} does not exist")
