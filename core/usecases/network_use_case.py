from __future__ import annotations

import logging
from typing import Any, Dict, List

from core.domain.entities.network_entity import NetworkEntity
from core.domain.exceptions import NotFoundError
from core.repositories.network_repository import NetworkRepository


class NetworkUseCase:
    """
    Use case for the network registry.

    Fields arrive already validated (DTO layer); this layer owns the
    not-found/conflict semantics and logging.
    """

    def __init__(self, *, network_repo: NetworkRepository) -> None:
        self._repo = network_repo
        self._logger = logging.getLogger(self.__class__.__name__)

    async def list_networks(self) -> List[NetworkEntity]:
        return await self._repo.list_all()

    async def get_network(self, chain_id: int) -> NetworkEntity:
        network = await self._repo.get_by_chain_id(chain_id)
        if network is None:
            raise NotFoundError(f"Network with chain_id {chain_id} not found")
        return network

    async def create_network(self, network: NetworkEntity) -> NetworkEntity:
        """
        Create a network. Fails with ConflictError if chain_id is taken; the
        existing record is not touched.
        """
        stored = await self._repo.insert(network)
        self._logger.info("Network created chain_id=%s name=%s", stored.chain_id, stored.name)
        return stored

    async def update_network(self, chain_id: int, changes: Dict[str, Any]) -> NetworkEntity:
        stored = await self._repo.update(chain_id, changes)
        if stored is None:
            raise NotFoundError(f"Network with chain_id {chain_id} not found")
        self._logger.info("Network updated chain_id=%s fields=%s", chain_id, sorted(changes))
        return stored

    async def update_factories(
        self,
        chain_id: int,
        *,
        v2_factory_to_fee: Dict[str, int],
        aero_factory_addresses: List[str],
    ) -> NetworkEntity:
        """
        Replace the V2 factory fee map and the Aero factory set together.
        """
        stored = await self._repo.update_factories(
            chain_id,
            v2_factory_to_fee=v2_factory_to_fee,
            aero_factory_addresses=aero_factory_addresses,
        )
        if stored is None:
            raise NotFoundError(f"Network with chain_id {chain_id} not found")
        self._logger.info(
            "Factories updated chain_id=%s v2=%s aero=%s",
            chain_id,
            len(v2_factory_to_fee),
            len(aero_factory_addresses),
        )
        return stored

    async def delete_network(self, chain_id: int) -> None:
        if not await self._repo.delete(chain_id):
            raise NotFoundError(f"Network with chain_id {chain_id} not found")
        self._logger.info("Network deleted chain_id=%s", chain_id)
