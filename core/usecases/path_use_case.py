from __future__ import annotations

import logging
from typing import Any, Dict, List

from core.domain.entities.path_entity import PathEntity, PoolHop
from core.domain.exceptions import DomainValidationError, NotFoundError
from core.repositories.network_repository import NetworkRepository
from core.repositories.path_repository import PathRepository
from core.services.validation_service import AddressService, RouteService
from core.usecases.pool_use_case import PoolUseCase


class PathUseCase:
    """
    Use case for multi-hop swap paths.

    After a write, the pools referenced by the routes are registered in the
    pool registry for the path's chain, provided that chain is a known network.
    """

    def __init__(
        self,
        *,
        path_repo: PathRepository,
        network_repo: NetworkRepository,
        pool_use_case: PoolUseCase,
    ) -> None:
        self._repo = path_repo
        self._networks = network_repo
        self._pools = pool_use_case
        self._logger = logging.getLogger(self.__class__.__name__)

    async def list_paths(self) -> List[PathEntity]:
        return await self._repo.list_all()

    async def list_by_anchor_token(self, anchor_token: str) -> List[PathEntity]:
        return await self._repo.list_by_anchor_token(anchor_token)

    async def list_by_chain_id(self, chain_id: int) -> List[PathEntity]:
        return await self._repo.list_by_chain_id(chain_id)

    async def get_path(self, path_id: str) -> PathEntity:
        path = await self._repo.get_by_id(path_id)
        if path is None:
            raise NotFoundError(f"Path with id {path_id} not found")
        return path

    async def create_path(self, path: PathEntity) -> PathEntity:
        stored = await self._repo.insert(path)
        self._logger.info(
            "Path created id=%s chain_id=%s routes=%s", stored.id, stored.chain_id, len(stored.paths)
        )
        await self._register_pools(stored)
        return stored

    async def update_path(self, path_id: str, changes: Dict[str, Any]) -> PathEntity:
        """
        Partial update of a live path.

        The route rules are checked on the merged record (stored values
        overlaid with the changes), so an anchor change must still match the
        first hop of every stored route.
        """
        existing = await self._repo.get_by_id(path_id)
        if existing is None or existing.deleted:
            raise NotFoundError(f"Path with id {path_id} not found")

        changes = dict(changes)
        anchor_token = changes.get("anchor_token", existing.anchor_token)
        if "paths" in changes:
            routes = [[PoolHop.model_validate(h) for h in route] for route in changes["paths"]]
        else:
            routes = existing.paths
        try:
            RouteService.validate_routes(routes, "paths", anchor_token=anchor_token)
        except ValueError as exc:
            raise DomainValidationError(str(exc)) from None

        if "anchor_token" in changes:
            changes["anchor_token_key"] = AddressService.key(changes["anchor_token"])

        stored = await self._repo.update(path_id, changes)
        if stored is None:
            raise NotFoundError(f"Path with id {path_id} not found")
        self._logger.info("Path updated id=%s fields=%s", path_id, sorted(changes))
        if "paths" in changes or "chain_id" in changes:
            await self._register_pools(stored)
        return stored

    async def delete_path(self, path_id: str) -> None:
        """
        Soft delete: the path stays readable with deleted=true until restored
        or hard deleted.
        """
        if not await self._repo.soft_delete(path_id):
            raise NotFoundError(f"Path with id {path_id} not found or already deleted")
        self._logger.info("Path soft deleted id=%s", path_id)

    async def undelete_path(self, path_id: str) -> PathEntity:
        restored = await self._repo.restore(path_id)
        if restored is None:
            raise NotFoundError(f"Path with id {path_id} not found")
        self._logger.info("Path restored id=%s", path_id)
        return restored

    async def hard_delete_path(self, path_id: str) -> None:
        if not await self._repo.hard_delete(path_id):
            raise NotFoundError(f"Path with id {path_id} not found or not soft-deleted")
        self._logger.info("Path hard deleted id=%s", path_id)

    async def _register_pools(self, path: PathEntity) -> None:
        addresses = path.pool_addresses()
        if not addresses:
            return
        if not await self._networks.exists(path.chain_id):
            self._logger.warning(
                "Path %s references unknown chain_id=%s; skipping pool registration", path.id, path.chain_id
            )
            return
        await self._pools.register_pools(path.chain_id, addresses)
