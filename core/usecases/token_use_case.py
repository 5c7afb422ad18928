from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from core.domain.entities.token_entity import TokenEntity
from core.domain.exceptions import DomainValidationError, NotFoundError
from core.repositories.network_repository import NetworkRepository
from core.repositories.token_repository import TokenRepository


class TokenUseCase:
    """
    Use case for tokens known on each network.
    """

    def __init__(self, *, token_repo: TokenRepository, network_repo: NetworkRepository) -> None:
        self._repo = token_repo
        self._networks = network_repo
        self._logger = logging.getLogger(self.__class__.__name__)

    async def list_tokens(self) -> List[TokenEntity]:
        return await self._repo.list_all()

    async def list_by_network(self, network_id: int) -> List[TokenEntity]:
        return await self._repo.list_by_network(network_id)

    async def count_by_network(self, network_id: int) -> int:
        return await self._repo.count_by_network(network_id)

    async def get_by_address(self, network_id: int, address: str) -> TokenEntity:
        token = await self._repo.get_by_address(network_id, address)
        if token is None:
            raise NotFoundError(f"Token with network_id {network_id} and address {address} not found")
        return token

    async def create_token(
        self,
        *,
        network_id: int,
        address: str,
        name: Optional[str] = None,
        symbol: Optional[str] = None,
        decimals: Optional[int] = None,
    ) -> TokenEntity:
        if not await self._networks.exists(network_id):
            raise DomainValidationError(f"network_id: network with chain_id {network_id} does not exist")

        token = TokenEntity(network_id=network_id, address=address, name=name, symbol=symbol, decimals=decimals)
        stored = await self._repo.insert(token)
        self._logger.info("Token created network_id=%s address=%s symbol=%s", network_id, address, symbol)
        return stored

    async def update_token(self, token_id: str, changes: Dict[str, Any]) -> TokenEntity:
        stored = await self._repo.update(token_id, changes)
        if stored is None:
            raise NotFoundError(f"Token with id {token_id} not found")
        return stored

    async def delete_by_address(self, network_id: int, address: str) -> None:
        if not await self._repo.delete_by_address(network_id, address):
            raise NotFoundError(f"Token with network_id {network_id} and address {address} not found")
        self._logger.info("Token deleted network_id=%s address=%s", network_id, address)
