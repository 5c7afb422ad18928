from __future__ import annotations

from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from adapters.external.database.mongodb_client import to_object_id
from core.domain.entities.base_entity import now_ts
from core.domain.entities.token_entity import TokenEntity
from core.domain.exceptions import ConflictError
from core.repositories.token_repository import TokenRepository
from core.services.validation_service import AddressService


class TokenRepositoryMongoDB(TokenRepository):
    """
    MongoDB repository for tokens.

    Same identity scheme as pools: unique (network_id, address_key).
    """

    COLLECTION = "tokens"

    def __init__(self, db: AsyncIOMotorDatabase):
        self._db = db

    async def ensure_indexes(self) -> None:
        col = self._db[self.COLLECTION]
        await col.create_index([("network_id", 1), ("address_key", 1)], unique=True)

    async def list_all(self) -> List[TokenEntity]:
        return await self._find({})

    async def list_by_network(self, network_id: int) -> List[TokenEntity]:
        return await self._find({"network_id": int(network_id)})

    async def count_by_network(self, network_id: int) -> int:
        col = self._db[self.COLLECTION]
        return int(await col.count_documents({"network_id": int(network_id)}))

    async def get_by_address(self, network_id: int, address: str) -> TokenEntity | None:
        col = self._db[self.COLLECTION]
        doc = await col.find_one({"network_id": int(network_id), "address_key": AddressService.key(address)})
        return TokenEntity.from_mongo(doc) if doc else None

    async def insert(self, token: TokenEntity) -> TokenEntity:
        col = self._db[self.COLLECTION]
        token.normalize().touch(created=True)
        try:
            result = await col.insert_one(token.to_mongo())
        except DuplicateKeyError:
            raise ConflictError(
                f"Token with network_id {token.network_id} and address {token.address} already exists"
            ) from None
        token.id = str(result.inserted_id)
        return token

    async def update(self, token_id: str, changes: Dict[str, Any]) -> TokenEntity | None:
        col = self._db[self.COLLECTION]
        doc = await col.find_one_and_update(
            {"_id": to_object_id(token_id)},
            {"$set": {**changes, "updated_at": now_ts()}},
            return_document=ReturnDocument.AFTER,
        )
        return TokenEntity.from_mongo(doc) if doc else None

    async def delete_by_address(self, network_id: int, address: str) -> bool:
        col = self._db[self.COLLECTION]
        result = await col.delete_one({"network_id": int(network_id), "address_key": AddressService.key(address)})
        return result.deleted_count > 0

    async def _find(self, query: Dict[str, Any]) -> List[TokenEntity]:
        col = self._db[self.COLLECTION]
        docs = await col.find(query).sort("_id", 1).to_list(length=None)
        return [TokenEntity.from_mongo(d) for d in docs if d]
