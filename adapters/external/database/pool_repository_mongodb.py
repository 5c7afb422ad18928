from __future__ import annotations

from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from adapters.external.database.mongodb_client import LIVE, SOFT_DELETED, to_object_id
from core.domain.entities.base_entity import now_ts
from core.domain.entities.pool_entity import PoolEntity
from core.domain.exceptions import ConflictError
from core.repositories.pool_repository import PoolRepository
from core.services.validation_service import AddressService


class PoolRepositoryMongoDB(PoolRepository):
    """
    MongoDB repository for pools.

    Identity is (network_id, address_key) where address_key is the lowercase
    address; the unique index makes create atomic against concurrent inserts.
    """

    COLLECTION = "pools"

    def __init__(self, db: AsyncIOMotorDatabase):
        self._db = db

    async def ensure_indexes(self) -> None:
        col = self._db[self.COLLECTION]
        await col.create_index([("network_id", 1), ("address_key", 1)], unique=True)

    async def list_all(self) -> List[PoolEntity]:
        return await self._find({})

    async def list_by_network(self, network_id: int) -> List[PoolEntity]:
        return await self._find({"network_id": int(network_id)})

    async def count_by_network(self, network_id: int) -> int:
        col = self._db[self.COLLECTION]
        return int(await col.count_documents({"network_id": int(network_id)}))

    async def get_by_id(self, pool_id: str) -> PoolEntity | None:
        col = self._db[self.COLLECTION]
        doc = await col.find_one({"_id": to_object_id(pool_id)})
        return PoolEntity.from_mongo(doc) if doc else None

    async def get_by_address(self, network_id: int, address: str) -> PoolEntity | None:
        col = self._db[self.COLLECTION]
        doc = await col.find_one({"network_id": int(network_id), "address_key": AddressService.key(address)})
        return PoolEntity.from_mongo(doc) if doc else None

    async def insert(self, pool: PoolEntity) -> PoolEntity:
        col = self._db[self.COLLECTION]
        pool.normalize().touch(created=True)
        try:
            result = await col.insert_one(pool.to_mongo())
        except DuplicateKeyError:
            raise ConflictError(
                f"Pool with network_id {pool.network_id} and address {pool.address} already exists"
            ) from None
        pool.id = str(result.inserted_id)
        return pool

    async def insert_if_missing(self, pool: PoolEntity) -> bool:
        col = self._db[self.COLLECTION]
        pool.normalize().touch(created=True)
        key = {"network_id": pool.network_id, "address_key": pool.address_key}
        try:
            result = await col.update_one(key, {"$setOnInsert": pool.to_mongo()}, upsert=True)
        except DuplicateKeyError:
            # lost the race to a concurrent insert of the same pool
            return False
        return result.upserted_id is not None

    async def update(self, pool_id: str, changes: Dict[str, Any]) -> PoolEntity | None:
        col = self._db[self.COLLECTION]
        try:
            doc = await col.find_one_and_update(
                {"_id": to_object_id(pool_id), **LIVE},
                {"$set": {**changes, "updated_at": now_ts()}},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            raise ConflictError("Pool with this network_id and address already exists") from None
        return PoolEntity.from_mongo(doc) if doc else None

    async def soft_delete(self, pool_id: str) -> bool:
        col = self._db[self.COLLECTION]
        now = now_ts()
        result = await col.update_one(
            {"_id": to_object_id(pool_id), **LIVE},
            {"$set": {"deleted_at": now, "updated_at": now}},
        )
        return result.matched_count > 0

    async def hard_delete(self, pool_id: str) -> bool:
        col = self._db[self.COLLECTION]
        result = await col.delete_one({"_id": to_object_id(pool_id), **SOFT_DELETED})
        return result.deleted_count > 0

    async def _find(self, query: Dict[str, Any]) -> List[PoolEntity]:
        col = self._db[self.COLLECTION]
        docs = await col.find(query).sort("_id", 1).to_list(length=None)
        return [PoolEntity.from_mongo(d) for d in docs if d]
