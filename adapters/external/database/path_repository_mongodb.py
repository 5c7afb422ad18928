from __future__ import annotations

from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from adapters.external.database.mongodb_client import LIVE, SOFT_DELETED, to_object_id
from core.domain.entities.base_entity import now_ts
from core.domain.entities.path_entity import PathEntity
from core.repositories.path_repository import PathRepository
from core.services.validation_service import AddressService


class PathRepositoryMongoDB(PathRepository):
    """
    MongoDB repository for swap paths.

    Routes are embedded in the path document, so every write replaces them
    atomically together with chain_id/anchor_token.
    """

    COLLECTION = "paths"

    def __init__(self, db: AsyncIOMotorDatabase):
        self._db = db

    async def ensure_indexes(self) -> None:
        col = self._db[self.COLLECTION]
        await col.create_index([("chain_id", 1)])
        await col.create_index([("anchor_token_key", 1)])

    async def list_all(self) -> List[PathEntity]:
        return await self._find({})

    async def list_by_anchor_token(self, anchor_token: str) -> List[PathEntity]:
        return await self._find({"anchor_token_key": AddressService.key(anchor_token)})

    async def list_by_chain_id(self, chain_id: int) -> List[PathEntity]:
        return await self._find({"chain_id": int(chain_id)})

    async def get_by_id(self, path_id: str) -> PathEntity | None:
        col = self._db[self.COLLECTION]
        doc = await col.find_one({"_id": to_object_id(path_id)})
        return PathEntity.from_mongo(doc) if doc else None

    async def insert(self, path: PathEntity) -> PathEntity:
        col = self._db[self.COLLECTION]
        path.normalize().touch(created=True)
        result = await col.insert_one(path.to_mongo())
        path.id = str(result.inserted_id)
        return path

    async def update(self, path_id: str, changes: Dict[str, Any]) -> PathEntity | None:
        col = self._db[self.COLLECTION]
        doc = await col.find_one_and_update(
            {"_id": to_object_id(path_id), **LIVE},
            {"$set": {**changes, "updated_at": now_ts()}},
            return_document=ReturnDocument.AFTER,
        )
        return PathEntity.from_mongo(doc) if doc else None

    async def soft_delete(self, path_id: str) -> bool:
        col = self._db[self.COLLECTION]
        now = now_ts()
        result = await col.update_one(
            {"_id": to_object_id(path_id), **LIVE},
            {"$set": {"deleted_at": now, "updated_at": now}},
        )
        return result.matched_count > 0

    async def hard_delete(self, path_id: str) -> bool:
        col = self._db[self.COLLECTION]
        result = await col.delete_one({"_id": to_object_id(path_id), **SOFT_DELETED})
        return result.deleted_count > 0

    async def restore(self, path_id: str) -> PathEntity | None:
        col = self._db[self.COLLECTION]
        doc = await col.find_one_and_update(
            {"_id": to_object_id(path_id)},
            {"$unset": {"deleted_at": ""}, "$set": {"updated_at": now_ts()}},
            return_document=ReturnDocument.AFTER,
        )
        return PathEntity.from_mongo(doc) if doc else None

    async def _find(self, query: Dict[str, Any]) -> List[PathEntity]:
        col = self._db[self.COLLECTION]
        docs = await col.find(query).sort("_id", 1).to_list(length=None)
        return [PathEntity.from_mongo(d) for d in docs if d]
