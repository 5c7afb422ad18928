from __future__ import annotations

from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from core.domain.entities.base_entity import now_ts
from core.domain.entities.config_entity import ConfigEntity
from core.repositories.config_repository import ConfigRepository


class ConfigRepositoryMongoDB(ConfigRepository):
    """
    MongoDB repository for the runtime configuration.

    Uses a single document keyed by "key" == "runtime".
    """

    COLLECTION = "configs"
    RUNTIME_KEY = "runtime"

    def __init__(self, db: AsyncIOMotorDatabase):
        self._db = db

    async def ensure_indexes(self) -> None:
        col = self._db[self.COLLECTION]
        await col.create_index("key", unique=True)

    async def get_runtime(self) -> ConfigEntity | None:
        col = self._db[self.COLLECTION]
        doc = await col.find_one({"key": self.RUNTIME_KEY})
        return ConfigEntity.from_mongo(doc) if doc else None

    async def create_if_missing(self, cfg: ConfigEntity) -> ConfigEntity:
        col = self._db[self.COLLECTION]
        cfg.touch(created=True)
        payload = cfg.to_mongo()
        payload["key"] = self.RUNTIME_KEY
        doc = await col.find_one_and_update(
            {"key": self.RUNTIME_KEY},
            {"$setOnInsert": payload},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return ConfigEntity.from_mongo(doc)

    async def update_runtime(self, *, changes: Dict[str, Any], defaults: Dict[str, Any]) -> ConfigEntity:
        """
        Single find_one_and_update: present fields go to $set, defaults for the
        missing ones only apply on insert ($setOnInsert).
        """
        col = self._db[self.COLLECTION]
        now = now_ts()

        on_insert = {k: v for k, v in defaults.items() if k not in changes}
        on_insert["created_at"] = now

        doc = await col.find_one_and_update(
            {"key": self.RUNTIME_KEY},
            {
                "$set": {**changes, "updated_at": now},
                "$setOnInsert": on_insert,
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return ConfigEntity.from_mongo(doc)
