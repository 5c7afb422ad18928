from __future__ import annotations

from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from core.domain.entities.base_entity import now_ts
from core.domain.entities.network_entity import NetworkEntity
from core.domain.exceptions import ConflictError
from core.repositories.network_repository import NetworkRepository


class NetworkRepositoryMongoDB(NetworkRepository):
    """
    MongoDB repository for networks.

    chain_id uniqueness is enforced by a unique index, so concurrent creates
    cannot both succeed.
    """

    COLLECTION = "networks"

    def __init__(self, db: AsyncIOMotorDatabase):
        self._db = db

    async def ensure_indexes(self) -> None:
        col = self._db[self.COLLECTION]
        await col.create_index("chain_id", unique=True)

    async def list_all(self) -> List[NetworkEntity]:
        col = self._db[self.COLLECTION]
        docs = await col.find({}).sort("chain_id", 1).to_list(length=None)
        out = [NetworkEntity.from_mongo(d) for d in docs]
        return [x for x in out if x is not None]

    async def get_by_chain_id(self, chain_id: int) -> NetworkEntity | None:
        col = self._db[self.COLLECTION]
        doc = await col.find_one({"chain_id": int(chain_id)})
        return NetworkEntity.from_mongo(doc) if doc else None

    async def exists(self, chain_id: int) -> bool:
        col = self._db[self.COLLECTION]
        return await col.find_one({"chain_id": int(chain_id)}, {"_id": 1}) is not None

    async def insert(self, network: NetworkEntity) -> NetworkEntity:
        col = self._db[self.COLLECTION]
        network.touch(created=True)
        try:
            result = await col.insert_one(network.to_mongo())
        except DuplicateKeyError:
            raise ConflictError(f"Network with chain_id {network.chain_id} already exists") from None
        network.id = str(result.inserted_id)
        return network

    async def update(self, chain_id: int, changes: Dict[str, Any]) -> NetworkEntity | None:
        col = self._db[self.COLLECTION]
        doc = await col.find_one_and_update(
            {"chain_id": int(chain_id)},
            {"$set": {**changes, "updated_at": now_ts()}},
            return_document=ReturnDocument.AFTER,
        )
        return NetworkEntity.from_mongo(doc) if doc else None

    async def update_factories(
        self,
        chain_id: int,
        *,
        v2_factory_to_fee: Dict[str, int],
        aero_factory_addresses: List[str],
    ) -> NetworkEntity | None:
        return await self.update(
            chain_id,
            {
                "v2_factory_to_fee": dict(v2_factory_to_fee),
                "aero_factory_addresses": list(aero_factory_addresses),
            },
        )

    async def delete(self, chain_id: int) -> bool:
        col = self._db[self.COLLECTION]
        result = await col.delete_one({"chain_id": int(chain_id)})
        return result.deleted_count > 0
