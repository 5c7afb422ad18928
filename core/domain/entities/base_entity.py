# core/domain/entities/base_entity.py
from __future__ import annotations

import time
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict

E = TypeVar("E", bound="MongoEntity")


def now_ts() -> int:
    """
    Current Unix timestamp in seconds (the unit used by created_at/updated_at).
    """
    return int(time.time())


class MongoEntity(BaseModel):
    """
    Base entity for Mongo-backed documents.

    - Maps Mongo's `_id` to `id` (string).
    - Carries common timestamps (Unix seconds).
    - Accepts extra fields so lookup keys stored alongside the document
      (e.g. `address_key`) survive a round-trip without being declared.
    """

    id: Optional[str] = None  # maps _id
    created_at: Optional[int] = None
    updated_at: Optional[int] = None

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        extra="allow",
        use_enum_values=True,
    )

    @classmethod
    def from_mongo(cls: Type[E], doc: Optional[dict[str, Any]]) -> Optional[E]:
        """
        Convert a MongoDB document into a strongly-typed entity.

        Args:
            doc: Raw MongoDB dict (may include `_id`).

        Returns:
            An entity instance or None if doc is falsy.
        """
        if not doc:
            return None
        data = dict(doc)
        if "_id" in data:
            data["id"] = str(data.pop("_id"))
        return cls.model_validate(data)

    def to_mongo(self) -> dict[str, Any]:
        """
        Convert this entity into a MongoDB document dict.

        Returns:
            Dict suitable for Mongo insert (`id` is dropped; Mongo assigns `_id`).
        """
        data = self.model_dump(mode="python", exclude_none=True)
        data.pop("id", None)
        return data

    def touch(self, *, created: bool = False) -> None:
        """
        Stamp updated_at (and created_at when `created`) with the current time.
        """
        ts = now_ts()
        if created or self.created_at is None:
            self.created_at = ts
        self.updated_at = ts
