from __future__ import annotations

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient

from config.settings import Settings, settings as default_settings
from core.domain.exceptions import DomainValidationError


def get_mongo_client(cfg: Settings | None = None) -> AsyncIOMotorClient:
    """
    Build a Motor client from settings (connection timeout and pool size included).
    """
    cfg = cfg or default_settings
    return AsyncIOMotorClient(
        cfg.MONGODB_URL,
        serverSelectionTimeoutMS=cfg.MONGODB_TIMEOUT_MS,
        connectTimeoutMS=cfg.MONGODB_TIMEOUT_MS,
        maxPoolSize=cfg.MONGODB_MAX_POOL_SIZE,
    )


def to_object_id(value: str) -> ObjectId:
    """
    Parse a document id from a path parameter.

    Raises:
        DomainValidationError: value is not a 24-char hex ObjectId.
    """
    if not ObjectId.is_valid(value):
        raise DomainValidationError(f"Invalid id format: {value}")
    return ObjectId(value)


# Soft-delete filters; {"deleted_at": None} also matches documents without the field.
LIVE = {"deleted_at": None}
SOFT_DELETED = {"deleted_at": {"$ne": None}}
