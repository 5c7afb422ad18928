from __future__ import annotations

from typing import Annotated

from fastapi import Path, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from config.settings import Settings
from core.domain.exceptions import DomainValidationError
from core.services.validation_service import MAX_INT64, AddressService


def get_db(request: Request) -> AsyncIOMotorDatabase:
    """
    Database handle opened by the app lifespan (or injected by create_app).
    """
    return request.app.state.db


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


# chain_id / network_id path parameters: unsigned, bounded by the store's int64 width
ChainIdParam = Annotated[int, Path(ge=0, le=MAX_INT64, description="Chain id, e.g. 8453")]


def parse_address(value: str, field: str = "address") -> str:
    """
    Validate an address taken from the URL path.

    Raises:
        DomainValidationError: value is not a 20-byte 0x-prefixed hex address.
    """
    try:
        return AddressService.validate(value, field)
    except ValueError as exc:
        raise DomainValidationError(str(exc)) from None
