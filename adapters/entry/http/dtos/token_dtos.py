from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from core.services.validation_service import MAX_INT64, AddressService

from .base_dtos import PartialUpdateDTO


class TokenCreateDTO(BaseModel):
    """
    Request DTO for registering a token. (network_id, address) must be unused.
    """

    network_id: int = Field(..., ge=1, le=MAX_INT64)
    address: str
    name: Optional[str] = None
    symbol: Optional[str] = None
    decimals: Optional[int] = Field(default=None, ge=0, le=255)

    @field_validator("address")
    @classmethod
    def _check_address(cls, v: str) -> str:
        return AddressService.validate(v, "address")


class TokenUpdateDTO(PartialUpdateDTO):
    name: Optional[str] = None
    symbol: Optional[str] = None
    decimals: Optional[int] = Field(default=None, ge=0, le=255)


class TokenOutDTO(BaseModel):
    id: Optional[str] = None
    network_id: int
    address: str
    name: Optional[str] = None
    symbol: Optional[str] = None
    decimals: Optional[int] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
