from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from core.services.validation_service import MAX_INT64, AddressService

from .base_dtos import PartialUpdateDTO


class PoolCreateDTO(BaseModel):
    network_id: int = Field(..., ge=1, le=MAX_INT64, description="chain_id of an existing network")
    address: str

    @field_validator("address")
    @classmethod
    def _check_address(cls, v: str) -> str:
        return AddressService.validate(v, "address")


class PoolUpdateDTO(PartialUpdateDTO):
    network_id: Optional[int] = Field(default=None, ge=1, le=MAX_INT64)
    address: Optional[str] = None

    @field_validator("address")
    @classmethod
    def _check_address(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else AddressService.validate(v, "address")


class PoolOutDTO(BaseModel):
    id: Optional[str] = None
    network_id: int
    address: str
    deleted: bool = False
    created_at: Optional[int] = None
    updated_at: Optional[int] = None


class CountOutDTO(BaseModel):
    count: int
