from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from core.services.validation_service import MAX_INT64, AddressService, RouteService

from .base_dtos import PartialUpdateDTO


class PoolHopDTO(BaseModel):
    """
    One hop of a route. Zero addresses are rejected.
    """

    pool: str
    token_in: str
    token_out: str

    @field_validator("pool", "token_in", "token_out")
    @classmethod
    def _check_address(cls, v: str, info) -> str:
        return AddressService.validate_non_zero(v, info.field_name)


class PathCreateDTO(BaseModel):
    """
    Request DTO for a path: route alternatives around one anchor token.

    An empty `paths` list is allowed; each route inside it must be non-empty,
    start from the anchor token and be connected (token_out of a hop is
    token_in of the next).
    """

    chain_id: int = Field(..., ge=1, le=MAX_INT64)
    anchor_token: str
    paths: List[List[PoolHopDTO]] = Field(default_factory=list)

    @field_validator("anchor_token")
    @classmethod
    def _check_anchor(cls, v: str) -> str:
        return AddressService.validate_non_zero(v, "anchor_token")

    @field_validator("paths")
    @classmethod
    def _check_routes(cls, v: List[List[PoolHopDTO]], info: ValidationInfo) -> List[List[PoolHopDTO]]:
        # anchor_token is absent from info.data when it failed its own check
        RouteService.validate_routes(v, "paths", anchor_token=info.data.get("anchor_token"))
        return v


class PathUpdateDTO(PartialUpdateDTO):
    """
    Partial path update. The anchor rule is checked against the merged record
    when the update is applied, since either side may be absent here.
    """

    chain_id: Optional[int] = Field(default=None, ge=1, le=MAX_INT64)
    anchor_token: Optional[str] = None
    paths: Optional[List[List[PoolHopDTO]]] = None

    @field_validator("anchor_token")
    @classmethod
    def _check_anchor(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else AddressService.validate_non_zero(v, "anchor_token")

    @field_validator("paths")
    @classmethod
    def _check_routes(cls, v: Optional[List[List[PoolHopDTO]]]) -> Optional[List[List[PoolHopDTO]]]:
        if v is not None:
            RouteService.validate_routes(v, "paths")
        return v


class PoolHopOutDTO(BaseModel):
    pool: str
    token_in: str
    token_out: str


class PathOutDTO(BaseModel):
    id: Optional[str] = None
    chain_id: int
    anchor_token: str
    paths: List[List[PoolHopOutDTO]]
    deleted: bool = False
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
