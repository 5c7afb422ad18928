from __future__ import annotations

from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from core.services.validation_service import MAX_INT64, AddressService, UrlService

from .base_dtos import PartialUpdateDTO

Fee = Annotated[int, Field(ge=0, le=MAX_INT64)]

RPC_SCHEMES = ("http", "https", "ws", "wss")
WS_SCHEMES = ("ws", "wss")
EXPLORER_SCHEMES = ("http", "https")


class _NetworkFieldChecks(BaseModel):
    """
    Field validators shared by create and update payloads.
    """

    @field_validator("name", check_fields=False)
    @classmethod
    def _check_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("name: cannot be empty")
        return v

    @field_validator("rpcs", check_fields=False)
    @classmethod
    def _check_rpcs(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return None
        return UrlService.validate_many(v, "rpcs", schemes=RPC_SCHEMES, required=True)

    @field_validator("websocket_urls", check_fields=False)
    @classmethod
    def _check_websockets(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return None
        return UrlService.validate_many(v, "websocket_urls", schemes=WS_SCHEMES)

    @field_validator("block_explorer", check_fields=False)
    @classmethod
    def _check_explorer(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return UrlService.validate(v, "block_explorer", schemes=EXPLORER_SCHEMES)

    @field_validator("wrap_native", "multicall_address", check_fields=False)
    @classmethod
    def _check_address(cls, v: Optional[str], info) -> Optional[str]:
        if v is None:
            return None
        return AddressService.validate(v, info.field_name)

    @field_validator("v2_factory_to_fee", check_fields=False)
    @classmethod
    def _check_factory_fees(cls, v: Optional[Dict[str, int]]) -> Optional[Dict[str, int]]:
        if v is None:
            return None
        return AddressService.validate_keys(v, "v2_factory_to_fee")

    @field_validator("aero_factory_addresses", check_fields=False)
    @classmethod
    def _check_aero(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return None
        return AddressService.validate_set(v, "aero_factory_addresses")


class NetworkCreateDTO(_NetworkFieldChecks):
    """
    Request DTO for registering a network. chain_id must be unused.
    """

    chain_id: int = Field(..., ge=1, le=MAX_INT64, description="EVM chain id, e.g. 8453 for Base")
    name: Optional[str] = None

    rpcs: List[str] = Field(..., description="Ordered RPC endpoints; at least one")
    websocket_urls: Optional[List[str]] = None
    block_explorer: Optional[str] = None

    wrap_native: str = Field(..., description="Wrapped native token address (e.g. WETH)")
    min_profit_usd: float = Field(..., ge=0, allow_inf_nan=False)

    v2_factory_to_fee: Optional[Dict[str, Fee]] = None
    aero_factory_addresses: Optional[List[str]] = None
    multicall_address: Optional[str] = None

    max_blocks_per_batch: int = Field(..., ge=1, le=MAX_INT64)
    wait_time_fetch: int = Field(..., ge=0, le=MAX_INT64, description="Milliseconds")


class NetworkUpdateDTO(PartialUpdateDTO, _NetworkFieldChecks):
    """
    Partial network update: only fields present in the body are changed.
    """

    name: Optional[str] = None
    rpcs: Optional[List[str]] = None
    websocket_urls: Optional[List[str]] = None
    block_explorer: Optional[str] = None
    wrap_native: Optional[str] = None
    min_profit_usd: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    v2_factory_to_fee: Optional[Dict[str, Fee]] = None
    aero_factory_addresses: Optional[List[str]] = None
    multicall_address: Optional[str] = None
    max_blocks_per_batch: Optional[int] = Field(default=None, ge=1, le=MAX_INT64)
    wait_time_fetch: Optional[int] = Field(default=None, ge=0, le=MAX_INT64)


class NetworkFactoriesUpdateDTO(_NetworkFieldChecks):
    """
    Both factory fields are required: they are replaced together.
    """

    v2_factory_to_fee: Dict[str, Fee]
    aero_factory_addresses: List[str]


class NetworkOutDTO(BaseModel):
    id: Optional[str] = None

    chain_id: int
    name: Optional[str] = None
    rpcs: List[str]
    websocket_urls: Optional[List[str]] = None
    block_explorer: Optional[str] = None
    wrap_native: str
    min_profit_usd: float
    v2_factory_to_fee: Optional[Dict[str, int]] = None
    aero_factory_addresses: Optional[List[str]] = None
    multicall_address: Optional[str] = None
    max_blocks_per_batch: int
    wait_time_fetch: int

    created_at: Optional[int] = None
    updated_at: Optional[int] = None
