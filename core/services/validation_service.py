from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from eth_utils import is_hex_address
from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Largest integer the store keeps as a native signed 64-bit value.
MAX_INT64 = 2**63 - 1

_URL = TypeAdapter(AnyUrl)


class AddressService:
    """
    Address validation and canonical keys.

    Rules:
    - An address is "0x" + 40 hex chars. Lowercase, uppercase and checksum casing
      are all accepted and returned unchanged (no case coercion).
    - `key()` is the lowercase form used for uniqueness and lookups.
    - Checks raise ValueError with a message naming the field, so they work both
      inside pydantic validators and from plain code.
    """

    @staticmethod
    def key(address: str) -> str:
        return (address or "").strip().lower()

    @staticmethod
    def is_zero(address: str) -> bool:
        return AddressService.key(address) == ZERO_ADDRESS

    @staticmethod
    def validate(value: Any, field: str) -> str:
        if not isinstance(value, str):
            raise ValueError(f"{field}: address must be a string")
        v = value.strip()
        if not v.startswith(("0x", "0X")) or not is_hex_address(v):
            raise ValueError(f"{field}: invalid address format '{value}'")
        return v

    @staticmethod
    def validate_non_zero(value: Any, field: str) -> str:
        v = AddressService.validate(value, field)
        if AddressService.is_zero(v):
            raise ValueError(f"{field}: cannot be zero address")
        return v

    @staticmethod
    def validate_set(values: Iterable[str], field: str) -> List[str]:
        """
        Validate a collection of addresses and drop case-insensitive duplicates,
        keeping the first occurrence and the original order.
        """
        out: List[str] = []
        seen: set[str] = set()
        for i, value in enumerate(values):
            v = AddressService.validate(value, f"{field}[{i}]")
            k = AddressService.key(v)
            if k not in seen:
                seen.add(k)
                out.append(v)
        return out

    @staticmethod
    def validate_keys(mapping: Dict[str, Any], field: str) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        seen: set[str] = set()
        for addr, value in mapping.items():
            v = AddressService.validate(addr, f"{field}[{addr}]")
            k = AddressService.key(v)
            if k in seen:
                raise ValueError(f"{field}: duplicate address '{addr}'")
            seen.add(k)
            out[v] = value
        return out


class UrlService:
    """
    URL checks. Values are validated with pydantic's AnyUrl but stored as submitted.
    """

    @staticmethod
    def validate(value: Any, field: str, *, schemes: Optional[Sequence[str]] = None) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{field}: url is required")
        v = value.strip()
        try:
            parsed = _URL.validate_python(v)
        except PydanticValidationError:
            raise ValueError(f"{field}: invalid url '{value}'") from None
        if schemes and parsed.scheme not in schemes:
            raise ValueError(f"{field}: url scheme must be one of {', '.join(schemes)}")
        return v

    @staticmethod
    def validate_many(
        values: Iterable[str],
        field: str,
        *,
        schemes: Optional[Sequence[str]] = None,
        required: bool = False,
    ) -> List[str]:
        out = [UrlService.validate(v, f"{field}[{i}]", schemes=schemes) for i, v in enumerate(values)]
        if required and not out:
            raise ValueError(f"{field}: must contain at least one url")
        return out


class RouteService:
    """
    Structural checks for swap routes (sequences of hops with pool/token_in/token_out).

    Hop addresses are expected to be validated already; this checks shape,
    that every route leaves from the anchor token, and connectivity.
    """

    @staticmethod
    def validate_routes(
        routes: Sequence[Sequence[Any]],
        field: str = "paths",
        *,
        anchor_token: Optional[str] = None,
    ) -> None:
        anchor_key = AddressService.key(anchor_token) if anchor_token else None
        for r, route in enumerate(routes):
            if not route:
                raise ValueError(f"{field}[{r}]: route cannot be empty")
            if anchor_key is not None and AddressService.key(route[0].token_in) != anchor_key:
                raise ValueError(
                    f"{field}[{r}]: first token_in ({route[0].token_in}) must equal anchor_token ({anchor_token})"
                )
            for h in range(len(route) - 1):
                if AddressService.key(route[h].token_out) != AddressService.key(route[h + 1].token_in):
                    raise ValueError(
                        f"{field}[{r}]: token_out at hop {h} ({route[h].token_out}) does not match "
                        f"token_in at hop {h + 1} ({route[h + 1].token_in})"
                    )
