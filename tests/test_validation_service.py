"""Tests for address, url and route validation."""
from types import SimpleNamespace

import pytest

from core.services.validation_service import ZERO_ADDRESS, AddressService, RouteService, UrlService

CHECKSUM = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"


class TestAddressService:
    def test_accepts_lowercase_and_checksum_unchanged(self):
        assert AddressService.validate(CHECKSUM, "wrap_native") == CHECKSUM
        assert AddressService.validate(CHECKSUM.lower(), "wrap_native") == CHECKSUM.lower()

    @pytest.mark.parametrize(
        "value",
        [
            "C02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",  # no prefix
            "0x1234",
            "0xZZ2aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
            "",
        ],
    )
    def test_rejects_malformed(self, value):
        with pytest.raises(ValueError, match="wrap_native"):
            AddressService.validate(value, "wrap_native")

    def test_rejects_non_string(self):
        with pytest.raises(ValueError, match="must be a string"):
            AddressService.validate(123, "pool")

    def test_key_is_lowercase(self):
        assert AddressService.key(CHECKSUM) == CHECKSUM.lower()

    def test_zero_address(self):
        assert AddressService.is_zero(ZERO_ADDRESS)
        with pytest.raises(ValueError, match="zero address"):
            AddressService.validate_non_zero(ZERO_ADDRESS, "anchor_token")

    def test_validate_set_drops_case_insensitive_duplicates(self):
        out = AddressService.validate_set([CHECKSUM, CHECKSUM.lower(), ZERO_ADDRESS], "aero_factory_addresses")
        assert out == [CHECKSUM, ZERO_ADDRESS]

    def test_validate_keys_rejects_bad_key(self):
        with pytest.raises(ValueError, match="v2_factory_to_fee"):
            AddressService.validate_keys({"0xnope": 30}, "v2_factory_to_fee")


class TestUrlService:
    def test_value_is_not_normalized(self):
        assert UrlService.validate("https://mainnet.base.org", "rpcs[0]") == "https://mainnet.base.org"

    def test_scheme_restriction(self):
        with pytest.raises(ValueError, match="scheme"):
            UrlService.validate("https://example.org", "websocket_urls[0]", schemes=("ws", "wss"))

    def test_required_list(self):
        with pytest.raises(ValueError, match="at least one"):
            UrlService.validate_many([], "rpcs", required=True)

    def test_garbage(self):
        with pytest.raises(ValueError, match="invalid url"):
            UrlService.validate("not a url", "block_explorer")


def _hop(token_in, token_out):
    return SimpleNamespace(pool="0x" + "1" * 40, token_in=token_in, token_out=token_out)


class TestRouteService:
    A = "0x" + "a" * 40
    B = "0x" + "b" * 40
    C = "0x" + "c" * 40

    def test_empty_outer_sequence_is_allowed(self):
        RouteService.validate_routes([])

    def test_empty_route_rejected(self):
        with pytest.raises(ValueError, match=r"paths\[0\]: route cannot be empty"):
            RouteService.validate_routes([[]])

    def test_connected_route(self):
        RouteService.validate_routes([[_hop(self.A, self.B), _hop(self.B.upper().replace("0X", "0x"), self.C)]])

    def test_disconnected_route(self):
        with pytest.raises(ValueError, match="hop 0"):
            RouteService.validate_routes([[_hop(self.A, self.B), _hop(self.C, self.A)]])

    def test_first_hop_must_start_at_anchor(self):
        with pytest.raises(ValueError, match="must equal anchor_token"):
            RouteService.validate_routes([[_hop(self.B, self.A)]], anchor_token=self.A)

    def test_anchor_comparison_ignores_case(self):
        RouteService.validate_routes([[_hop(self.A, self.B)]], anchor_token=self.A.upper().replace("0X", "0x"))
