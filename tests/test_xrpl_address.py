"""
Tests for XAddressResolver.

Test plan:
- Classic addresses pass through unchanged
- X-addresses decode to classic (mainnet and testnet), tag preserved by
  decode_destination, tagless X-address yields None
- Invalid input (empty, garbage, corrupted checksum) → AddressResolutionError
  with the offending address attached
- Resolver satisfies the AddressResolver protocol
"""

import pytest
from xrpl.core.addresscodec import classic_address_to_xaddress

from reliable_ledger.xrpl.address import AddressResolver, XAddressResolver
from reliable_ledger.xrpl.errors import AddressResolutionError, ErrorCode

SAMPLE_ACCOUNT = "rHb9CJAWyB4rj91VRWn96DkukG4bwdtyTh"


class TestDecodeToCanonical:
    def test_classic_passes_through(self) -> None:
        assert XAddressResolver().decode_to_canonical(SAMPLE_ACCOUNT) == SAMPLE_ACCOUNT

    def test_mainnet_xaddress(self) -> None:
        xaddress = classic_address_to_xaddress(SAMPLE_ACCOUNT, None, False)
        assert XAddressResolver().decode_to_canonical(xaddress) == SAMPLE_ACCOUNT

    def test_testnet_xaddress_with_tag(self) -> None:
        xaddress = classic_address_to_xaddress(SAMPLE_ACCOUNT, 99, True)
        assert XAddressResolver().decode_to_canonical(xaddress) == SAMPLE_ACCOUNT

    def test_protocol(self) -> None:
        assert isinstance(XAddressResolver(), AddressResolver)


class TestDecodeDestination:
    def test_tag_preserved(self) -> None:
        xaddress = classic_address_to_xaddress(SAMPLE_ACCOUNT, 12345, False)
        assert XAddressResolver().decode_destination(xaddress) == (SAMPLE_ACCOUNT, 12345)

    def test_tagless_xaddress(self) -> None:
        xaddress = classic_address_to_xaddress(SAMPLE_ACCOUNT, None, False)
        assert XAddressResolver().decode_destination(xaddress) == (SAMPLE_ACCOUNT, None)

    def test_classic_has_no_tag(self) -> None:
        assert XAddressResolver().decode_destination(SAMPLE_ACCOUNT) == (SAMPLE_ACCOUNT, None)


class TestInvalid:
    @pytest.mark.parametrize("address", ["", "not-an-address", "rHb9CJAWyB4rj91VRWn96DkukG4bwdtyTX"])
    def test_raises(self, address: str) -> None:
        with pytest.raises(AddressResolutionError) as exc_info:
            XAddressResolver().decode_to_canonical(address)
        assert exc_info.value.address == address
        assert exc_info.value.code == ErrorCode.UNKNOWN

    def test_corrupted_xaddress(self) -> None:
        xaddress = classic_address_to_xaddress(SAMPLE_ACCOUNT, None, False)
        corrupted = xaddress[:-1] + ("a" if xaddress[-1] != "a" else "b")
        with pytest.raises(AddressResolutionError):
            XAddressResolver().decode_to_canonical(corrupted)
