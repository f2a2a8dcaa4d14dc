"""
Address resolution — X-address to classic address.

Wallet-facing addresses may be X-addresses (classic address plus an
optional tag, in one string). Sequence lookups need the classic form.
The codec itself comes from xrpl-py; this module only adds the error
mapping and the resolver seam.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from xrpl.core.addresscodec import (
    XRPLAddressCodecException,
    is_valid_classic_address,
    is_valid_xaddress,
    xaddress_to_classic_address,
)

from reliable_ledger.xrpl.errors import AddressResolutionError


@runtime_checkable
class AddressResolver(Protocol):
    """Converts an encoded address into the canonical classic form."""

    def decode_to_canonical(self, encoded_address: str) -> str:
        """Return the classic address.

        Raises:
            AddressResolutionError: If the input is not a valid address.
        """
        ...


class XAddressResolver:
    """AddressResolver backed by xrpl-py's address codec.

    Classic addresses pass through unchanged; X-addresses are decoded.
    """

    def decode_to_canonical(self, encoded_address: str) -> str:
        classic, _tag = self.decode_destination(encoded_address)
        return classic

    def decode_destination(self, encoded_address: str) -> tuple[str, int | None]:
        """Decode an address into (classic address, destination tag).

        The tag is None for classic addresses and for X-addresses
        without a tag.

        Raises:
            AddressResolutionError: If the input is not a valid address.
        """
        if not encoded_address:
            raise AddressResolutionError(encoded_address, "address must be non-empty")

        if is_valid_xaddress(encoded_address):
            try:
                classic, tag, _is_test = xaddress_to_classic_address(encoded_address)
            except XRPLAddressCodecException as exc:
                raise AddressResolutionError(encoded_address, str(exc)) from exc
            return classic, tag

        if is_valid_classic_address(encoded_address):
            return encoded_address, None

        raise AddressResolutionError(encoded_address)
