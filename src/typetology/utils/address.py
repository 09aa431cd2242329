"""Ontology account and contract addresses.

Addresses are the SDK's ``ontology.common.address.Address``; this module
only adds the conversions the runtime needs, with SDK failures reported
as ConversionError.

A NeoVM contract's address is derived from its code hash by reversing the
byte order of the hash, which is how the node indexes deployed contracts.
"""
from __future__ import annotations

from typing import Union

from ontology.common.address import Address
from ontology.exception.exception import SDKException

from ..errors import ConversionError
from .codec import hex_to_bytes

ADDRESS_LENGTH: int = 20

ZERO_ADDRESS = Address(bytes(ADDRESS_LENGTH))


def address_from_bytes(value: bytes) -> Address:
    if len(value) != ADDRESS_LENGTH:
        raise ConversionError(f"Address must be {ADDRESS_LENGTH} bytes, got {len(value)}")
    return Address(bytes(value))


def contract_address(code_hash: str) -> Address:
    """Derives a contract address from its (0x-prefixed or bare) code hash."""
    return address_from_bytes(hex_to_bytes(code_hash)[::-1])


def parse_address(value: Union[str, Address]) -> Address:
    """
    Accepts an Address, a Base58 string or a 40-char hex string.

    Raises:
        ConversionError: If ``value`` is none of those.
    """
    if isinstance(value, Address):
        return value
    if not isinstance(value, str):
        raise ConversionError(f"Cannot interpret {type(value).__name__} as an address")
    if len(value) == ADDRESS_LENGTH * 2:
        return address_from_bytes(hex_to_bytes(value))
    try:
        return Address.b58decode(value)
    except (SDKException, ValueError) as e:
        raise ConversionError(f"Invalid base58 address: {value!r}") from e
