"""Hex and hashing helpers shared by the runtime and the address helpers."""
from __future__ import annotations

import hashlib

from eth_utils import remove_0x_prefix

from ..errors import ConversionError


def str2hexstr(value: str) -> str:
    """Encodes a text string to the hex convention used for storage keys."""
    return value.encode("utf-8").hex()


def hex_to_bytes(value: str) -> bytes:
    """Decodes a hex string (with or without "0x").

    Raises:
        ConversionError: If ``value`` is not valid hex.
    """
    try:
        return bytes.fromhex(remove_0x_prefix(value))
    except (ValueError, TypeError) as e:
        raise ConversionError(f"Invalid hex string: {value!r}") from e


def sha256d(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()
