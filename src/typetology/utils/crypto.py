"""Provides the signing keys used to authorize Ontology transactions.

Ontology's default signature scheme is ECDSA over NIST P-256 (secp256r1)
with SHA-256. Signatures are serialized as the raw 64-byte ``r || s``
concatenation and public keys as 33-byte compressed points.

Dependencies:
  - cryptography: For the elliptic-curve operations.
"""
from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from ..errors import ConversionError
from .codec import hex_to_bytes

_CURVE = ec.SECP256R1()
_SIGNATURE_ALGORITHM = ec.ECDSA(hashes.SHA256())

# Scalars and coordinates are 32 bytes on P-256.
_COMPONENT_SIZE = 32


class PublicKey:
    """An ECDSA P-256 public key."""

    def __init__(self, key: ec.EllipticCurvePublicKey) -> None:
        self._key = key

    @classmethod
    def from_bytes(cls, data: bytes) -> "PublicKey":
        """Loads a compressed or uncompressed SEC1 point.

        Raises:
            ConversionError: If ``data`` is not a point on P-256.
        """
        try:
            return cls(ec.EllipticCurvePublicKey.from_encoded_point(_CURVE, data))
        except ValueError as e:
            raise ConversionError(f"Invalid public key: {e}") from e

    def serialize(self) -> bytes:
        """Returns the 33-byte compressed point."""
        return self._key.public_bytes(Encoding.X962, PublicFormat.CompressedPoint)

    def verify(self, signature: bytes, data: bytes) -> bool:
        """Checks a 64-byte ``r || s`` signature over ``data``."""
        if len(signature) != 2 * _COMPONENT_SIZE:
            return False
        r = int.from_bytes(signature[:_COMPONENT_SIZE], "big")
        s = int.from_bytes(signature[_COMPONENT_SIZE:], "big")
        try:
            self._key.verify(encode_dss_signature(r, s), data, _SIGNATURE_ALGORITHM)
        except InvalidSignature:
            return False
        return True


class PrivateKey:
    """An ECDSA P-256 private key able to sign transaction hashes."""

    def __init__(self, key: ec.EllipticCurvePrivateKey) -> None:
        self._key = key

    @classmethod
    def from_hex(cls, value: str) -> "PrivateKey":
        """Loads a key from its 32-byte hex scalar.

        Raises:
            ConversionError: If ``value`` is not a valid P-256 scalar.
        """
        raw = hex_to_bytes(value)
        if len(raw) != _COMPONENT_SIZE:
            raise ConversionError(f"Private key must be {_COMPONENT_SIZE} bytes, got {len(raw)}")
        try:
            return cls(ec.derive_private_key(int.from_bytes(raw, "big"), _CURVE))
        except ValueError as e:
            raise ConversionError(f"Invalid private key: {e}") from e

    @classmethod
    def generate(cls) -> "PrivateKey":
        return cls(ec.generate_private_key(_CURVE))

    def to_hex(self) -> str:
        return self._key.private_numbers().private_value.to_bytes(_COMPONENT_SIZE, "big").hex()

    def public_key(self) -> PublicKey:
        return PublicKey(self._key.public_key())

    def sign(self, data: bytes) -> bytes:
        """Signs ``data`` with SHA256withECDSA and returns ``r || s``."""
        r, s = decode_dss_signature(self._key.sign(data, _SIGNATURE_ALGORITHM))
        return r.to_bytes(_COMPONENT_SIZE, "big") + s.to_bytes(_COMPONENT_SIZE, "big")

    def __repr__(self) -> str:
        # Never print key material.
        return "PrivateKey(<hidden>)"
