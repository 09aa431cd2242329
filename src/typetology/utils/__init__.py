"""Initializes the typetology utilities sub-package.

This package bundles the Ontology protocol helpers the runtime builds on.
Address handling, argument packing and transaction layout come from
ontology-python-sdk; signing uses P-256 keys from `cryptography`. This
`__init__.py` file exposes the most important classes and functions from
the sub-modules for convenient, direct access.

Available Utilities:
  - address: Contract-address derivation and address parsing over the SDK Address.
  - crypto: ECDSA P-256 PrivateKey and PublicKey.
  - invocation: Typed Parameter records, invoke transaction building and signing.
  - codec: Hex and hashing helpers.
"""
from .address import ZERO_ADDRESS, Address, contract_address, parse_address
from .codec import str2hexstr, hex_to_bytes
from .crypto import PrivateKey, PublicKey
from .invocation import (
    ContractInvocation,
    Parameter,
    make_invoke_transaction,
    serialize_transaction,
    sign_transaction,
    transaction_hash,
)


__all__ = [
    # from .address
    "Address",
    "ZERO_ADDRESS",
    "contract_address",
    "parse_address",
    # from .codec
    "str2hexstr",
    "hex_to_bytes",
    # from .crypto
    "PrivateKey",
    "PublicKey",
    # from .invocation
    "ContractInvocation",
    "Parameter",
    "make_invoke_transaction",
    "serialize_transaction",
    "sign_transaction",
    "transaction_hash",
]
