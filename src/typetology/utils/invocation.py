"""Invoke transactions for NeoVM contracts, built with ontology-python-sdk.

The SDK packs the arguments (``InvokeFunction``), lays out the
transaction (``InvokeTransaction``) and serializes the signature list
(``Sig``). This module checks each argument against its declared ABI
kind first, and signs with the P-256 keys from :mod:`.crypto`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ontology.common.address import Address
from ontology.contract.neo.invoke_function import InvokeFunction
from ontology.core.invoke_transaction import InvokeTransaction
from ontology.core.sig import Sig

from ..errors import ConversionError
from ..types import ParameterKind
from .address import ZERO_ADDRESS
from .codec import hex_to_bytes, sha256d
from .crypto import PrivateKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Parameter:
    """A typed, named argument of a contract call.

    Attributes:
        name: Parameter name from the ABI.
        type: Declared parameter kind.
        value: Argument value; ByteArray values are hex strings.
    """
    name: str
    type: ParameterKind
    value: Any


class ContractInvocation(InvokeTransaction):
    """An SDK invoke transaction that remembers which call it carries."""

    def __init__(
        self,
        function_name: str,
        parameters: Sequence[Parameter],
        payer: Address,
        gas_price: int,
        gas_limit: int,
    ) -> None:
        super().__init__(payer=payer.to_bytes(), gas_price=gas_price, gas_limit=gas_limit)
        self.function_name = function_name
        self.parameters = tuple(parameters)


def _untyped_value(name: str, value: Any) -> Any:
    # Untyped parameters are pushed by their Python shape.
    if isinstance(value, Address):
        return value.to_bytes()
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, (list, tuple)):
        return [_untyped_value(name, v) for v in value]
    raise ConversionError(f"Parameter '{name}' has unsupported value type {type(value).__name__}")


def _vm_value(param: Parameter) -> Any:
    kind, value = param.type, param.value
    if kind is ParameterKind.STRING:
        if not isinstance(value, str):
            raise ConversionError(f"Parameter '{param.name}' expects str, got {type(value).__name__}")
        return value
    if kind in (ParameterKind.INTEGER, ParameterKind.INT, ParameterKind.LONG):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConversionError(f"Parameter '{param.name}' expects int, got {type(value).__name__}")
        return value
    if kind is ParameterKind.BOOLEAN:
        if not isinstance(value, bool):
            raise ConversionError(f"Parameter '{param.name}' expects bool, got {type(value).__name__}")
        return value
    if kind is ParameterKind.BYTE_ARRAY:
        if not isinstance(value, str):
            raise ConversionError(f"Parameter '{param.name}' expects a hex string, got {type(value).__name__}")
        return hex_to_bytes(value)
    if kind in (ParameterKind.INT_ARRAY, ParameterKind.LONG_ARRAY):
        if not isinstance(value, (list, tuple)) or any(
            isinstance(v, bool) or not isinstance(v, int) for v in value
        ):
            raise ConversionError(f"Parameter '{param.name}' expects a list of int")
        return list(value)
    return _untyped_value(param.name, value)


def _to_uint(name: str, value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise ConversionError(f"{name} must be an integer string, got {value!r}") from e
    if not 0 <= number < 1 << 64:
        raise ConversionError(f"{name} must fit in an unsigned 64-bit integer, got {value!r}")
    return number


def make_invoke_transaction(
    function_name: str,
    params: Sequence[Parameter],
    contract_address: Address,
    gas_price: str,
    gas_limit: str,
    payer: Optional[Address] = None,
) -> ContractInvocation:
    """Builds an unsigned transaction invoking ``function_name`` on a contract.

    Args:
        function_name: Contract function to invoke.
        params: Typed arguments in declaration order.
        contract_address: Address of the target contract.
        gas_price: Gas price as a decimal string.
        gas_limit: Gas limit as a decimal string.
        payer: Optional gas payer; the zero address when omitted.

    Returns:
        The unsigned ContractInvocation.

    Raises:
        ConversionError: If an argument or gas value cannot be encoded.
    """
    func = InvokeFunction(function_name)
    func.set_params_value(*[_vm_value(p) for p in params])

    tx = ContractInvocation(
        function_name,
        params,
        payer if payer is not None else ZERO_ADDRESS,
        _to_uint("gas price", gas_price),
        _to_uint("gas limit", gas_limit),
    )
    tx.add_invoke_code(contract_address.to_bytes(), func)
    logger.debug("Built invoke transaction for %s on %s", function_name, contract_address.b58encode())
    return tx


def transaction_hash(tx: InvokeTransaction) -> bytes:
    """The double SHA-256 of the unsigned transaction; this is what gets signed."""
    return sha256d(bytes(tx.serialize_unsigned()))


def sign_transaction(tx: InvokeTransaction, private_key: PrivateKey) -> None:
    """Signs ``tx`` in place, replacing any previous signatures."""
    signature = private_key.sign(transaction_hash(tx))
    tx.sig_list = [Sig([private_key.public_key().serialize()], 1, [signature])]


def serialize_transaction(tx: InvokeTransaction) -> str:
    """Returns the full signed transaction as a hex string."""
    return bytes(tx.serialize()).hex()
