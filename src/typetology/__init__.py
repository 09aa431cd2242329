"""
typetology: typed Python bindings for Ontology NeoVM smart contracts.

The generator (`typetology.codegen`) turns a contract ABI into a Python
module with one ``<function>Tx`` method per contract function. The runtime
(`typetology.runtime`) turns calls to those methods into signed,
submittable transactions.
"""

__all__ = [
    # ABI model
    "AbiInfo",
    "AbiFunction",
    "AbiParameter",
    "ParameterKind",
    "parse_abi",
    # Code generation
    "CodeGenerator",
    "generate_code",
    "bind_parameter",
    # Runtime
    "TxParams",
    "ByteArrayArg",
    "TypetologyContract",
    "DeferredTransactionWrapper",
    # Clients
    "NetworkClient",
    "RestClient",
    # Errors
    "TypetologyError",
    "AbiParseError",
    "FunctionNotFoundError",
    "ConversionError",
    "InvalidParameterError",
    "StorageError",
    "NetworkError",
    "SubmissionError",
]

from .errors import (
    AbiParseError,
    ConversionError,
    FunctionNotFoundError,
    InvalidParameterError,
    NetworkError,
    StorageError,
    SubmissionError,
    TypetologyError,
)
from .types import AbiFunction, AbiInfo, AbiParameter, ParameterKind, parse_abi
from .codegen import CodeGenerator, bind_parameter, generate_code
from .clients import NetworkClient, RestClient
from .runtime import ByteArrayArg, DeferredTransactionWrapper, TxParams, TypetologyContract
