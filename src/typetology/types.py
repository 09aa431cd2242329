"""Defines the ABI data model used by the binding generator and the runtime.

An Ontology NeoVM contract ABI is a JSON document carrying the contract's
code hash and an ordered list of functions, each with an ordered list of
named, typed parameters. The models here interpret only those fields;
everything else in the document (``entrypoint``, ``returntype``,
``events``, ...) is kept as passthrough data so the exact document can be
re-emitted into generated code without loss.
"""
from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from eth_utils import remove_0x_prefix
from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import AbiParseError


class ParameterKind(str, Enum):
    """Closed set of parameter kinds the generator knows how to bind.

    ``OTHER`` is the fallback for every type name outside the set; the raw
    name stays available on :class:`AbiParameter` for round-trips.
    """
    BOOLEAN = "Boolean"
    INTEGER = "Integer"
    INT = "Int"
    LONG = "Long"
    INT_ARRAY = "IntArray"
    LONG_ARRAY = "LongArray"
    BYTE_ARRAY = "ByteArray"
    STRING = "String"
    OTHER = "Other"

    @classmethod
    def from_type_name(cls, type_name: str) -> "ParameterKind":
        """Resolves a case-sensitive ABI type name, falling back to OTHER."""
        for kind in cls:
            if kind is not cls.OTHER and kind.value == type_name:
                return kind
        return cls.OTHER


class _AbiModel(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    def to_dict(self) -> Dict[str, Any]:
        """Returns the document form, passthrough fields included, in field order."""
        return self.model_dump(mode="json")


class AbiParameter(_AbiModel):
    """A single named, typed function parameter.

    Attributes:
        name: Parameter name as declared in the contract.
        type: Raw ABI type name, e.g. "String" or "ByteArray".
    """
    name: str
    type: str

    @property
    def kind(self) -> ParameterKind:
        return ParameterKind.from_type_name(self.type)


class AbiFunction(_AbiModel):
    """A contract function and its ordered parameters.

    Attributes:
        name: Function name used for dispatch inside the contract.
        parameters: Parameters in declaration order; the order defines the
            positional argument order everywhere downstream.
    """
    name: str
    parameters: List[AbiParameter] = []


class AbiInfo(_AbiModel):
    """The parsed interface description of a deployed contract.

    Attributes:
        hash: Content hash of the contract code, usually "0x"-prefixed.
        functions: Functions in document order.
    """
    hash: str
    functions: List[AbiFunction]

    @property
    def code_hash(self) -> str:
        """The content hash without its "0x" marker."""
        return remove_0x_prefix(self.hash)

    def get_function(self, name: str) -> Optional[AbiFunction]:
        """Returns the first function called ``name``, or None."""
        return next((f for f in self.functions if f.name == name), None)

    def to_json(self, *, indent: int | None = None) -> str:
        """Serializes the ABI, passthrough fields included, to JSON."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AbiInfo":
        """Builds an AbiInfo from an already decoded document.

        Raises:
            AbiParseError: If required fields are missing or mistyped.
        """
        if not isinstance(data, Mapping):
            raise AbiParseError(f"ABI must be a JSON object, got {type(data).__name__}")
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise AbiParseError(f"Invalid ABI: {e}") from e

    @classmethod
    def parse_json(cls, raw: Union[str, bytes]) -> "AbiInfo":
        """Parses an ABI JSON document.

        Raises:
            AbiParseError: If ``raw`` is not JSON or is not a valid ABI.
        """
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise AbiParseError(f"ABI is not valid JSON: {e}") from e
        return cls.from_dict(data)


def parse_abi(raw: Union[str, bytes, Mapping[str, Any]]) -> AbiInfo:
    """Parses an ABI from JSON text or from a decoded mapping."""
    if isinstance(raw, Mapping):
        return AbiInfo.from_dict(raw)
    return AbiInfo.parse_json(raw)
