"""Maps ABI parameter kinds to the Python type hints used in bindings.

The mapping is total: every kind outside the known set binds to ``Any``.
Python's ``int`` is unbounded while the chain's Integer/Int/Long kinds are
not; all three bind to ``int`` and out-of-range values are only rejected
by the node, never by the binding.
"""
from __future__ import annotations

from typing import Dict, Union

from ..types import ParameterKind

_BINDINGS: Dict[ParameterKind, str] = {
    ParameterKind.BOOLEAN: "bool",
    ParameterKind.INTEGER: "int",
    ParameterKind.INT: "int",
    ParameterKind.LONG: "int",
    ParameterKind.INT_ARRAY: "List[int]",
    ParameterKind.LONG_ARRAY: "List[int]",
    ParameterKind.BYTE_ARRAY: "Union[str, bytes]",
    ParameterKind.STRING: "str",
}

FALLBACK_TYPE = "Any"


def bind_parameter(kind: Union[ParameterKind, str]) -> str:
    """Returns the Python type hint for an ABI parameter kind or raw type name."""
    if not isinstance(kind, ParameterKind):
        kind = ParameterKind.from_type_name(str(kind))
    return _BINDINGS.get(kind, FALLBACK_TYPE)
