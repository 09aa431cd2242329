"""
typetology Code Generation Subpackage.

This package turns a contract ABI into the source of a Python binding
module: `type_mapper` maps ABI parameter kinds to Python type hints and
`generator` emits the binding class and copies the runtime module.
"""

from .generator import CodeGenerator, generate_code, py_ident, write_runtime
from .type_mapper import bind_parameter

__all__ = [
    "CodeGenerator",
    "generate_code",
    "py_ident",
    "write_runtime",
    "bind_parameter",
]
