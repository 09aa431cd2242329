"""Generates Python binding modules from Ontology contract ABIs.

A generated module embeds the parsed ABI as a Python literal (``ABI``) and
defines one class named after the contract. The class composes a
``TypetologyContract`` from the runtime module and exposes one
``<function>Tx`` method per ABI function; each method returns a
``DeferredTransactionWrapper`` and does nothing else.

Usage::

    from typetology.codegen import CodeGenerator

    source = CodeGenerator("DomainContract", abi_json).generate()
"""
from __future__ import annotations

import keyword
import logging
import re
import shutil
from collections import Counter
from pathlib import Path
from pprint import pformat
from typing import Any, List, Mapping, Set, Union

from ..config import RUNTIME_MODULE_NAME
from ..types import AbiFunction, AbiInfo, parse_abi
from .type_mapper import bind_parameter

logger = logging.getLogger(__name__)

_INVALID_IDENT_CHARS = re.compile(r"[^0-9A-Za-z_]")

# Top-level names bound by _HEADER.
_MODULE_NAMES = frozenset({
    "annotations",
    "Any",
    "List",
    "Union",
    "AbiInfo",
    "DeferredTransactionWrapper",
    "TypetologyContract",
    "ABI",
})

_HEADER = '''"""
Generated binding for the {class_name} contract.

This file was generated by typetology. Do not edit by hand.
"""
from __future__ import annotations

from typing import Any, List, Union

from {runtime} import AbiInfo, DeferredTransactionWrapper, TypetologyContract

ABI = {abi_literal}
'''

_CLASS_TMPL = '''

class {class_name}:
    def __init__(self, client):
        self.contract = TypetologyContract(client, AbiInfo.from_dict(ABI))

    @property
    def abi_info(self) -> AbiInfo:
        return self.contract.abi_info

    @property
    def client(self):
        return self.contract.client

    @property
    def code_hash(self) -> str:
        return self.contract.code_hash

    @property
    def address(self):
        return self.contract.address

    async def get_storage(self, key: str) -> Any:
        return await self.contract.get_storage(key)

    async def get_contract(self) -> Any:
        return await self.contract.get_contract()

    async def get_contract_json(self) -> Any:
        return await self.contract.get_contract_json()
'''

_FN_TMPL = '''
    def {method_name}(
        self,
{params}    ) -> DeferredTransactionWrapper:
        return DeferredTransactionWrapper(
            self.contract,
            {fn_name},
            [{arg_names}],
        )
'''


def py_ident(name: str) -> str:
    """Return a valid Python identifier for an ABI name, avoiding keywords."""
    ident = _INVALID_IDENT_CHARS.sub("_", name) or "_"
    if ident[0].isdigit():
        ident = f"_{ident}"
    if keyword.iskeyword(ident) or ident == "self":
        ident = f"{ident}_"
    return ident


def _unique(names: List[str]) -> List[str]:
    """Renames repeats with the first free numeric suffix; first occurrences keep their name."""
    reserved = set(names)
    issued: Set[str] = set()
    out: List[str] = []
    for n in names:
        candidate, i = n, 1
        while candidate in issued or (candidate != n and candidate in reserved):
            candidate = f"{n}_{i}"
            i += 1
        issued.add(candidate)
        out.append(candidate)
    return out


class CodeGenerator:
    """Python binding generator for an Ontology smart contract ABI."""

    def __init__(self, contract_name: str, abi: Union[str, bytes, Mapping[str, Any], AbiInfo]) -> None:
        """
        Args:
            contract_name: Name of the generated class.
            abi: ABI JSON text, decoded document, or parsed AbiInfo.

        Raises:
            AbiParseError: If the ABI is malformed.
        """
        self.contract_name = contract_name
        self.abi_info = abi if isinstance(abi, AbiInfo) else parse_abi(abi)

    @property
    def class_name(self) -> str:
        """The class identifier; names the module header already binds get a trailing underscore."""
        ident = py_ident(self.contract_name)
        return f"{ident}_" if ident in _MODULE_NAMES else ident

    def generate(self, runtime_module: str = RUNTIME_MODULE_NAME) -> str:
        """Returns the source text of the binding module."""
        method_names = Counter(py_ident(f"{f.name}Tx") for f in self.abi_info.functions)
        duplicates = [n for n, c in method_names.items() if c > 1]
        if duplicates:
            logger.warning(
                "%s: duplicate method names %s; the last definition of each method wins",
                self.contract_name,
                ", ".join(duplicates),
            )

        header = _HEADER.format(
            class_name=self.class_name,
            runtime=runtime_module,
            abi_literal=pformat(self.abi_info.to_dict(), width=88, sort_dicts=False),
        )
        body = "".join(self.function_code(f) for f in self.abi_info.functions)
        return header + _CLASS_TMPL.format(class_name=self.class_name) + body

    def function_code(self, abi_function: AbiFunction) -> str:
        """Returns the ``<name>Tx`` method source for a single function."""
        names = _unique([py_ident(p.name) for p in abi_function.parameters])
        params = "".join(
            f"        {n}: {bind_parameter(p.kind)},  # {p.type}\n"
            for n, p in zip(names, abi_function.parameters)
        )
        return _FN_TMPL.format(
            method_name=py_ident(f"{abi_function.name}Tx"),
            params=params,
            fn_name=repr(abi_function.name),
            arg_names=", ".join(names),
        )


def generate_code(contract_name: str, abi: Union[str, bytes, Mapping[str, Any], AbiInfo]) -> str:
    """Convenience wrapper around ``CodeGenerator(contract_name, abi).generate()``."""
    return CodeGenerator(contract_name, abi).generate()


def write_runtime(out_dir: Union[str, Path]) -> Path:
    """Copies the runtime module into ``out_dir`` and returns the written path."""
    source = Path(__file__).resolve().parent.parent / "runtime.py"
    target = Path(out_dir) / f"{RUNTIME_MODULE_NAME}.py"
    shutil.copyfile(source, target)
    logger.info("Wrote runtime module %s", target)
    return target
