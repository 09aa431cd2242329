# tests/conftest.py
import importlib.util
import json
import sys
from pathlib import Path

import pytest

from typetology.codegen.generator import CodeGenerator, write_runtime

ABI_DIR = Path(__file__).parent / "abi"

# Contract hashes are 20 bytes (40 hex chars).
CODE_HASH = "0x" + "".join(f"{i:02x}" for i in range(1, 21))
PRIVATE_KEY_HEX = "75de8489fcb2dcaf2ef3cd607feffde18789de7da129b5e97c81e001793cb7cf"


class FakeClient:
    """Records every call; mimics the Ontology REST envelope."""

    def __init__(self, storage=None):
        self.sent = []
        self.storage_calls = []
        self.storage = storage if storage is not None else {"Error": 0, "Desc": "SUCCESS", "Result": "abcd"}

    async def send_raw_transaction(self, hex_data, pre_exec=False):
        self.sent.append(hex_data)
        return {"Action": "sendrawtransaction", "Error": 0, "Desc": "SUCCESS", "Result": "txhash"}

    async def get_storage(self, code_hash, key):
        self.storage_calls.append((code_hash, key))
        return self.storage

    async def get_contract(self, code_hash):
        return {"Action": "getcontract", "Error": 0, "Result": f"raw:{code_hash}"}

    async def get_contract_json(self, code_hash):
        return {"Action": "getcontract", "Error": 0, "Result": {"hash": code_hash}}


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def make_client():
    return FakeClient


@pytest.fixture
def code_hash():
    return CODE_HASH


@pytest.fixture
def private_key_hex():
    return PRIVATE_KEY_HEX


@pytest.fixture
def domain_abi_json():
    return (ABI_DIR / "DomainContract.json").read_text(encoding="utf-8")


@pytest.fixture
def query_abi():
    return {
        "hash": CODE_HASH,
        "functions": [
            {"name": "Query", "parameters": [{"name": "key", "type": "String"}]},
        ],
    }


@pytest.fixture
def load_binding(tmp_path, monkeypatch):
    """Generate a binding into tmp_path and import it as a module."""
    write_runtime(tmp_path)
    monkeypatch.syspath_prepend(str(tmp_path))

    def _load(class_name, abi):
        if isinstance(abi, dict):
            abi = json.dumps(abi)
        source = CodeGenerator(class_name, abi).generate()
        path = tmp_path / f"{class_name}.py"
        path.write_text(source, encoding="utf-8")

        module_name = f"_binding_{class_name}_{id(path)}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        module = importlib.util.module_from_spec(spec)
        monkeypatch.setitem(sys.modules, module_name, module)
        spec.loader.exec_module(module)
        return module

    return _load
