from __future__ import annotations

from typing import Any, Dict, Protocol, runtime_checkable


@runtime_checkable
class NetworkClient(Protocol):
    """What the runtime needs from a node client.

    Responses follow the Ontology REST envelope: a dict with ``Action``,
    ``Desc``, ``Error`` (0 on success), ``Result`` and ``Version`` keys.
    Implementations own transport concerns (timeouts, retries); the
    runtime never retries.
    """

    async def send_raw_transaction(self, hex_data: str, pre_exec: bool = False) -> Dict[str, Any]:
        ...

    async def get_storage(self, code_hash: str, key: str) -> Dict[str, Any]:
        ...

    async def get_contract(self, code_hash: str) -> Dict[str, Any]:
        ...

    async def get_contract_json(self, code_hash: str) -> Dict[str, Any]:
        ...
