"""Asynchronous client for the Ontology node REST API.

Uses httpx for HTTP. Each call opens a short-lived ``httpx.AsyncClient``
unless the client is used as an async context manager, in which case one
connection pool is shared until exit.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ..config import DEFAULT_TIMEOUT, get_rest_url
from ..errors import NetworkError, SubmissionError

logger = logging.getLogger(__name__)

REST_VERSION = "1.0.0"


class RestClient:
    """Talks to an Ontology node over its REST interface."""

    def __init__(
        self,
        url: Optional[str] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the RestClient.

        Args:
            url: Base URL of the node, e.g. "http://127.0.0.1:20334". Defaults
                 to $TYPETOLOGY_REST_URL or the Polaris testnet node.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport, mainly for tests.
        """
        self.url = (url or get_rest_url()).rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._session: Optional[httpx.AsyncClient] = None

    def _new_session(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def __aenter__(self) -> "RestClient":
        self._session = self._new_session()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        if self._session is not None:
            await self._session.aclose()
            self._session = None

    async def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        url = f"{self.url}{path}"
        logger.debug("%s %s", method, url)
        if self._session is not None:
            response = await self._session.request(method, url, **kwargs)
        else:
            async with self._new_session() as session:
                response = await session.request(method, url, **kwargs)
        response.raise_for_status()
        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(f"Non-JSON response from {url}") from e

    async def _query(self, path: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            return await self._request("GET", path, **kwargs)
        except httpx.HTTPError as e:
            raise NetworkError(f"Request to {path} failed: {e}") from e

    async def send_raw_transaction(self, hex_data: str, pre_exec: bool = False) -> Dict[str, Any]:
        """
        Submit a serialized, signed transaction.

        Args:
            hex_data: Hex-encoded signed transaction.
            pre_exec: If True, the node only simulates the transaction.

        Returns:
            The node's response envelope.

        Raises:
            SubmissionError: If the node could not be reached or rejected the request.
        """
        body = {"Action": "sendrawtransaction", "Version": REST_VERSION, "Data": hex_data}
        params = {"preExec": "1"} if pre_exec else None
        try:
            return await self._request("POST", "/api/v1/transaction", json=body, params=params)
        except (httpx.HTTPError, NetworkError) as e:
            raise SubmissionError(f"Transaction submission failed: {e}") from e

    async def get_storage(self, code_hash: str, key: str) -> Dict[str, Any]:
        """Look up a hex-encoded storage key under a contract's code hash."""
        return await self._query(f"/api/v1/storage/{code_hash}/{key}")

    async def get_contract(self, code_hash: str) -> Dict[str, Any]:
        """Fetch the raw (hex) contract state."""
        return await self._query(f"/api/v1/contract/{code_hash}", params={"raw": "1"})

    async def get_contract_json(self, code_hash: str) -> Dict[str, Any]:
        """Fetch the contract state as JSON."""
        return await self._query(f"/api/v1/contract/{code_hash}")
