"""Default settings shared by the generator, the runtime and the clients.

Values that depend on the deployment (the node URL) can be overridden
through environment variables; the rest are protocol constants.
"""
from __future__ import annotations

import os

# Gas defaults applied when a send call omits them.
MIN_GAS_PRICE: str = "500"
MIN_GAS_LIMIT: str = "20000"

# Ontology Polaris testnet REST endpoint.
DEFAULT_REST_URL: str = "http://polaris1.ont.io:20334"
REST_URL_ENV: str = "TYPETOLOGY_REST_URL"
DEFAULT_TIMEOUT: float = 30.0

# Module name of the runtime copy written next to generated bindings.
RUNTIME_MODULE_NAME: str = "typetology_runtime"


def get_rest_url() -> str:
    """Get the REST endpoint from the environment or the default."""
    return os.environ.get(REST_URL_ENV, DEFAULT_REST_URL).rstrip("/")
