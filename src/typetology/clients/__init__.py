"""
typetology Client Subpackage.

This package provides the network clients the runtime submits transactions
and storage queries through: the `NetworkClient` protocol any client must
satisfy, and `RestClient` for the Ontology node REST API.
"""

from .base_client import NetworkClient
from .rest_client import RestClient

__all__ = [
    "NetworkClient",
    "RestClient",
]
