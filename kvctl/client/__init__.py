"""
Cluster Agent Client.

Synchronous httpx client for the agent's key-value and snapshot endpoints.
"""

from kvctl.client.api import ClusterClient, new_client
from kvctl.client.models import ClientConfig, KVPair

__all__ = [
    "ClientConfig",
    "ClusterClient",
    "KVPair",
    "new_client",
]
