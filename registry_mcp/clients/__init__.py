"""Shared external API clients."""

from registry_mcp.clients.registry import RegistryClient, RegistryClientError

__all__ = [
    "RegistryClient",
    "RegistryClientError",
]
