"""Coordination store access and node path layout."""

from shardgov.registry.node import (
    MetadataNode,
    RegistryCenterNodeStatus,
    StatesNode,
    is_enabled,
    status_value,
)
from shardgov.registry.store import (
    EtcdRegistryCenter,
    MemoryRegistryCenter,
    RegistryCenter,
    create_registry_center,
)

__all__ = [
    "RegistryCenter",
    "MemoryRegistryCenter",
    "EtcdRegistryCenter",
    "create_registry_center",
    "StatesNode",
    "MetadataNode",
    "RegistryCenterNodeStatus",
    "is_enabled",
    "status_value",
]
