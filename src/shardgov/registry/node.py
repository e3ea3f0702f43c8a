"""Node path layout of the coordination store.

The layout is shared with every other component that reads the same store,
so segment names, their order and the disabled marker must not change:

    /states/proxynodes/{instance_id}
    /states/datanodes/{schema_name}/{data_source_name}
    /metadata/{schema_name}/rule
"""

from enum import Enum

PATH_SEPARATOR = "/"


class RegistryCenterNodeStatus(Enum):
    """Reserved status values stored at state nodes."""

    DISABLED = "DISABLED"


def is_enabled(value: str | None) -> bool:
    """Derive enablement from a stored status value.

    Anything other than the disabled marker, compared case-insensitively,
    counts as enabled, including a missing value.
    """
    if value is None:
        return True
    return value.upper() != RegistryCenterNodeStatus.DISABLED.value


def status_value(enabled: bool) -> str:
    """Return the value to persist for the given enablement."""
    return "" if enabled else RegistryCenterNodeStatus.DISABLED.value


class StatesNode:
    """Paths of runtime state nodes (instances and data sources)."""

    ROOT = "states"
    PROXY_NODES_ROOT = "proxynodes"
    DATA_NODES_ROOT = "datanodes"

    @classmethod
    def get_proxy_node_path(cls, instance_id: str) -> str:
        return PATH_SEPARATOR.join(["", cls.ROOT, cls.PROXY_NODES_ROOT, instance_id])

    @classmethod
    def get_proxy_nodes_root_path(cls) -> str:
        # Built from the instance path so both always agree on the layout
        result = cls.get_proxy_node_path("")
        return result[: -len(PATH_SEPARATOR)]

    @classmethod
    def get_data_nodes_path(cls) -> str:
        return PATH_SEPARATOR.join(["", cls.ROOT, cls.DATA_NODES_ROOT])

    @classmethod
    def get_schema_path(cls, schema_name: str) -> str:
        return PATH_SEPARATOR.join([cls.get_data_nodes_path(), schema_name])

    @classmethod
    def get_data_source_path(cls, schema_name: str, data_source_name: str) -> str:
        return PATH_SEPARATOR.join([cls.get_schema_path(schema_name), data_source_name])


class MetadataNode:
    """Paths of per-schema configuration nodes."""

    ROOT = "metadata"
    RULE_NODE = "rule"

    @classmethod
    def get_metadata_node_path(cls) -> str:
        return PATH_SEPARATOR + cls.ROOT

    @classmethod
    def get_rule_path(cls, schema_name: str) -> str:
        return PATH_SEPARATOR.join([cls.get_metadata_node_path(), schema_name, cls.RULE_NODE])
