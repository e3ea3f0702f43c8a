"""Schema configuration lookup."""

from typing import List

from shardgov.registry.node import MetadataNode
from shardgov.registry.store import RegistryCenter


class ShardingSchemaService:
    """Reads per-schema rule configuration from the metadata subtree."""

    def __init__(self, registry_center: RegistryCenter):
        self.registry_center = registry_center

    def get_all_schema_names(self) -> List[str]:
        """Names of every schema with a metadata node, in store order."""
        return self.registry_center.get_children_keys(MetadataNode.get_metadata_node_path())

    def get_rule_configuration(self, schema_name: str) -> str:
        """Raw rule YAML of a schema, or an empty string if none is configured."""
        return self.registry_center.get(MetadataNode.get_rule_path(schema_name)) or ""
