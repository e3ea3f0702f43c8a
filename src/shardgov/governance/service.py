"""Governance of proxy instances and replica data sources."""

import logging
from typing import List, Set, Tuple

from shardgov.errors import PreconditionViolation
from shardgov.governance.models import InstanceDTO, ReplicaDataSourceDTO
from shardgov.governance.schema import ShardingSchemaService
from shardgov.registry.node import StatesNode, is_enabled, status_value
from shardgov.registry.store import RegistryCenter
from shardgov.rules.model import (
    ReplicaQueryDataSourceRuleConfiguration,
    ReplicaQueryRuleConfiguration,
)
from shardgov.rules.parser import REPLICA_QUERY_MARKER, SHARDING_MARKER, parse_rule_configurations

logger = logging.getLogger(__name__)


class GovernanceService:
    """
    Reconciles live enablement flags with declared replica topology.

    Responsibilities:
    - List proxy instances with their enabled flag
    - Enable or disable a proxy instance
    - Expand each schema's replica-query rules into replica bindings
    - Enable or disable a replica data source

    Every call reads the store afresh; nothing is cached between calls.
    """

    def __init__(self, registry_center: RegistryCenter, schema_service: ShardingSchemaService):
        """
        Initialize governance service.

        Args:
            registry_center: Coordination store holding state nodes
            schema_service: Source of per-schema rule configuration
        """
        self.registry_center = registry_center
        self.schema_service = schema_service

    def get_all_instances(self) -> List[InstanceDTO]:
        """
        List every proxy instance registered in the store.

        Returns:
            Instances in store listing order
        """
        root_path = StatesNode.get_proxy_nodes_root_path()
        instance_ids = self.registry_center.get_children_keys(root_path)
        result = []
        for instance_id in instance_ids:
            value = self.registry_center.get(StatesNode.get_proxy_node_path(instance_id))
            result.append(InstanceDTO(instance_id=instance_id, enabled=is_enabled(value)))
        return result

    def update_instance_status(self, instance_id: str, enabled: bool) -> None:
        """
        Enable or disable a proxy instance.

        The instance is not checked for existence.

        Args:
            instance_id: Instance identifier
            enabled: Target state
        """
        path = StatesNode.get_proxy_node_path(instance_id)
        value = status_value(enabled)
        self.registry_center.persist(path, value)
        logger.info(f"Persisted '{value}' to {path}")

    def get_all_replica_data_sources(self) -> List[ReplicaDataSourceDTO]:
        """
        List every replica data source declared by schema rule configuration.

        Returns:
            One binding per primary/replica pair, grouped by schema in loader
            order and following rule order within a schema

        Raises:
            PreconditionViolation: If a replica-query document yields no
                replica-query rule
            MalformedConfiguration: If a rule document cannot be parsed
        """
        result: List[ReplicaDataSourceDTO] = []
        disabled = self._get_disabled_schema_data_source_names()
        for schema_name in self.schema_service.get_all_schema_names():
            config_data = self.schema_service.get_rule_configuration(schema_name)
            if not config_data:
                logger.debug(f"Schema {schema_name} has no rule configuration, skipping")
                continue
            if SHARDING_MARKER in config_data:
                rules = parse_rule_configurations(config_data).replica_query_rules()
            elif REPLICA_QUERY_MARKER in config_data:
                rules = [self._load_replica_query_rule(schema_name, config_data)]
            else:
                logger.debug(f"Schema {schema_name} declares no replica topology, skipping")
                continue
            for rule in rules:
                result.extend(self._get_replica_data_sources(schema_name, rule, disabled))
        return result

    def update_replica_data_source_status(
        self, schema_name: str, data_source_name: str, enabled: bool
    ) -> None:
        """
        Enable or disable a data source of a schema.

        Args:
            schema_name: Schema the data source belongs to
            data_source_name: Data source name
            enabled: Target state
        """
        path = StatesNode.get_data_source_path(schema_name, data_source_name)
        value = status_value(enabled)
        self.registry_center.persist(path, value)
        logger.info(f"Persisted '{value}' to {path}")

    def _load_replica_query_rule(
        self, schema_name: str, config_data: str
    ) -> ReplicaQueryRuleConfiguration:
        result = parse_rule_configurations(config_data).find_replica_query_rule()
        if result is None:
            raise PreconditionViolation(
                f"Rule configuration of schema '{schema_name}' is marked "
                f"{REPLICA_QUERY_MARKER} but contains no replica-query rule"
            )
        return result

    def _get_replica_data_sources(
        self,
        schema_name: str,
        rule: ReplicaQueryRuleConfiguration,
        disabled: Set[Tuple[str, str]],
    ) -> List[ReplicaDataSourceDTO]:
        result = []
        for group in rule.data_sources:
            result.extend(self._expand_group(schema_name, group, disabled))
        return result

    @staticmethod
    def _expand_group(
        schema_name: str,
        group: ReplicaQueryDataSourceRuleConfiguration,
        disabled: Set[Tuple[str, str]],
    ) -> List[ReplicaDataSourceDTO]:
        return [
            ReplicaDataSourceDTO(
                schema_name=schema_name,
                primary_data_source_name=group.primary_data_source_name,
                replica_data_source_name=each,
                enabled=(schema_name, each) not in disabled,
            )
            for each in group.replica_data_source_names
        ]

    def _get_disabled_schema_data_source_names(self) -> Set[Tuple[str, str]]:
        """Scan /states/datanodes for data sources carrying the disabled marker."""
        result: Set[Tuple[str, str]] = set()
        for schema_name in self.registry_center.get_children_keys(StatesNode.get_data_nodes_path()):
            schema_path = StatesNode.get_schema_path(schema_name)
            for data_source_name in self.registry_center.get_children_keys(schema_path):
                value = self.registry_center.get(
                    StatesNode.get_data_source_path(schema_name, data_source_name)
                )
                if not is_enabled(value):
                    result.add((schema_name, data_source_name))
        return result
