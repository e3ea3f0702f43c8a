"""Tests for the governance service."""

from typing import Dict, List, Optional
from unittest.mock import patch

import pytest

from shardgov.errors import MalformedConfiguration, PreconditionViolation, StoreUnavailable
from shardgov.governance.models import InstanceDTO, ReplicaDataSourceDTO
from shardgov.governance.schema import ShardingSchemaService
from shardgov.governance.service import GovernanceService
from shardgov.registry.node import MetadataNode, StatesNode
from shardgov.registry.store import RegistryCenter


class StubRegistryCenter(RegistryCenter):
    """Registry with explicit children, so nodes can exist without a value."""

    def __init__(self, children: Dict[str, List[str]], values: Dict[str, Optional[str]]):
        super().__init__()
        self.children = children
        self.values = values
        self.persisted: List[tuple] = []

    def get(self, path):
        return self.values.get(path)

    def persist(self, path, value):
        self.persisted.append((path, value))
        self.values[path] = value

    def get_children_keys(self, path):
        return list(self.children.get(path, []))


class FailingRegistryCenter(RegistryCenter):
    """Registry whose every call fails."""

    def get(self, path):
        raise StoreUnavailable("connection lost")

    def persist(self, path, value):
        raise StoreUnavailable("connection lost")

    def get_children_keys(self, path):
        raise StoreUnavailable("connection lost")


def _service(registry: RegistryCenter) -> GovernanceService:
    return GovernanceService(registry, ShardingSchemaService(registry))


def _set_rule(registry: RegistryCenter, schema_name: str, text: str) -> None:
    registry.persist(MetadataNode.get_rule_path(schema_name), text)


# Instances


def test_get_all_instances_derives_status():
    """Test a disabled marker disables and a missing value enables."""
    registry = StubRegistryCenter(
        children={"/states/proxynodes": ["node1", "node2"]},
        values={"/states/proxynodes/node1": "DISABLED"},
    )

    instances = _service(registry).get_all_instances()

    assert instances == [
        InstanceDTO(instance_id="node1", enabled=False),
        InstanceDTO(instance_id="node2", enabled=True),
    ]


def test_get_all_instances_keeps_store_order():
    """Test instances follow the store's listing order."""
    registry = StubRegistryCenter(
        children={"/states/proxynodes": ["zeta", "alpha"]},
        values={"/states/proxynodes/alpha": "disabled"},
    )

    instances = _service(registry).get_all_instances()

    assert [(each.instance_id, each.enabled) for each in instances] == [
        ("zeta", True),
        ("alpha", False),
    ]


def test_get_all_instances_empty(governance_service):
    """Test an empty store has no instances."""
    assert governance_service.get_all_instances() == []


def test_update_instance_status_round_trip(governance_service, registry_center):
    """Test disabling then enabling an instance through the store."""
    registry_center.persist(StatesNode.get_proxy_node_path("node1"), "")

    governance_service.update_instance_status("node1", False)
    assert registry_center.get("/states/proxynodes/node1") == "DISABLED"
    assert governance_service.get_all_instances() == [InstanceDTO(instance_id="node1", enabled=False)]

    governance_service.update_instance_status("node1", True)
    assert registry_center.get("/states/proxynodes/node1") == ""
    assert governance_service.get_all_instances() == [InstanceDTO(instance_id="node1", enabled=True)]


def test_update_instance_status_does_not_check_existence(governance_service, registry_center):
    """Test writing the status of an unknown instance creates it."""
    governance_service.update_instance_status("ghost", False)

    assert registry_center.get_children_keys("/states/proxynodes") == ["ghost"]


def test_instance_operations_propagate_store_failures():
    """Test store failures surface unchanged."""
    service = _service(FailingRegistryCenter())

    with pytest.raises(StoreUnavailable, match="connection lost"):
        service.get_all_instances()
    with pytest.raises(StoreUnavailable):
        service.update_instance_status("node1", False)


# Replica data sources


def test_replica_scenario_empty_and_legacy_schema(governance_service, registry_center, replica_query_rule):
    """Test an empty schema contributes nothing and a disabled replica is reported."""
    _set_rule(registry_center, "orders", "")
    _set_rule(registry_center, "users", replica_query_rule)
    registry_center.persist(StatesNode.get_data_source_path("users", "db_r1"), "DISABLED")

    result = governance_service.get_all_replica_data_sources()

    assert result == [
        ReplicaDataSourceDTO(
            schema_name="users",
            primary_data_source_name="db_main",
            replica_data_source_name="db_r1",
            enabled=False,
        )
    ]


def test_binding_expansion(governance_service, registry_center):
    """Test one binding per replica of a primary."""
    _set_rule(
        registry_center,
        "s0",
        "rules:\n"
        "- !REPLICA_QUERY\n"
        "  dataSources:\n"
        "    pr:\n"
        "      primaryDataSourceName: p0\n"
        "      replicaDataSourceNames: [r0, r1]\n",
    )

    result = governance_service.get_all_replica_data_sources()

    assert [
        (each.schema_name, each.primary_data_source_name, each.replica_data_source_name)
        for each in result
    ] == [("s0", "p0", "r0"), ("s0", "p0", "r1")]
    assert all(each.enabled for each in result)


def test_composite_dialect_expands_replica_rules(governance_service, registry_center, sharding_rule):
    """Test replica rules inside a sharding document are expanded in rule order."""
    _set_rule(registry_center, "sharding_db", sharding_rule)
    registry_center.persist(StatesNode.get_data_source_path("sharding_db", "r1"), "DISABLED")

    result = governance_service.get_all_replica_data_sources()

    assert [
        (each.primary_data_source_name, each.replica_data_source_name, each.enabled)
        for each in result
    ] == [("p0", "r0", True), ("p0", "r1", False), ("p1", "r2", True)]


def test_composite_dialect_without_replicas_is_valid(governance_service, registry_center, sharding_only_rule):
    """Test a sharding document without replica rules contributes nothing."""
    _set_rule(registry_center, "sharding_db", sharding_only_rule)

    assert governance_service.get_all_replica_data_sources() == []


def test_sharding_marker_takes_precedence(governance_service, registry_center, sharding_only_rule):
    """Test a document with both markers is handled as composite."""
    _set_rule(registry_center, "sharding_db", sharding_only_rule + "# see also !REPLICA_QUERY\n")

    assert governance_service.get_all_replica_data_sources() == []


def test_legacy_dialect_without_replica_rule_fails(governance_service, registry_center, replica_query_rule):
    """Test a replica-query document lacking the rule fails the whole call."""
    _set_rule(registry_center, "good", replica_query_rule)
    _set_rule(registry_center, "broken", "rules: []  # !REPLICA_QUERY\n")

    with pytest.raises(PreconditionViolation, match="broken"):
        governance_service.get_all_replica_data_sources()


def test_unclassified_dialect_is_skipped(governance_service, registry_center):
    """Test documents with neither marker are skipped."""
    _set_rule(registry_center, "encrypt_db", "rules:\n- !ENCRYPT\n  tables: {}\n")

    assert governance_service.get_all_replica_data_sources() == []


def test_malformed_configuration_propagates(governance_service, registry_center):
    """Test unparsable rule text fails the call."""
    _set_rule(registry_center, "users", "rules: [!REPLICA_QUERY {dataSources: [")

    with pytest.raises(MalformedConfiguration):
        governance_service.get_all_replica_data_sources()


def test_schemas_follow_loader_order(replica_query_rule):
    """Test bindings are grouped by schema in loader order."""
    registry = StubRegistryCenter(
        children={"/metadata": ["zeta", "alpha"]},
        values={
            "/metadata/zeta/rule": replica_query_rule,
            "/metadata/alpha/rule": replica_query_rule,
        },
    )

    result = _service(registry).get_all_replica_data_sources()

    assert [each.schema_name for each in result] == ["zeta", "alpha"]


def test_disabled_markers_of_other_schemas_do_not_leak(governance_service, registry_center, replica_query_rule):
    """Test disabling a same-named data source elsewhere leaves the binding enabled."""
    _set_rule(registry_center, "users", replica_query_rule)
    registry_center.persist(StatesNode.get_data_source_path("orders", "db_r1"), "DISABLED")

    [binding] = governance_service.get_all_replica_data_sources()

    assert binding.enabled is True


def test_disabled_markers_scanned_once_per_call(governance_service, registry_center, replica_query_rule):
    """Test the disabled-marker scan is shared by all schemas of one call."""
    _set_rule(registry_center, "users", replica_query_rule)
    _set_rule(registry_center, "users_copy", replica_query_rule)

    with patch.object(
        governance_service,
        "_get_disabled_schema_data_source_names",
        wraps=governance_service._get_disabled_schema_data_source_names,
    ) as scan:
        result = governance_service.get_all_replica_data_sources()

    assert len(result) == 2
    scan.assert_called_once()


def test_replica_status_symmetry(governance_service, registry_center, replica_query_rule):
    """Test disabling then enabling a replica is reflected in the listing."""
    _set_rule(registry_center, "users", replica_query_rule)

    governance_service.update_replica_data_source_status("users", "db_r1", False)
    [binding] = governance_service.get_all_replica_data_sources()
    assert binding.enabled is False
    assert registry_center.get("/states/datanodes/users/db_r1") == "DISABLED"

    governance_service.update_replica_data_source_status("users", "db_r1", True)
    [binding] = governance_service.get_all_replica_data_sources()
    assert binding.enabled is True
    assert registry_center.get("/states/datanodes/users/db_r1") == ""


def test_replica_operations_propagate_store_failures():
    """Test store failures surface unchanged."""
    service = _service(FailingRegistryCenter())

    with pytest.raises(StoreUnavailable):
        service.get_all_replica_data_sources()
    with pytest.raises(StoreUnavailable):
        service.update_replica_data_source_status("users", "db_r1", False)
