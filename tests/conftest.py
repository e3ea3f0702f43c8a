"""Pytest configuration and shared fixtures."""

import pytest

from shardgov.config.schema import ShardGovConfig
from shardgov.governance.schema import ShardingSchemaService
from shardgov.governance.service import GovernanceService
from shardgov.registry.store import MemoryRegistryCenter

REPLICA_QUERY_RULE = """\
rules:
- !REPLICA_QUERY
  dataSources:
    pr_ds:
      primaryDataSourceName: db_main
      replicaDataSourceNames:
        - db_r1
      loadBalancerName: round_robin
  loadBalancers:
    round_robin:
      type: ROUND_ROBIN
"""

SHARDING_RULE = """\
rules:
- !SHARDING
  tables:
    t_order:
      actualDataNodes: pr_ds_${0..1}.t_order_${0..1}
  defaultDatabaseStrategy:
    none:
- !REPLICA_QUERY
  dataSources:
    pr_ds_0:
      primaryDataSourceName: p0
      replicaDataSourceNames:
        - r0
        - r1
    pr_ds_1:
      primaryDataSourceName: p1
      replicaDataSourceNames:
        - r2
"""

SHARDING_ONLY_RULE = """\
rules:
- !SHARDING
  tables:
    t_user:
      actualDataNodes: ds_${0..1}.t_user
"""


@pytest.fixture
def default_config() -> ShardGovConfig:
    """Provide a default configuration for tests."""
    return ShardGovConfig()


@pytest.fixture
def registry_center() -> MemoryRegistryCenter:
    """Provide an empty in-memory registry center."""
    return MemoryRegistryCenter(namespace="governance_ds")


@pytest.fixture
def governance_service(registry_center: MemoryRegistryCenter) -> GovernanceService:
    """Provide a governance service over the in-memory registry center."""
    return GovernanceService(registry_center, ShardingSchemaService(registry_center))


@pytest.fixture
def replica_query_rule() -> str:
    """Rule document in the replica-query dialect."""
    return REPLICA_QUERY_RULE


@pytest.fixture
def sharding_rule() -> str:
    """Composite sharding document that also declares replicas."""
    return SHARDING_RULE


@pytest.fixture
def sharding_only_rule() -> str:
    """Composite sharding document without replicas."""
    return SHARDING_ONLY_RULE
