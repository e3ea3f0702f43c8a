"""Rule configuration variants and parser."""

from shardgov.rules.model import (
    LoadBalancerConfiguration,
    OpaqueRuleConfiguration,
    ReplicaQueryDataSourceRuleConfiguration,
    ReplicaQueryRuleConfiguration,
    RuleConfiguration,
    RuleConfigurations,
    RuleKind,
    ShardingRuleConfiguration,
)
from shardgov.rules.parser import (
    REPLICA_QUERY_MARKER,
    SHARDING_MARKER,
    parse_rule_configurations,
)

__all__ = [
    "RuleKind",
    "RuleConfiguration",
    "RuleConfigurations",
    "ReplicaQueryRuleConfiguration",
    "ReplicaQueryDataSourceRuleConfiguration",
    "LoadBalancerConfiguration",
    "ShardingRuleConfiguration",
    "OpaqueRuleConfiguration",
    "parse_rule_configurations",
    "SHARDING_MARKER",
    "REPLICA_QUERY_MARKER",
]
