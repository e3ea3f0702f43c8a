"""Rule configuration variants."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union


class RuleKind(Enum):
    """Tag carried by every rule configuration variant."""

    REPLICA_QUERY = "REPLICA_QUERY"
    SHARDING = "SHARDING"
    OTHER = "OTHER"


@dataclass(frozen=True)
class ReplicaQueryDataSourceRuleConfiguration:
    """One primary data source and its read replicas."""

    name: str
    primary_data_source_name: str
    replica_data_source_names: Tuple[str, ...] = ()
    load_balancer_name: Optional[str] = None


@dataclass(frozen=True)
class LoadBalancerConfiguration:
    """Replica load balancing algorithm."""

    type: str
    props: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ReplicaQueryRuleConfiguration:
    """Replica-query (read/write splitting) topology of a schema."""

    data_sources: List[ReplicaQueryDataSourceRuleConfiguration] = field(default_factory=list)
    load_balancers: Dict[str, LoadBalancerConfiguration] = field(default_factory=dict)
    kind: RuleKind = field(default=RuleKind.REPLICA_QUERY, init=False)


@dataclass
class ShardingRuleConfiguration:
    """Sharding rule. Its body is not interpreted here."""

    props: Dict[str, Any] = field(default_factory=dict)
    kind: RuleKind = field(default=RuleKind.SHARDING, init=False)


@dataclass
class OpaqueRuleConfiguration:
    """Any other rule (encrypt, shadow, ...), kept with its YAML tag."""

    tag: str
    props: Dict[str, Any] = field(default_factory=dict)
    kind: RuleKind = field(default=RuleKind.OTHER, init=False)


RuleConfiguration = Union[
    ReplicaQueryRuleConfiguration,
    ShardingRuleConfiguration,
    OpaqueRuleConfiguration,
]


@dataclass
class RuleConfigurations:
    """Ordered rules parsed from one schema's rule configuration."""

    rules: List[RuleConfiguration] = field(default_factory=list)

    def __iter__(self) -> Iterator[RuleConfiguration]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def replica_query_rules(self) -> List[ReplicaQueryRuleConfiguration]:
        """All replica-query rules, in document order."""
        return [rule for rule in self.rules if rule.kind is RuleKind.REPLICA_QUERY]  # type: ignore[misc]

    def find_replica_query_rule(self) -> Optional[ReplicaQueryRuleConfiguration]:
        """The first replica-query rule, or None if the document has none."""
        rules = self.replica_query_rules()
        return rules[0] if rules else None
