"""YAML rule configuration parser.

Rule documents hold a ``rules`` list whose items are tagged mappings::

    rules:
    - !REPLICA_QUERY
      dataSources:
        pr_ds:
          primaryDataSourceName: primary_ds
          replicaDataSourceNames:
            - replica_ds_0
            - replica_ds_1
          loadBalancerName: round_robin
      loadBalancers:
        round_robin:
          type: ROUND_ROBIN
    - !SHARDING
      tables: ...

A document whose root is a single tagged rule is accepted as a one-item list.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

import yaml

from shardgov.errors import MalformedConfiguration
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

logger = logging.getLogger(__name__)

SHARDING_MARKER = "!" + RuleKind.SHARDING.value
REPLICA_QUERY_MARKER = "!" + RuleKind.REPLICA_QUERY.value


@dataclass
class _TaggedRule:
    tag: str
    body: Any


class _RuleLoader(yaml.SafeLoader):
    """Safe loader that keeps ``!TAG`` annotations on rule bodies."""


def _construct_tagged(loader: yaml.SafeLoader, tag_suffix: str, node: yaml.Node) -> _TaggedRule:
    if isinstance(node, yaml.MappingNode):
        body: Any = loader.construct_mapping(node, deep=True)
    elif isinstance(node, yaml.SequenceNode):
        body = loader.construct_sequence(node, deep=True)
    else:
        body = loader.construct_scalar(node) or None  # type: ignore[arg-type]
    return _TaggedRule(tag=tag_suffix, body=body)


_RuleLoader.add_multi_constructor("!", _construct_tagged)


def _require_mapping(value: Any, what: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MalformedConfiguration(f"{what} must be a mapping, got {type(value).__name__}")
    return value


def _convert_replica_query(body: Dict[str, Any]) -> ReplicaQueryRuleConfiguration:
    data_sources: List[ReplicaQueryDataSourceRuleConfiguration] = []
    for name, group in _require_mapping(body.get("dataSources"), "dataSources").items():
        group = _require_mapping(group, f"Data source group '{name}'")
        primary = group.get("primaryDataSourceName")
        if not primary:
            raise MalformedConfiguration(
                f"Data source group '{name}' has no primaryDataSourceName"
            )
        replicas = group.get("replicaDataSourceNames") or []
        if not isinstance(replicas, list):
            raise MalformedConfiguration(
                f"replicaDataSourceNames of '{name}' must be a list"
            )
        data_sources.append(
            ReplicaQueryDataSourceRuleConfiguration(
                name=str(group.get("name") or name),
                primary_data_source_name=str(primary),
                replica_data_source_names=tuple(str(each) for each in replicas),
                load_balancer_name=group.get("loadBalancerName"),
            )
        )

    load_balancers: Dict[str, LoadBalancerConfiguration] = {}
    for name, balancer in _require_mapping(body.get("loadBalancers"), "loadBalancers").items():
        balancer = _require_mapping(balancer, f"Load balancer '{name}'")
        load_balancers[str(name)] = LoadBalancerConfiguration(
            type=str(balancer.get("type", "")),
            props=_require_mapping(balancer.get("props"), f"props of '{name}'"),
        )

    return ReplicaQueryRuleConfiguration(data_sources=data_sources, load_balancers=load_balancers)


def _convert(rule: Any) -> RuleConfiguration:
    if not isinstance(rule, _TaggedRule):
        raise MalformedConfiguration(f"Rule item is not tagged: {rule!r}")
    body = _require_mapping(rule.body, f"Rule !{rule.tag}")
    if rule.tag == RuleKind.REPLICA_QUERY.value:
        return _convert_replica_query(body)
    if rule.tag == RuleKind.SHARDING.value:
        return ShardingRuleConfiguration(props=body)
    return OpaqueRuleConfiguration(tag=rule.tag, props=body)


def parse_rule_configurations(text: str) -> RuleConfigurations:
    """
    Parse raw rule configuration text.

    Args:
        text: YAML rule document

    Returns:
        Parsed rules in document order

    Raises:
        MalformedConfiguration: If the text is not a valid rule document
    """
    try:
        document = yaml.load(text, Loader=_RuleLoader)
    except yaml.YAMLError as e:
        raise MalformedConfiguration(f"Invalid rule YAML: {e}") from e

    if document is None:
        return RuleConfigurations()
    if isinstance(document, _TaggedRule):
        items: Any = [document]
    elif isinstance(document, dict):
        items = document.get("rules") or []
    else:
        raise MalformedConfiguration(
            f"Rule document must be a mapping, got {type(document).__name__}"
        )
    if not isinstance(items, list):
        raise MalformedConfiguration("'rules' must be a list")

    result = RuleConfigurations(rules=[_convert(each) for each in items])
    logger.debug(f"Parsed {len(result)} rule configuration(s)")
    return result
