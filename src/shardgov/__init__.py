"""ShardGov - Governance backend for sharded database proxy clusters.

ShardGov reads and toggles the enablement state of proxy instances and
replica data sources. Live state comes from a coordination store (registry
center). Replica topology comes from each schema's YAML rule configuration.

Key modules:

- :mod:`shardgov.registry` - Coordination store clients and the node path layout
- :mod:`shardgov.rules` - Rule configuration variants and the YAML rule parser
- :mod:`shardgov.governance` - Instance and replica data source governance
- :mod:`shardgov.server` - FastAPI application exposing the governance API
- :mod:`shardgov.cli` - Typer command line interface
"""

__version__ = "0.1.0"
