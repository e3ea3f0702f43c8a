"""
Programmatic Governance Example
===============================

This example drives the governance service directly from Python, without
the HTTP server or the CLI.

Topics covered:
- Building a registry center from configuration
- Listing proxy instances and replica data sources
- Disabling and re-enabling a replica
- Handling store and configuration errors

Usage:
    python examples/01_governance_api.py
"""

from pathlib import Path

from shardgov.config.loader import load_config
from shardgov.errors import GovernanceError
from shardgov.logging_setup import configure_logging
from shardgov.server.app import create_service

CONFIG_PATH = Path(__file__).parent / "demo_cluster.yaml"


def print_replicas(service) -> None:
    for replica in service.get_all_replica_data_sources():
        state = "enabled" if replica.enabled else "disabled"
        print(
            f"  {replica.schema_name}: {replica.primary_data_source_name} -> "
            f"{replica.replica_data_source_name} ({state})"
        )


def main() -> None:
    config = load_config(CONFIG_PATH)
    configure_logging(config.logging)
    service = create_service(config)

    try:
        print("Instances:")
        for instance in service.get_all_instances():
            state = "enabled" if instance.enabled else "disabled"
            print(f"  {instance.instance_id} ({state})")

        print("\nReplica data sources:")
        print_replicas(service)

        print("\nDisabling replica_query_db.replica_ds_0 ...")
        service.update_replica_data_source_status("replica_query_db", "replica_ds_0", False)
        print_replicas(service)

        print("\nRe-enabling it ...")
        service.update_replica_data_source_status("replica_query_db", "replica_ds_0", True)
        print_replicas(service)
    except GovernanceError as e:
        print(f"Governance call failed: {type(e).__name__}: {e}")
    finally:
        service.registry_center.close()


if __name__ == "__main__":
    main()
