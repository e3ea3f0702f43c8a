"""CLI commands for instance and replica data source governance."""

from pathlib import Path
from typing import Callable, TypeVar

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from shardgov.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config, save_config
from shardgov.config.schema import ShardGovConfig
from shardgov.errors import GovernanceError
from shardgov.governance.service import GovernanceService
from shardgov.logging_setup import configure_logging
from shardgov.registry.store import MemoryRegistryCenter
from shardgov.server.app import create_service

console = Console()

T = TypeVar("T")


def _format_enabled(enabled: bool) -> str:
    return "[green]enabled[/green]" if enabled else "[red]disabled[/red]"


def _save_memory_nodes(
    config: ShardGovConfig, path: Path | None, registry: MemoryRegistryCenter
) -> None:
    # The memory registry dies with this process; its nodes become the seed
    # the next command or server starts from.
    config.registry.seed = registry.snapshot()
    save_config(config, path)
    console.print(f"[dim]Saved in-memory registry nodes to {path or DEFAULT_CONFIG_PATH}[/dim]")


def _run(
    config_path: str | None,
    operation: Callable[[GovernanceService], T],
    writes: bool = False,
) -> T:
    """Load config, build the service, run one operation and close the store.

    With ``writes`` set and the memory backend, the resulting nodes are saved
    back into the config file's registry seed.
    """
    path = Path(config_path) if config_path else None
    try:
        config = load_config(path)
    except ConfigError as e:
        console.print(f"[red]Failed to load config: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    configure_logging(config.logging)
    service = create_service(config)
    try:
        result = operation(service)
        if writes and isinstance(service.registry_center, MemoryRegistryCenter):
            _save_memory_nodes(config, path, service.registry_center)
        return result
    except GovernanceError as e:
        console.print(f"[red]{type(e).__name__}: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    finally:
        service.registry_center.close()


def list_instances_command(config_path: str | None = None) -> None:
    """Show every proxy instance and its status."""
    instances = _run(config_path, lambda service: service.get_all_instances())

    if not instances:
        console.print("[yellow]No proxy instances registered[/yellow]")
        return

    table = Table(title="Proxy Instances")
    table.add_column("Instance", style="cyan")
    table.add_column("Status", style="white")
    for instance in instances:
        table.add_row(instance.instance_id, _format_enabled(instance.enabled))
    console.print(table)

    enabled = sum(1 for each in instances if each.enabled)
    console.print(f"\n[bold]Summary:[/bold] {enabled}/{len(instances)} instances enabled")


def set_instance_status_command(
    instance_id: str, enabled: bool, config_path: str | None = None
) -> None:
    """Enable or disable a proxy instance."""
    _run(
        config_path,
        lambda service: service.update_instance_status(instance_id, enabled),
        writes=True,
    )
    console.print(f"[green]✓[/green] Instance [cyan]{instance_id}[/cyan] {_format_enabled(enabled)}")


def list_replicas_command(config_path: str | None = None) -> None:
    """Show every replica data source and its status."""
    replicas = _run(config_path, lambda service: service.get_all_replica_data_sources())

    if not replicas:
        console.print("[yellow]No replica data sources configured[/yellow]")
        return

    table = Table(title="Replica Data Sources")
    table.add_column("Schema", style="cyan")
    table.add_column("Primary", style="magenta")
    table.add_column("Replica", style="blue")
    table.add_column("Status", style="white")
    for replica in replicas:
        table.add_row(
            replica.schema_name,
            replica.primary_data_source_name,
            replica.replica_data_source_name,
            _format_enabled(replica.enabled),
        )
    console.print(table)


def set_replica_status_command(
    schema_name: str, data_source_name: str, enabled: bool, config_path: str | None = None
) -> None:
    """Enable or disable a replica data source."""
    _run(
        config_path,
        lambda service: service.update_replica_data_source_status(
            schema_name, data_source_name, enabled
        ),
        writes=True,
    )
    console.print(
        f"[green]✓[/green] Data source [cyan]{schema_name}.{data_source_name}[/cyan] "
        f"{_format_enabled(enabled)}"
    )


def seed_registry_command(seed_file: str, config_path: str | None = None) -> None:
    """Write node path/value pairs from a YAML mapping into the registry center."""
    try:
        with open(seed_file, "r") as f:
            nodes = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        console.print(f"[red]Failed to read seed file {seed_file}: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if not isinstance(nodes, dict):
        console.print("[red]Seed file must contain a mapping of node path to value[/red]")
        raise typer.Exit(code=1)

    def persist_all(service: GovernanceService) -> None:
        for path, value in nodes.items():
            service.registry_center.persist(str(path), "" if value is None else str(value))

    _run(config_path, persist_all, writes=True)
    console.print(f"[green]✓[/green] Seeded {len(nodes)} node(s)")
