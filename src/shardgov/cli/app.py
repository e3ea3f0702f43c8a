"""Main CLI application using Typer."""

import sys

import typer
from rich.console import Console

from shardgov import __version__

app = typer.Typer(
    name="shardgov",
    help="ShardGov - Governance for sharded database proxy clusters",
    no_args_is_help=True,
)

console = Console()

CONFIG_HELP = "Path to config file (default: ~/.shardgov/shardgov.yaml)"


@app.command()
def version():
    """Show shardgov version."""
    console.print(f"shardgov version {__version__}")


@app.command()
def start(
    config_path: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
    detach: bool = typer.Option(False, "--detach", "-d", help="Run server in background"),
):
    """Start the governance API server."""
    from shardgov.cli.server_cmd import start_command

    start_command(config_path=config_path, detach=detach)


@app.command()
def stop():
    """Stop the governance API server."""
    from shardgov.cli.server_cmd import stop_command

    stop_command()


@app.command()
def status(
    config_path: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
):
    """Check governance API server status."""
    from shardgov.cli.server_cmd import status_command

    status_command(config_path=config_path)


# Instance commands
instance_app = typer.Typer(help="Manage proxy instances")
app.add_typer(instance_app, name="instance")


@instance_app.command("list")
def instance_list(
    config_path: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
):
    """List proxy instances and their status."""
    from shardgov.cli.governance_cmd import list_instances_command

    list_instances_command(config_path=config_path)


@instance_app.command("enable")
def instance_enable(
    instance_id: str = typer.Argument(..., help="Instance identifier"),
    config_path: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
):
    """Enable a proxy instance."""
    from shardgov.cli.governance_cmd import set_instance_status_command

    set_instance_status_command(instance_id, True, config_path=config_path)


@instance_app.command("disable")
def instance_disable(
    instance_id: str = typer.Argument(..., help="Instance identifier"),
    config_path: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
):
    """Disable a proxy instance."""
    from shardgov.cli.governance_cmd import set_instance_status_command

    set_instance_status_command(instance_id, False, config_path=config_path)


# Replica data source commands
replica_app = typer.Typer(help="Manage replica data sources")
app.add_typer(replica_app, name="replica")


@replica_app.command("list")
def replica_list(
    config_path: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
):
    """List replica data sources and their status."""
    from shardgov.cli.governance_cmd import list_replicas_command

    list_replicas_command(config_path=config_path)


@replica_app.command("enable")
def replica_enable(
    schema_name: str = typer.Argument(..., help="Schema name"),
    data_source_name: str = typer.Argument(..., help="Replica data source name"),
    config_path: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
):
    """Enable a replica data source."""
    from shardgov.cli.governance_cmd import set_replica_status_command

    set_replica_status_command(schema_name, data_source_name, True, config_path=config_path)


@replica_app.command("disable")
def replica_disable(
    schema_name: str = typer.Argument(..., help="Schema name"),
    data_source_name: str = typer.Argument(..., help="Replica data source name"),
    config_path: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
):
    """Disable a replica data source."""
    from shardgov.cli.governance_cmd import set_replica_status_command

    set_replica_status_command(schema_name, data_source_name, False, config_path=config_path)


# Registry commands
registry_app = typer.Typer(help="Registry center utilities")
app.add_typer(registry_app, name="registry")


@registry_app.command("seed")
def registry_seed(
    seed_file: str = typer.Argument(..., help="YAML mapping of node path to value"),
    config_path: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
):
    """Write node values from a YAML file into the registry center."""
    from shardgov.cli.governance_cmd import seed_registry_command

    seed_registry_command(seed_file, config_path=config_path)


def main():
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
