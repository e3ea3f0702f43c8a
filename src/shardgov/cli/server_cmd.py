"""Server management commands."""

import os
import signal
import subprocess
import sys
from pathlib import Path

import httpx
from rich.console import Console
from rich.markup import escape

STATE_DIR = Path.home() / ".shardgov"
PID_FILE = STATE_DIR / "server.pid"
# Config file the detached server process loads
CONFIG_ENV_VAR = "SHARDGOV_CONFIG"

console = Console()


def _write_pid(pid: int) -> None:
    PID_FILE.parent.mkdir(parents=True, exist_ok=True)
    PID_FILE.write_text(str(pid))


def _read_pid() -> int | None:
    """Read PID from file, return None if missing or stale."""
    if not PID_FILE.exists():
        return None
    try:
        pid = int(PID_FILE.read_text().strip())
        os.kill(pid, 0)
        return pid
    except (ValueError, ProcessLookupError, PermissionError):
        PID_FILE.unlink(missing_ok=True)
        return None


def _remove_pid() -> None:
    PID_FILE.unlink(missing_ok=True)


def start_command(config_path: str | None = None, detach: bool = False) -> None:
    """Start the governance API server.

    Args:
        config_path: Optional path to config file
        detach: Run server in background
    """
    from shardgov.config.loader import ConfigError, load_config

    existing_pid = _read_pid()
    if existing_pid:
        console.print(f"[yellow]Server already running (PID {existing_pid})[/yellow]")
        console.print("Run [bold]shardgov stop[/bold] first.")
        return

    path = Path(config_path) if config_path else None
    try:
        config = load_config(path)
    except ConfigError as e:
        console.print(f"[red]Failed to load config: {escape(str(e))}[/red]")
        return

    if detach:
        cmd = [
            sys.executable,
            "-m",
            "uvicorn",
            "shardgov.server.asgi:app",
            "--host",
            config.server.host,
            "--port",
            str(config.server.port),
            "--log-level",
            config.logging.level.lower(),
        ]
        log_path = STATE_DIR / "server.log"
        log_path.parent.mkdir(parents=True, exist_ok=True)
        log_file = log_path.open("a")
        env = dict(os.environ)
        if path is not None:
            env[CONFIG_ENV_VAR] = str(path.resolve())
        else:
            env.pop(CONFIG_ENV_VAR, None)
        proc = subprocess.Popen(
            cmd,
            stdout=log_file,
            stderr=subprocess.STDOUT,
            start_new_session=True,
            env=env,
        )
        _write_pid(proc.pid)
        console.print(f"[green]shardgov server started in background (PID {proc.pid})[/green]")
        console.print(f"  http://{config.server.host}:{config.server.port}")
        console.print(f"  Log: {log_path}")
        console.print("\nRun [bold]shardgov stop[/bold] to stop.")
    else:
        # Foreground mode: write our own PID so `shardgov stop` works
        import uvicorn

        from shardgov.logging_setup import configure_logging
        from shardgov.server.app import create_app

        configure_logging(config.logging)
        app = create_app(config)
        _write_pid(os.getpid())

        console.print(
            f"[green]Starting shardgov server on "
            f"{config.server.host}:{config.server.port}[/green]"
        )
        console.print(f"Registry: {config.registry.backend}")
        console.print("\nPress Ctrl+C to stop")

        try:
            uvicorn.run(
                app,
                host=config.server.host,
                port=config.server.port,
                log_level=config.logging.level.lower(),
            )
        finally:
            _remove_pid()


def stop_command() -> None:
    """Stop the governance API server."""
    pid = _read_pid()
    if pid is None:
        console.print("[yellow]No running shardgov server found.[/yellow]")
        return

    try:
        os.kill(pid, signal.SIGTERM)
        console.print(f"[green]Stopped shardgov server (PID {pid})[/green]")
    except ProcessLookupError:
        console.print("[yellow]Server process already exited.[/yellow]")
    finally:
        _remove_pid()


def status_command(config_path: str | None = None) -> None:
    """Check governance server status."""
    from shardgov.config.loader import ConfigError, load_config

    pid = _read_pid()

    try:
        config = load_config(Path(config_path) if config_path else None)
        host = config.server.host
        port = config.server.port
    except ConfigError:
        host = "127.0.0.1"
        port = 8088

    try:
        resp = httpx.get(f"http://{host}:{port}/health", timeout=3.0)
        data = resp.json()
    except (httpx.HTTPError, ValueError):
        if pid:
            console.print(f"[yellow]PID {pid} exists but health check failed.[/yellow]")
        else:
            console.print("[yellow]Server is not running.[/yellow]")
            console.print("Start with: [bold]shardgov start[/bold]")
        return

    console.print("[green]Server is running[/green]")
    if pid:
        console.print(f"  PID:      {pid}")
    console.print(f"  URL:      http://{host}:{port}")
    console.print(f"  Status:   {data.get('status', 'unknown')}")
    console.print(f"  Registry: {data.get('registry', 'unknown')}")
    console.print(f"  Version:  {data.get('version', 'unknown')}")
