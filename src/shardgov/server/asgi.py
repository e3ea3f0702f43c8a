"""ASGI entry point for running the shardgov server via uvicorn CLI.

Used by `shardgov start --detach` to launch the server as a subprocess:
    python -m uvicorn shardgov.server.asgi:app --host ... --port ...

The config file is taken from the SHARDGOV_CONFIG environment variable,
falling back to the default location.
"""

import os
from pathlib import Path

from shardgov.config.loader import load_config
from shardgov.logging_setup import configure_logging
from shardgov.server.app import create_app

_config_path = os.environ.get("SHARDGOV_CONFIG")

config = load_config(Path(_config_path) if _config_path else None)
configure_logging(config.logging)
app = create_app(config)
