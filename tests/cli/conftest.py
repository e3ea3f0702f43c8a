"""Shared fixtures for CLI tests."""

from pathlib import Path

import pytest
import yaml


@pytest.fixture
def tmp_config_path(tmp_path: Path) -> Path:
    """Provide a temporary config file path."""
    return tmp_path / "shardgov.yaml"


@pytest.fixture
def seeded_config_path(tmp_config_path: Path, replica_query_rule: str) -> Path:
    """Config file whose memory registry holds two instances and one replica schema."""
    config = {
        "registry": {
            "backend": "memory",
            "seed": {
                "/states/proxynodes/node1": "DISABLED",
                "/states/proxynodes/node2": "",
                "/metadata/users/rule": replica_query_rule,
                "/states/datanodes/users/db_r1": "DISABLED",
            },
        },
        "logging": {"level": "WARNING", "rich": False},
    }
    tmp_config_path.write_text(yaml.safe_dump(config))
    return tmp_config_path
