"""Tests for CLI app entry point."""

from unittest.mock import patch

from typer.testing import CliRunner

from shardgov.cli.app import app, main

runner = CliRunner()


def test_version_command():
    """Test 'version' prints shardgov version string."""
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "shardgov version" in result.output


def test_no_args_shows_help():
    """Test invoking with no arguments shows help (no_args_is_help)."""
    result = runner.invoke(app, [])
    assert result.exit_code in (0, 2)
    assert "Usage" in result.output or "shardgov" in result.output


def test_start_command():
    """Test 'start' delegates to start_command."""
    with patch("shardgov.cli.server_cmd.start_command") as mock_cmd:
        result = runner.invoke(app, ["start", "--detach", "--config", "cfg.yaml"])
        mock_cmd.assert_called_once_with(config_path="cfg.yaml", detach=True)
        assert result.exit_code == 0


def test_stop_command():
    """Test 'stop' delegates to stop_command."""
    with patch("shardgov.cli.server_cmd.stop_command") as mock_cmd:
        result = runner.invoke(app, ["stop"])
        mock_cmd.assert_called_once()
        assert result.exit_code == 0


def test_status_command():
    """Test 'status' delegates to status_command."""
    with patch("shardgov.cli.server_cmd.status_command") as mock_cmd:
        result = runner.invoke(app, ["status"])
        mock_cmd.assert_called_once_with(config_path=None)
        assert result.exit_code == 0


def test_instance_disable_command():
    """Test 'instance disable' passes enabled=False."""
    with patch("shardgov.cli.governance_cmd.set_instance_status_command") as mock_cmd:
        result = runner.invoke(app, ["instance", "disable", "node1"])
        mock_cmd.assert_called_once_with("node1", False, config_path=None)
        assert result.exit_code == 0


def test_replica_enable_command():
    """Test 'replica enable' passes schema, data source and enabled=True."""
    with patch("shardgov.cli.governance_cmd.set_replica_status_command") as mock_cmd:
        result = runner.invoke(app, ["replica", "enable", "users", "db_r1", "-c", "cfg.yaml"])
        mock_cmd.assert_called_once_with("users", "db_r1", True, config_path="cfg.yaml")
        assert result.exit_code == 0


def test_registry_seed_command():
    """Test 'registry seed' delegates to seed_registry_command."""
    with patch("shardgov.cli.governance_cmd.seed_registry_command") as mock_cmd:
        result = runner.invoke(app, ["registry", "seed", "nodes.yaml"])
        mock_cmd.assert_called_once_with("nodes.yaml", config_path=None)
        assert result.exit_code == 0


def test_main_keyboard_interrupt():
    """Test main() handles KeyboardInterrupt with exit code 130."""
    with (
        patch("shardgov.cli.app.app", side_effect=KeyboardInterrupt),
        patch("shardgov.cli.app.sys") as mock_sys,
    ):
        main()
        mock_sys.exit.assert_called_with(130)


def test_main_exception():
    """Test main() handles unexpected exceptions with exit code 1."""
    with (
        patch("shardgov.cli.app.app", side_effect=RuntimeError("test error")),
        patch("shardgov.cli.app.sys") as mock_sys,
    ):
        main()
        mock_sys.exit.assert_called_with(1)
