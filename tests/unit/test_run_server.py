"""Unit tests for the command-line entry point."""

from unittest.mock import patch

from inventory_server.config import Settings
from run_server import apply_overrides, main, parse_args


class TestParseArgs:
    """Tests for command-line parsing."""

    def test_defaults_are_unset(self):
        args = parse_args([])

        assert args.resource_id is None
        assert args.host is None
        assert args.port is None
        assert args.log_level is None

    def test_id_flag(self):
        assert parse_args(["--id", "web-1"]).resource_id == "web-1"

    def test_port_is_an_int(self):
        assert parse_args(["--port", "9000"]).port == 9000


class TestApplyOverrides:
    """Tests for merging command-line values into settings."""

    def test_no_overrides_returns_same_settings(self):
        config = Settings(_env_file=None)

        assert apply_overrides(config, parse_args([])) is config

    def test_overrides_replace_configured_values(self):
        config = Settings(_env_file=None, port=8080, resource_id=None)

        updated = apply_overrides(config, parse_args(["--id", "disk-9", "--port", "9001"]))

        assert updated.resource_id == "disk-9"
        assert updated.port == 9001
        assert updated.pinned_mode is True
        assert config.resource_id is None


class TestMain:
    """Tests for server startup."""

    def test_main_starts_uvicorn_with_pinned_app(self):
        with patch("run_server.settings", return_value=Settings(_env_file=None, credentials_file=None)), \
             patch("run_server.configure_logging"), \
             patch("run_server.uvicorn.run") as run:
            main(["--id", "web-1", "--port", "9002"])

        run.assert_called_once()
        app = run.call_args.args[0]
        assert app.state.settings.resource_id == "web-1"
        assert run.call_args.kwargs["port"] == 9002
