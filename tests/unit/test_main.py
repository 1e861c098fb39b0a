"""
Unit tests for the nodeparams CLI entry point.

Tests:
- parse_args() defaults and choices
- main() success output (text and JSON)
- main() exit codes on configuration and startup failures
- Eager listener released before exit
"""

import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from nodeparams.__main__ import SIDE_REGISTRY, main, parse_args
from nodeparams.core.endpoint import ClientEndpointConfig, ServerEndpointConfig
from nodeparams.utils.network import check_port_available


@pytest.fixture(autouse=True)
def loopback_ip() -> Iterator[MagicMock]:
    with patch("nodeparams.core.endpoint.local_ipv4", return_value="127.0.0.1") as resolver:
        yield resolver


@pytest.fixture(autouse=True)
def no_handler_install() -> Iterator[MagicMock]:
    with patch("nodeparams.__main__.setup_logging") as setup:
        yield setup


class TestParseArgs:
    """Argument parsing."""

    def test_defaults(self) -> None:
        args = parse_args(["proxy"])
        assert args.role == "proxy"
        assert args.side == "server"
        assert args.config is None
        assert args.env_prefix == ""
        assert args.no_defaults is False
        assert args.json is False

    def test_unknown_role(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["storage-node"])

    def test_side_registry(self) -> None:
        assert SIDE_REGISTRY == {"server": ServerEndpointConfig, "client": ClientEndpointConfig}


class TestMain:
    """main() behaviour."""

    def test_json_output(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        yaml_file = tmp_path / "params.yaml"
        yaml_file.write_text("root-coord:\n  port: 53100\n  grpc:\n    clientMaxSendSize: 10\n")

        code = main(["root-coord", "--side", "client", "--config", str(yaml_file), "--json"])

        assert code == 0
        summary = json.loads(capsys.readouterr().out)
        assert summary == {
            "role": "root-coord",
            "side": "client",
            "address": "127.0.0.1:53100",
            "ip": "127.0.0.1",
            "port": 53100,
            "listener": False,
            "max_send_size": 10,
            "max_recv_size": 104_857_600,
        }

    def test_text_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["query-coord"])
        assert code == 0
        out = capsys.readouterr().out
        assert "role: query-coord" in out
        assert "max_send_size: 2147483647" in out

    def test_missing_config_file(self, tmp_path: Path) -> None:
        assert main(["proxy", "--config", str(tmp_path / "missing.yaml")]) == 1

    def test_invalid_env_prefix(self) -> None:
        assert main(["proxy", "--env-prefix", "lower-case"]) == 1

    def test_no_defaults_missing_port(self) -> None:
        assert main(["root-coord", "--no-defaults", "--env-prefix", "NP_TEST_UNSET_"]) == 1

    def test_eager_listener_closed(self, monkeypatch: pytest.MonkeyPatch, free_port: int) -> None:
        monkeypatch.setenv("NP_TEST_DATA_NODE_PORT", str(free_port))
        code = main(["data-node", "--env-prefix", "NP_TEST_", "--json"])
        assert code == 0
        assert check_port_available(free_port)
