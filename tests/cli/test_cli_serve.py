"""Tests for ``zinc serve`` CLI command."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from zinc.cli import main


def _frames(*requests: dict[str, object]) -> str:
    return "".join(json.dumps({"jsonrpc": "2.0", **r}) + "\n" for r in requests)


class TestServeActivation:
    def test_without_exec_prints_usage(self) -> None:
        runner = CliRunner()
        with patch("zinc.server.server.MCPServer.serve") as mock_serve:
            result = runner.invoke(main, ["serve"], input=_frames({"id": 1, "method": "ping"}))
        assert result.exit_code == 0
        assert result.stdout == ""
        assert "Usage" in result.stderr
        assert "--exec" in result.stderr
        mock_serve.assert_not_called()


class TestServeStdio:
    def test_round_trip(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["serve", "--exec"],
            input=_frames(
                {"id": 1, "method": "initialize", "params": {}},
                {"method": "notifications/initialized"},
                {"id": 2, "method": "tools/list"},
            ),
        )
        assert result.exit_code == 0, result.stderr
        lines = result.stdout.splitlines()
        assert len(lines) == 2
        first, second = (json.loads(line) for line in lines)
        assert first["id"] == 1
        assert first["result"]["serverInfo"]["name"] == "zinc-mcp-server"
        assert second["id"] == 2
        assert len(second["result"]["tools"]) == 4

    def test_malformed_input(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["serve", "--exec"], input="garbage\n")
        assert result.exit_code == 0
        frame = json.loads(result.stdout)
        assert frame["id"] is None
        assert frame["error"]["code"] == -32700

    def test_undecodable_line_does_not_stop_server(self) -> None:
        runner = CliRunner()
        stdin = (
            _frames({"id": 1, "method": "ping"}).encode()
            + b"\xff\xfe\n"
            + _frames({"id": 2, "method": "ping"}).encode()
        )
        result = runner.invoke(main, ["serve", "--exec"], input=stdin)
        assert result.exit_code == 0, result.stderr
        frames = [json.loads(line) for line in result.stdout.splitlines()]
        assert [frame["id"] for frame in frames] == [1, None, 2]
        assert frames[1]["error"]["code"] == -32700

    def test_debug_logging_goes_to_stderr(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["serve", "--exec", "--log-level", "debug"],
            input=_frames({"id": 1, "method": "ping"}),
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"jsonrpc": "2.0", "id": 1, "result": {}}
        assert "<-" in result.stderr

    def test_config_file(self, tmp_path: Path) -> None:
        config = tmp_path / "zinc.yaml"
        config.write_text("answer_notifications: true\n")
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["serve", "--exec", "--config", str(config)],
            input=_frames({"method": "ping"}),
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"jsonrpc": "2.0", "id": None, "result": {}}

    def test_bad_config_exits_nonzero(self, tmp_path: Path) -> None:
        config = tmp_path / "zinc.yaml"
        config.write_text("log_level: LOUD\n")
        runner = CliRunner()
        result = runner.invoke(main, ["serve", "--exec", "--config", str(config)], input="")
        assert result.exit_code == 1
        assert "Config error" in result.stderr

    def test_transport_failure_exits_nonzero(self) -> None:
        from zinc.protocols.errors import TransportError

        runner = CliRunner()
        with patch(
            "zinc.protocols.mcp.transport.StdioTransport.read_frame",
            side_effect=TransportError("read failed: bad fd"),
        ):
            result = runner.invoke(main, ["serve", "--exec"], input="")
        assert result.exit_code == 1
        assert "Transport error" in result.stderr


class TestServeTcpOption:
    def test_bad_address(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["serve", "--exec", "--tcp", "localhost"])
        assert result.exit_code == 2
        assert "HOST:PORT" in result.stderr

    def test_tcp_address_parsed(self) -> None:
        runner = CliRunner()
        with patch("zinc.server.server.MCPServer.serve_tcp") as mock_serve_tcp:
            with patch("zinc.cli_commands.serve.asyncio.run") as mock_run:
                mock_run.side_effect = lambda coro: coro.close()
                result = runner.invoke(main, ["serve", "--exec", "--tcp", "0.0.0.0:9000"])
        assert result.exit_code == 0, result.stderr
        mock_serve_tcp.assert_called_once_with("0.0.0.0", 9000)
        mock_run.assert_called_once()
