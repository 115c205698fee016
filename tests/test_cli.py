"""Tests for the ``toolbox-mcp`` CLI."""
from __future__ import annotations

import json
from unittest.mock import patch

from click.testing import CliRunner

from toolbox_mcp_server import __version__
from toolbox_mcp_server.cli import main
from toolbox_mcp_server.session import DocumentStoreSession

from .fakes import FakeClient, FakeDatabase, make_client_factory


class TestToolsCommand:
    def test_filesystem_catalog(self) -> None:
        result = CliRunner().invoke(main, ["tools", "filesystem"])
        assert result.exit_code == 0
        tools = json.loads(result.output)
        assert [t["name"] for t in tools] == ["read_file", "list_files", "create_file", "create_folder"]
        assert tools[0]["inputSchema"]["required"] == ["filepath"]

    def test_document_store_catalog(self) -> None:
        result = CliRunner().invoke(main, ["tools", "document-store"])
        assert result.exit_code == 0
        assert [t["name"] for t in json.loads(result.output)] == [
            "find",
            "find_one",
            "count",
            "list_collections",
        ]

    def test_unknown_instance(self) -> None:
        result = CliRunner().invoke(main, ["tools", "ftp"])
        assert result.exit_code != 0


class TestVersion:
    def test_version_option(self) -> None:
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestDocumentStoreStartup:
    def test_unreachable_endpoint_exits_non_zero(self) -> None:
        client = FakeClient(FakeDatabase(), reachable=False)
        factory = make_client_factory(client)

        def session_for(config):
            return DocumentStoreSession(config, client_factory=factory)

        with patch("toolbox_mcp_server.cli._setup_logging"), patch(
            "toolbox_mcp_server.cli.DocumentStoreSession", side_effect=session_for
        ), patch("toolbox_mcp_server.mcp_server.stdio_server") as stdio:
            result = CliRunner().invoke(
                main, ["document-store", "--uri", "mongodb://localhost:1", "--database", "shop"]
            )

        assert result.exit_code == 1
        assert factory.calls[0][0] == "mongodb://localhost:1"
        # the transport is never opened
        stdio.assert_not_called()

    def test_real_driver_against_closed_port(self) -> None:
        with patch("toolbox_mcp_server.cli._setup_logging"), patch(
            "toolbox_mcp_server.mcp_server.stdio_server"
        ) as stdio:
            result = CliRunner().invoke(
                main,
                ["document-store", "--uri", "mongodb://127.0.0.1:1", "--connect-timeout-ms", "200"],
            )

        assert result.exit_code == 1
        stdio.assert_not_called()

    def test_invalid_configuration(self) -> None:
        with patch("toolbox_mcp_server.cli.run_server") as run_server:
            result = CliRunner().invoke(main, ["document-store", "--connect-timeout-ms", "0"])

        assert result.exit_code == 1
        assert "Connect timeout must be positive" in result.output
        run_server.assert_not_called()
