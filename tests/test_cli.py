"""
Tests for the command line interface.
"""

import json
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from click.testing import CliRunner

from mcp_server_langfuse.cli import cli

CREDENTIALS = {"LANGFUSE_PUBLIC_KEY": "pk", "LANGFUSE_PRIVATE_KEY": "sk", "LANGFUSE_DOMAIN": None}
NO_CREDENTIALS = {"LANGFUSE_PUBLIC_KEY": None, "LANGFUSE_PRIVATE_KEY": None}


@patch("mcp_server_langfuse.cli.configure_logging")
@patch("mcp_server_langfuse.cli.load_dotenv")
class TestCli(unittest.TestCase):
    """Tests for the mcp-server-langfuse command group."""

    def setUp(self):
        self.runner = CliRunner()

    def test_tools_lists_catalog(self, mock_load_dotenv, mock_configure_logging):
        result = self.runner.invoke(cli, ["tools"], env=NO_CREDENTIALS)

        self.assertEqual(result.exit_code, 0, result.output)
        for name in (
            "query_llm_metrics",
            "get_trace_by_id",
            "list_traces",
            "list_annotation_queues",
            "list_scores",
            "get_session",
            "get_projects",
        ):
            self.assertIn(name, result.output)
        self.assertIn("fromTimestamp", result.output)

    def test_serve_without_credentials_exits(self, mock_load_dotenv, mock_configure_logging):
        result = self.runner.invoke(cli, ["serve"], env=NO_CREDENTIALS)

        self.assertEqual(result.exit_code, 1)
        self.assertIn("LANGFUSE_PUBLIC_KEY", result.output)
        mock_configure_logging.assert_not_called()

    def test_default_command_is_serve(self, mock_load_dotenv, mock_configure_logging):
        result = self.runner.invoke(cli, [], env=NO_CREDENTIALS)

        self.assertEqual(result.exit_code, 1)
        self.assertIn("LANGFUSE_PRIVATE_KEY", result.output)

    @patch("mcp_server_langfuse.cli.anyio.run")
    @patch("mcp_server_langfuse.cli.LangfuseMCPServer")
    def test_serve_runs_stdio_server(self, mock_server_cls, mock_anyio_run, mock_load_dotenv, mock_configure_logging):
        result = self.runner.invoke(cli, ["--log-level", "debug", "serve"], env=CREDENTIALS)

        self.assertEqual(result.exit_code, 0, result.output)
        config = mock_server_cls.call_args[0][0]
        self.assertEqual(config.public_key, "pk")
        self.assertEqual(config.domain, "https://api.langfuse.com")
        mock_anyio_run.assert_called_once_with(mock_server_cls.return_value.run_stdio)
        mock_configure_logging.assert_called_once_with("DEBUG")
        mock_load_dotenv.assert_called_once()

    @patch("mcp_server_langfuse.server.LangfuseClient")
    def test_call_prints_result(self, mock_client_cls, mock_load_dotenv, mock_configure_logging):
        mock_client_cls.return_value.get_projects = AsyncMock(return_value={"data": [{"id": "p1"}]})

        result = self.runner.invoke(cli, ["call", "get_projects", "--parameters", "{}"], env=CREDENTIALS)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output.strip()), {"data": [{"id": "p1"}]})
        mock_client_cls.assert_called_once_with("https://api.langfuse.com", "pk", "sk")

    @patch("mcp_server_langfuse.server.LangfuseClient")
    def test_call_unknown_tool(self, mock_client_cls, mock_load_dotenv, mock_configure_logging):
        result = self.runner.invoke(cli, ["call", "nonexistent_tool"], env=CREDENTIALS)

        self.assertEqual(result.exit_code, 1)
        self.assertIn('{"error":"Unknown tool: nonexistent_tool"}', result.output)

    @patch("mcp_server_langfuse.server.LangfuseClient")
    def test_call_with_parameter_file(self, mock_client_cls, mock_load_dotenv, mock_configure_logging):
        mock_client_cls.return_value.get_trace_by_id = AsyncMock(return_value={"id": "t1"})

        with self.runner.isolated_filesystem():
            with open("params.json", "w") as f:
                json.dump({"traceId": "t1"}, f)

            result = self.runner.invoke(
                cli, ["call", "get_trace_by_id", "--parameter-file", "params.json"], env=CREDENTIALS
            )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output.strip()), {"id": "t1"})

    @patch("mcp_server_langfuse.cli.log")
    @patch("mcp_server_langfuse.server.LangfuseClient")
    def test_call_logs_result_dict(self, mock_client_cls, mock_log, mock_load_dotenv, mock_configure_logging):
        result = self.runner.invoke(cli, ["call", "nonexistent_tool"], env=CREDENTIALS)

        self.assertEqual(result.exit_code, 1)
        message = mock_log.debug.call_args[0][0]
        self.assertIn("'name': 'nonexistent_tool'", message)
        self.assertIn("'success': False", message)
        self.assertIn("'error_kind': 'dispatch'", message)

    def test_invalid_log_level_env_exits_cleanly(self, mock_load_dotenv, mock_configure_logging):
        env = dict(CREDENTIALS, LANGFUSE_LOG_LEVEL="VERBOSE")

        result = self.runner.invoke(cli, ["call", "get_projects"], env=env)

        self.assertEqual(result.exit_code, 1)
        self.assertIsInstance(result.exception, SystemExit)
        self.assertIn("LANGFUSE_LOG_LEVEL", result.output)
        mock_configure_logging.assert_not_called()

    def test_call_invalid_json(self, mock_load_dotenv, mock_configure_logging):
        result = self.runner.invoke(cli, ["call", "get_projects", "--parameters", "{not json"], env=CREDENTIALS)

        self.assertEqual(result.exit_code, 2)
        self.assertIn("Invalid JSON", result.output)

    def test_version(self, mock_load_dotenv, mock_configure_logging):
        result = self.runner.invoke(cli, ["--version"])

        self.assertEqual(result.exit_code, 0)
        self.assertIn("1.0.0", result.output)


if __name__ == "__main__":
    unittest.main()
