"""
Command line entry point for the Langfuse MCP server.
"""

import json
import logging
import sys
from typing import Any, Dict, Optional

import anyio
import click
from dotenv import find_dotenv, load_dotenv
from rich.console import Console

from . import SERVER_NAME, __version__
from .config import LOG_LEVEL_NAMES, LangfuseConfig
from .errors import ConfigurationError
from .log_config import configure_logging, stderr_console
from .server import LangfuseMCPServer
from .tools.catalog import get_tools

log = logging.getLogger(__name__)

console = Console()

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

LOG_LEVELS = click.Choice(LOG_LEVEL_NAMES, case_sensitive=False)


def _load_config(ctx: click.Context) -> LangfuseConfig:
    """Load the configuration and set up logging, or exit with status 1."""
    try:
        config = LangfuseConfig.from_env()
    except ConfigurationError as e:
        stderr_console.print(f"[bold red]ERROR:[/bold red] {e}")
        sys.exit(1)

    configure_logging(ctx.obj.get("LOG_LEVEL") or config.log_level)
    return config


@click.group(invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.option(
    "--log-level",
    type=LOG_LEVELS,
    default=None,
    help="Logging level. Overrides LANGFUSE_LOG_LEVEL.",
)
@click.version_option(__version__, prog_name=SERVER_NAME)
@click.pass_context
def cli(ctx, log_level):
    """MCP server for querying Langfuse traces, sessions, scores and metrics.

    Without a subcommand the server is started on stdio.
    """
    load_dotenv(find_dotenv(usecwd=True), override=False)

    ctx.ensure_object(dict)
    ctx.obj["LOG_LEVEL"] = log_level.upper() if log_level else None

    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


@cli.command()
@click.pass_context
def serve(ctx):
    """Serve the Langfuse tools over stdio."""
    config = _load_config(ctx)
    log.info(f"Starting {SERVER_NAME} v{__version__}")

    server = LangfuseMCPServer(config)
    try:
        anyio.run(server.run_stdio)
    except KeyboardInterrupt:
        log.info("Langfuse MCP Server shutting down.")


@cli.command("tools")
def list_tools():
    """List the available tools and their parameters."""
    console.print("\n[bold green]Available Tools[/bold green]:")
    for tool in get_tools():
        console.print(f"\n[bold blue]{tool.name}[/bold blue]: {tool.description}")
        if not tool.parameters:
            continue

        console.print("[bold]Parameters:[/bold]")
        for param in tool.parameters:
            is_required = "[bold red]*[/bold red]" if param.required else ""
            default = f" (default {param.default})" if param.default is not None else ""
            console.print(f"  - {param.name}{is_required} ({param.type}): {param.description}{default}")


@cli.command()
@click.argument("tool_name")
@click.option("--parameters", "-p", type=str, help="JSON object of arguments to pass to the tool.")
@click.option(
    "--parameter-file",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a JSON file containing arguments to pass to the tool.",
)
@click.pass_context
def call(ctx, tool_name, parameters, parameter_file):
    """Run a single tool and print its result."""
    arguments: Optional[Dict[str, Any]] = {}
    try:
        if parameters:
            arguments = json.loads(parameters)
        elif parameter_file:
            with open(parameter_file, "r") as f:
                arguments = json.load(f)
    except json.JSONDecodeError as e:
        stderr_console.print(f"[bold red]Error[/bold red]: Invalid JSON in parameters: {e}")
        sys.exit(2)

    config = _load_config(ctx)
    server = LangfuseMCPServer(config)

    result = anyio.run(server.executor.execute, tool_name, arguments)
    log.debug(f"Tool result: {result.to_dict()}")
    envelope = server.formatter.format_result(result)
    click.echo(envelope.content[0].text)

    if not result.success:
        sys.exit(1)


def main():
    cli(prog_name=SERVER_NAME)


if __name__ == "__main__":
    main()
