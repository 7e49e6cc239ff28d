# app.py
"""
mcp-discovery command line entry point.

    mcp-discovery -- npx -y @modelcontextprotocol/server-everything
    mcp-discovery create -f capabilities.md -- npx -y @modelcontextprotocol/server-everything
    mcp-discovery update -f README.md -t md-plain -- python my_server.py

Everything after `--` is the command that launches the MCP server.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import anyio
from rich.console import Console
from rich.text import Text

from mcp_discovery.config import APP_NAME, APP_VERSION, LOG_LEVELS, settings
from mcp_discovery.errors import DiscoveryError
from mcp_discovery.models.options import DiscoveryCommand, PrintOptions, Template, WriteOptions
from mcp_discovery.orchestrator.discovery import McpDiscovery

logger = logging.getLogger("mcp_discovery")

SDK_LOGGERS = ("mcp", "httpx", "anyio")

_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}


# --------------------------------------------------------------------------------------
# Argument parsing
# --------------------------------------------------------------------------------------

def _template_options(required_filename: bool) -> argparse.ArgumentParser:
    # SUPPRESS keeps a subcommand from resetting options given before it
    parent = argparse.ArgumentParser(add_help=False, argument_default=argparse.SUPPRESS)
    if required_filename:
        parent.add_argument("-f", "--filename", required=True, help="Target file to create or update.")

    group = parent.add_mutually_exclusive_group()
    group.add_argument(
        "-t", "--template",
        choices=[t.value for t in Template],
        help="Built-in template used to render the output.",
    )
    group.add_argument("-p", "--template-file", help="Path to a custom template file.")
    group.add_argument("-s", "--template-string", help="Template given inline on the command line.")
    if not required_filename:
        group.add_argument("--json", action="store_true", help="Print the server details as JSON.")

    parent.add_argument(
        "-l", "--log-level",
        choices=list(LOG_LEVELS),
        help=f"Logging verbosity (default: {settings.log_level}).",
    )
    return parent


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Discover the tools, prompts and resources of an MCP server and document them.",
        epilog="The MCP server launch command goes after '--'.",
        parents=[_template_options(required_filename=False)],
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    sub = parser.add_subparsers(dest="action", metavar="{print,create,update}")
    sub.add_parser(
        "print",
        help="Print the server capabilities to the terminal (default).",
        parents=[_template_options(required_filename=False)],
    )
    sub.add_parser(
        "create",
        help="Render the capabilities into a new file.",
        parents=[_template_options(required_filename=True)],
    )
    sub.add_parser(
        "update",
        help="Refresh the render sections of an existing file.",
        parents=[_template_options(required_filename=True)],
    )
    return parser


def split_launch_command(argv: List[str]) -> Tuple[List[str], List[str]]:
    """Splits argv at the first `--` into (cli args, MCP server command)."""
    if "--" not in argv:
        return list(argv), []
    idx = argv.index("--")
    return list(argv[:idx]), list(argv[idx + 1:])


def parse_command(argv: Optional[List[str]] = None) -> DiscoveryCommand:
    parser = build_parser()
    cli_args, mcp_server_cmd = split_launch_command(sys.argv[1:] if argv is None else argv)
    args = parser.parse_args(cli_args)

    if not mcp_server_cmd:
        parser.error("the MCP server launch command is required after '--'")

    template_name = getattr(args, "template", None)
    template_file = getattr(args, "template_file", None)
    common = dict(
        mcp_server_cmd=mcp_server_cmd,
        template=Template.from_name(template_name) if template_name else None,
        template_file=Path(template_file) if template_file else None,
        template_string=getattr(args, "template_string", None),
        log_level=getattr(args, "log_level", None),
    )

    action = args.action or "print"
    if action == "print":
        return DiscoveryCommand(action=action, options=PrintOptions(json=getattr(args, "json", False), **common))
    return DiscoveryCommand(action=action, options=WriteOptions(filename=Path(args.filename), **common))


# --------------------------------------------------------------------------------------
# Logging
# --------------------------------------------------------------------------------------

def configure_logging(level_name: Optional[str]) -> None:
    level_name = level_name or settings.log_level
    logging.basicConfig(
        level=_LEVELS.get(level_name, logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    sdk_level = logging.DEBUG if level_name == "trace" else logging.WARNING
    for name in SDK_LOGGERS:
        logging.getLogger(name).setLevel(sdk_level)


# --------------------------------------------------------------------------------------
# Entry
# --------------------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    command = parse_command(argv)
    configure_logging(command.log_level)

    err = Console(stderr=True, highlight=False)
    err.print(Text.assemble(("Launching: ", "bold"), (" ".join(command.mcp_launch_command), "cyan")))

    try:
        anyio.run(McpDiscovery(command).start)
    except DiscoveryError as e:
        logger.debug("discovery failed", exc_info=True)
        err.print(Text(f"Error: {e}", style="red"))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
