# mcp_discovery/orchestrator/discovery.py
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import IO, Awaitable, Callable, List, Optional

from ..errors import NotDiscoveredError
from ..mcp_tools.mcp_client import discover_server
from ..models.options import DiscoveryCommand, PrintOptions, WriteOptions
from ..models.server_info import McpServerInfo
from ..std_output import print_json, print_server_details
from ..update.document import update_document, write_atomically
from ..update.selector import match_template

logger = logging.getLogger(__name__)

Discoverer = Callable[[List[str]], Awaitable[McpServerInfo]]


class McpDiscovery:
    """
    Runs one discovery command: launch the MCP server, collect its
    capabilities, then print, create or update a document with them.

    `discoverer` defaults to launching the server over stdio; tests pass a
    coroutine that returns a ready-made McpServerInfo.
    """
    def __init__(
        self,
        command: DiscoveryCommand,
        discoverer: Optional[Discoverer] = None,
        out: Optional[IO[str]] = None,
    ):
        self.command = command
        self.server_info: Optional[McpServerInfo] = None
        self._discoverer = discoverer or discover_server
        self._out = out

    @property
    def out(self) -> IO[str]:
        return self._out or sys.stdout

    def _require_server_info(self) -> McpServerInfo:
        if self.server_info is None:
            raise NotDiscoveredError()
        return self.server_info

    async def start(self) -> None:
        await self.discover()

        action = self.command.action
        if action == "create":
            self.create_document(self.command.options)
        elif action == "update":
            self.update_document(self.command.options)
        else:
            self.print_server_capabilities(self.command.options)

    async def discover(self) -> McpServerInfo:
        self.server_info = await self._discoverer(self.command.mcp_launch_command)
        logger.debug(
            "Discovered %s v%s (%s)",
            self.server_info.name,
            self.server_info.version,
            self.server_info.capabilities,
        )
        return self.server_info

    def print_server_capabilities(self, print_options: PrintOptions) -> None:
        server_info = self._require_server_info()
        if print_options.json:
            print_json(self.out, server_info)
            return

        template = match_template(
            None,
            print_options.template,
            print_options.template_file,
            print_options.template_string,
        )
        if template.is_none:
            print_server_details(self.out, server_info)
            return
        self.out.write(template.render(server_info) + "\n")

    def create_document(self, create_options: WriteOptions) -> None:
        server_info = self._require_server_info()
        logger.debug("Creating '%s'", create_options.filename)

        template = match_template(
            create_options.filename,
            create_options.template,
            create_options.template_file,
            create_options.template_string,
        )
        content = template.render(server_info)
        write_atomically(create_options.filename, content)

        logger.info("File '%s' was created successfully.", create_options.filename)
        logger.info("Full path: %s", Path(create_options.filename).resolve())

    def update_document(self, update_options: WriteOptions) -> None:
        server_info = self._require_server_info()
        logger.debug("Updating '%s'", update_options.filename)

        info = update_document(update_options, server_info)

        logger.info(
            "File '%s' was updated successfully (%d render section%s).",
            update_options.filename,
            len(info.render_locations),
            "" if len(info.render_locations) == 1 else "s",
        )
