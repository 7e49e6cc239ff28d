# mcp_discovery/mcp_tools/mcp_client.py
from __future__ import annotations
import logging
from contextlib import AsyncExitStack
from typing import Any, Awaitable, Callable, List, Optional

import anyio
from mcp.client.session import ClientSession
from mcp.client.stdio import StdioServerParameters, stdio_client
from mcp.shared.exceptions import McpError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config import settings
from ..errors import DiscoveryError, InvalidSchemaError, ServerLaunchError, ServerNotInitializedError
from ..models.server_info import (
    McpCapabilities,
    McpPrompt,
    McpPromptArgument,
    McpResource,
    McpResourceTemplate,
    McpServerInfo,
    McpToolMeta,
)
from .schema import tool_params

logger = logging.getLogger(__name__)


class MCPServerSession:
    """
    Launches one MCP server as a subprocess (stdio transport) and keeps an
    initialized client session open until stop().

    Use as an async context manager so the transport is torn down in the
    same task that opened it:

        async with MCPServerSession(["npx", "-y", "@modelcontextprotocol/server-everything"]) as s:
            info = await collect_server_info(s.session, s.init_result)
    """
    def __init__(self, argv: List[str]):
        if not isinstance(argv, list) or not argv:
            raise ServerLaunchError(f"Invalid MCP server launch command: {argv!r}")
        self.argv = argv
        self.session: Optional[ClientSession] = None
        self.init_result: Any = None
        self._stack: Optional[AsyncExitStack] = None

    async def start(self) -> Any:
        if self._stack is not None:
            return self.init_result
        self._stack = AsyncExitStack()

        # Split into executable and args
        cmd = self.argv[0]
        args = self.argv[1:]
        logger.debug("launching command : %s %s", cmd, " ".join(args))
        params = StdioServerParameters(command=cmd, args=args, env=None, cwd=None)

        try:
            read, write = await self._stack.enter_async_context(stdio_client(params))
            self.session = await self._stack.enter_async_context(ClientSession(read, write))
        except OSError as e:
            await self.stop()
            raise ServerLaunchError(f"Failed to launch MCP server '{cmd}': {e}") from e

        logger.debug("Launching MCP server ...")
        try:
            self.init_result = await self.session.initialize()
        except McpError as e:
            await self.stop()
            raise ServerNotInitializedError(f"The MCP Server failed to initialize successfully: {e}") from e

        if self.init_result is None or getattr(self.init_result, "serverInfo", None) is None:
            await self.stop()
            raise ServerNotInitializedError()

        logger.debug("MCP server started successfully.")
        return self.init_result

    async def stop(self) -> None:
        self.session = None
        # Close stdio contexts if we opened any
        if self._stack is not None:
            with anyio.move_on_after(1):
                try:
                    await self._stack.aclose()
                except Exception as e:
                    logger.debug("error while closing MCP server transport: %s", e)
            self._stack = None

    async def __aenter__(self) -> "MCPServerSession":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()


# ---------- capability listing ----------

async def _list_all(fetch: Callable[..., Awaitable[Any]], attr: str) -> List[Any]:
    """Follows nextCursor until the server stops paginating."""
    items: List[Any] = []
    cursor: Optional[str] = None
    while True:
        result = await (fetch(cursor=cursor) if cursor else fetch())
        items.extend(getattr(result, attr, None) or [])
        cursor = getattr(result, "nextCursor", None)
        if not cursor:
            return items


def capabilities_from(caps: Any) -> McpCapabilities:
    if caps is None:
        raise ServerNotInitializedError()
    return McpCapabilities(
        tools=getattr(caps, "tools", None) is not None,
        prompts=getattr(caps, "prompts", None) is not None,
        resources=getattr(caps, "resources", None) is not None,
        logging=getattr(caps, "logging", None) is not None,
        experimental=bool(getattr(caps, "experimental", None)),
    )


def tool_meta_from(tool: Any) -> McpToolMeta:
    try:
        params = tool_params(getattr(tool, "inputSchema", None))
    except InvalidSchemaError as e:
        logger.warning("Could not decode input schema of tool '%s': %s", tool.name, e)
        params = []
    return McpToolMeta(name=tool.name, description=getattr(tool, "description", None), params=params)


def prompt_from(prompt: Any) -> McpPrompt:
    arguments = [
        McpPromptArgument(
            name=a.name,
            description=getattr(a, "description", None),
            required=bool(getattr(a, "required", False)),
        )
        for a in (getattr(prompt, "arguments", None) or [])
    ]
    return McpPrompt(name=prompt.name, description=getattr(prompt, "description", None), arguments=arguments)


def resource_from(resource: Any) -> McpResource:
    return McpResource(
        name=resource.name,
        uri=str(resource.uri),
        description=getattr(resource, "description", None),
        mime_type=getattr(resource, "mimeType", None),
    )


def resource_template_from(template: Any) -> McpResourceTemplate:
    return McpResourceTemplate(
        name=template.name,
        uri_template=str(template.uriTemplate),
        description=getattr(template, "description", None),
        mime_type=getattr(template, "mimeType", None),
    )


async def collect_server_info(session: Any, init_result: Any) -> McpServerInfo:
    """
    Builds McpServerInfo from an initialized session. Each list is only
    requested when the matching capability is advertised; otherwise it stays
    None.
    """
    server_version = getattr(init_result, "serverInfo", None)
    if server_version is None:
        raise ServerNotInitializedError()
    logger.debug("Server: %s v%s", server_version.name, server_version.version)

    capabilities = capabilities_from(getattr(init_result, "capabilities", None))
    logger.debug("Capabilities: %s", capabilities)

    tools = None
    if capabilities.tools:
        logger.debug("retrieving tools...")
        tools = [tool_meta_from(t) for t in await _list_all(session.list_tools, "tools")]
        tools.sort(key=lambda t: t.name)

    prompts = None
    if capabilities.prompts:
        logger.debug("retrieving prompts...")
        prompts = [prompt_from(p) for p in await _list_all(session.list_prompts, "prompts")]

    resources = None
    resource_templates = None
    if capabilities.resources:
        logger.debug("retrieving resources...")
        resources = [resource_from(r) for r in await _list_all(session.list_resources, "resources")]

        logger.debug("retrieving resource templates...")
        try:
            raw_templates = await _list_all(session.list_resource_templates, "resourceTemplates")
            resource_templates = [resource_template_from(t) for t in raw_templates]
        except McpError as e:
            logger.debug("Unable to retrieve resource templates : %s", e)

    return McpServerInfo(
        name=server_version.name,
        version=server_version.version,
        capabilities=capabilities,
        tools=tools,
        prompts=prompts,
        resources=resources,
        resource_templates=resource_templates,
    )


@retry(
    retry=retry_if_exception_type(ServerLaunchError),
    stop=stop_after_attempt(settings.launch_retries),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    reraise=True,
)
async def discover_server(argv: List[str], timeout: Optional[float] = None) -> McpServerInfo:
    """Launches the server, collects its capabilities and shuts it down again."""
    timeout = settings.timeout if timeout is None else timeout
    try:
        with anyio.fail_after(timeout):
            async with MCPServerSession(argv) as server:
                return await collect_server_info(server.session, server.init_result)
    except TimeoutError as e:
        raise ServerLaunchError(
            f"Timed out after {timeout:g}s waiting for MCP server '{argv[0]}'"
        ) from e
    except DiscoveryError:
        raise
    except McpError as e:
        raise ServerNotInitializedError(f"The MCP Server failed to initialize successfully: {e}") from e
