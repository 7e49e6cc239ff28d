# tests/conftest.py
from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

from mcp_discovery.models.server_info import (
    McpCapabilities,
    McpPrompt,
    McpPromptArgument,
    McpResource,
    McpResourceTemplate,
    McpServerInfo,
    McpToolMeta,
    McpToolParam,
    ParamType,
)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def server_info() -> McpServerInfo:
    return McpServerInfo(
        name="example-server",
        version="1.2.0",
        capabilities=McpCapabilities(tools=True, prompts=True, resources=True, logging=False, experimental=False),
        tools=[
            McpToolMeta(
                name="add",
                description="Adds two numbers.",
                params=[
                    McpToolParam("a", ParamType.primitive("number"), "First number", required=True),
                    McpToolParam("b", ParamType.primitive("number"), "Second number", required=True),
                ],
            ),
            McpToolMeta(name="echo", description="Echoes `message` back.", params=[
                McpToolParam("message", ParamType.primitive("string"), None, required=False),
            ]),
        ],
        prompts=[
            McpPrompt(name="simple_prompt", description="A prompt without arguments", arguments=[]),
            McpPrompt(name="complex_prompt", description="A prompt with arguments", arguments=[
                McpPromptArgument(name="temperature", description="Temperature setting", required=True),
            ]),
        ],
        resources=[
            McpResource(name="Resource 1", uri="test://static/resource/1", mime_type="text/plain"),
        ],
        resource_templates=[
            McpResourceTemplate(name="Static Resource", uri_template="test://static/resource/{id}"),
        ],
    )


@pytest.fixture
def minimal_server_info() -> McpServerInfo:
    return McpServerInfo(name="bare", version="0.0.1")


# --------------------------------------------------------------------------------------
# In-process stand-in for mcp.ClientSession (no subprocess, no network)
# --------------------------------------------------------------------------------------

class InProcessStubSession:
    """
    Serves canned list_* results. Each page list turns into one response;
    every page but the last carries a nextCursor so pagination is exercised.
    """
    def __init__(
        self,
        tools: Optional[List[List[Any]]] = None,
        prompts: Optional[List[List[Any]]] = None,
        resources: Optional[List[List[Any]]] = None,
        resource_templates: Optional[List[List[Any]]] = None,
        resource_templates_error: Optional[Exception] = None,
    ):
        self._pages: Dict[str, List[List[Any]]] = {
            "tools": tools or [[]],
            "prompts": prompts or [[]],
            "resources": resources or [[]],
            "resourceTemplates": resource_templates or [[]],
        }
        self._resource_templates_error = resource_templates_error
        self.calls: List[tuple] = []

    def _page(self, attr: str, cursor: Optional[str]) -> SimpleNamespace:
        pages = self._pages[attr]
        index = int(cursor) if cursor else 0
        next_cursor = str(index + 1) if index + 1 < len(pages) else None
        return SimpleNamespace(**{attr: pages[index], "nextCursor": next_cursor})

    async def list_tools(self, cursor: Optional[str] = None):
        self.calls.append(("tools", cursor))
        return self._page("tools", cursor)

    async def list_prompts(self, cursor: Optional[str] = None):
        self.calls.append(("prompts", cursor))
        return self._page("prompts", cursor)

    async def list_resources(self, cursor: Optional[str] = None):
        self.calls.append(("resources", cursor))
        return self._page("resources", cursor)

    async def list_resource_templates(self, cursor: Optional[str] = None):
        self.calls.append(("resourceTemplates", cursor))
        if self._resource_templates_error is not None:
            raise self._resource_templates_error
        return self._page("resourceTemplates", cursor)


def init_result(name: str = "stub", version: str = "0.1.0", **capabilities: Any) -> SimpleNamespace:
    caps = dict(tools=None, prompts=None, resources=None, logging=None, experimental=None)
    caps.update(capabilities)
    return SimpleNamespace(
        serverInfo=SimpleNamespace(name=name, version=version),
        capabilities=SimpleNamespace(**caps),
    )


@pytest.fixture
def stub_session_factory():
    return InProcessStubSession


@pytest.fixture
def make_init_result():
    return init_result
