"""Tests for mcp_discovery.mcp_tools.mcp_client against an in-process stub session."""

from types import SimpleNamespace

import pytest
from mcp.shared.exceptions import McpError
from mcp.types import ErrorData

from mcp_discovery.errors import ServerLaunchError, ServerNotInitializedError
from mcp_discovery.mcp_tools.mcp_client import (
    MCPServerSession,
    capabilities_from,
    collect_server_info,
    resource_from,
    tool_meta_from,
)


def _tool(name, schema=None, description=None):
    return SimpleNamespace(name=name, description=description, inputSchema=schema)


class TestConverters:
    """Tests for SDK object to model conversion."""

    def test_capabilities_present_when_not_none(self):
        caps = SimpleNamespace(tools={}, prompts=None, resources={"subscribe": True}, logging={}, experimental=None)
        result = capabilities_from(caps)
        assert (result.tools, result.prompts, result.resources, result.logging, result.experimental) == (
            True, False, True, True, False,
        )

    def test_missing_capabilities(self):
        with pytest.raises(ServerNotInitializedError):
            capabilities_from(None)

    def test_tool_with_bad_schema_keeps_tool(self, caplog):
        tool = tool_meta_from(_tool("broken", {"type": "object", "properties": {"x": {"no": "type"}}}))
        assert tool.name == "broken"
        assert tool.params == []
        assert "broken" in caplog.text

    def test_resource_uri_is_string(self):
        resource = resource_from(SimpleNamespace(name="r", uri="file:///a.txt", description=None, mimeType="text/plain"))
        assert resource.uri == "file:///a.txt"
        assert resource.mime_type == "text/plain"


class TestCollectServerInfo:
    """Tests for capability-gated listing."""

    @pytest.mark.anyio
    async def test_only_advertised_capabilities_are_listed(self, stub_session_factory, make_init_result):
        session = stub_session_factory(tools=[[_tool("b"), _tool("a")]])
        info = await collect_server_info(session, make_init_result(name="srv", version="2.0", tools={}))

        assert (info.name, info.version) == ("srv", "2.0")
        assert [t.name for t in info.tools] == ["a", "b"]
        assert info.prompts is None
        assert info.resources is None
        assert info.resource_templates is None
        assert [c[0] for c in session.calls] == ["tools"]

    @pytest.mark.anyio
    async def test_pagination(self, stub_session_factory, make_init_result):
        prompt = lambda n: SimpleNamespace(name=n, description=None, arguments=None)  # noqa: E731
        session = stub_session_factory(prompts=[[prompt("p1")], [prompt("p2")], [prompt("p3")]])
        info = await collect_server_info(session, make_init_result(prompts={}))

        assert [p.name for p in info.prompts] == ["p1", "p2", "p3"]
        assert session.calls == [("prompts", None), ("prompts", "1"), ("prompts", "2")]

    @pytest.mark.anyio
    async def test_resources_and_templates(self, stub_session_factory, make_init_result):
        session = stub_session_factory(
            resources=[[SimpleNamespace(name="r", uri="test://r", description="d", mimeType=None)]],
            resource_templates=[[SimpleNamespace(name="t", uriTemplate="test://{id}", description=None, mimeType=None)]],
        )
        info = await collect_server_info(session, make_init_result(resources={}))

        assert info.resources[0].uri == "test://r"
        assert info.resource_templates[0].uri_template == "test://{id}"

    @pytest.mark.anyio
    async def test_resource_template_failure_is_tolerated(self, stub_session_factory, make_init_result):
        session = stub_session_factory(
            resources=[[]],
            resource_templates_error=McpError(ErrorData(code=-32601, message="Method not found")),
        )
        info = await collect_server_info(session, make_init_result(resources={}))

        assert info.resources == []
        assert info.resource_templates is None

    @pytest.mark.anyio
    async def test_missing_server_info(self, stub_session_factory):
        with pytest.raises(ServerNotInitializedError):
            await collect_server_info(stub_session_factory(), SimpleNamespace(serverInfo=None, capabilities=None))


class TestMCPServerSession:
    """Tests for launch command validation."""

    def test_empty_command(self):
        with pytest.raises(ServerLaunchError):
            MCPServerSession([])
