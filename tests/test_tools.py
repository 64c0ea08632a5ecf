"""End-to-end tool tests over an in-memory MCP session."""

import json

import pytest
from mcp.shared.memory import create_connected_server_and_client_session

from figma_mcp.credentials import TenantCredentials
from figma_mcp.server import create_figma_server
from figma_mcp.tools import TOOL_NAMES

from .conftest import TEST_TOKEN


def _server(figma_api, token=TEST_TOKEN):
    return create_figma_server(
        TenantCredentials(access_token=token), transport=figma_api.transport
    )


def _payload(result):
    return json.loads(result.content[0].text)


@pytest.mark.asyncio
async def test_all_tools_are_listed(figma_api):
    async with create_connected_server_and_client_session(_server(figma_api)) as session:
        result = await session.list_tools()

    names = [tool.name for tool in result.tools]
    assert len(TOOL_NAMES) == 44
    assert sorted(names) == sorted(TOOL_NAMES)


@pytest.mark.asyncio
async def test_tool_annotations(figma_api):
    async with create_connected_server_and_client_session(_server(figma_api)) as session:
        tools = {tool.name: tool for tool in (await session.list_tools()).tools}

    get_file = tools["figma_get_file"].annotations
    assert get_file.readOnlyHint is True
    assert get_file.openWorldHint is True

    delete_webhook = tools["figma_delete_webhook"].annotations
    assert delete_webhook.readOnlyHint is False
    assert delete_webhook.destructiveHint is True


@pytest.mark.asyncio
async def test_get_file_success(figma_api):
    figma_api.add("GET", "/v1/files/abc", json_body={"name": "Design System"})

    async with create_connected_server_and_client_session(_server(figma_api)) as session:
        result = await session.call_tool(
            "figma_get_file", {"params": {"file_key": "abc", "depth": 2}}
        )

    assert result.isError is False
    assert _payload(result) == {"name": "Design System"}
    assert figma_api.last_request.url.params["depth"] == "2"


@pytest.mark.asyncio
async def test_invalid_input_never_reaches_upstream(figma_api):
    async with create_connected_server_and_client_session(_server(figma_api)) as session:
        result = await session.call_tool(
            "figma_get_file", {"params": {"file_key": "abc", "depth": 9}}
        )

    assert result.isError is True
    assert figma_api.requests == []


@pytest.mark.asyncio
async def test_upstream_error_becomes_error_envelope(figma_api):
    figma_api.add("GET", "/v1/files/abc", status=403, json_body={"err": "Forbidden"})

    async with create_connected_server_and_client_session(_server(figma_api)) as session:
        result = await session.call_tool("figma_get_file", {"params": {"file_key": "abc"}})

    assert result.isError is True
    payload = _payload(result)
    assert payload["error"].startswith("Error: Access forbidden")
    assert payload["details"]["code"] == "FORBIDDEN"
    assert payload["details"]["status_code"] == 403


@pytest.mark.asyncio
async def test_post_comment_builds_client_meta(figma_api):
    figma_api.add("POST", "/v1/files/abc/comments", json_body={"id": "c1"})

    async with create_connected_server_and_client_session(_server(figma_api)) as session:
        result = await session.call_tool(
            "figma_post_comment",
            {"params": {"file_key": "abc", "message": "Nice", "node_id": "1:2", "x": 10}},
        )

    assert result.isError is False
    assert figma_api.last_json() == {
        "message": "Nice",
        "client_meta": {"node_id": "1:2", "x": 10.0},
    }


@pytest.mark.asyncio
async def test_post_comment_without_position(figma_api):
    figma_api.add("POST", "/v1/files/abc/comments", json_body={"id": "c2"})

    async with create_connected_server_and_client_session(_server(figma_api)) as session:
        await session.call_tool(
            "figma_post_comment",
            {"params": {"file_key": "abc", "message": "Reply", "comment_id": "c1"}},
        )

    assert figma_api.last_json() == {"message": "Reply", "comment_id": "c1"}


@pytest.mark.asyncio
async def test_delete_comment_confirms(figma_api):
    figma_api.add("DELETE", "/v1/files/abc/comments/c1", status=204)

    async with create_connected_server_and_client_session(_server(figma_api)) as session:
        result = await session.call_tool(
            "figma_delete_comment", {"params": {"file_key": "abc", "comment_id": "c1"}}
        )

    assert result.isError is False
    assert _payload(result) == {"success": True, "message": "Comment c1 deleted successfully"}


@pytest.mark.asyncio
async def test_create_webhook_rejects_bad_endpoint(figma_api):
    async with create_connected_server_and_client_session(_server(figma_api)) as session:
        result = await session.call_tool(
            "figma_create_webhook",
            {
                "params": {
                    "event_type": "FILE_UPDATE",
                    "team_id": "t1",
                    "endpoint": "not a url",
                    "passcode": "secret",
                }
            },
        )

    assert result.isError is True
    assert figma_api.requests == []


@pytest.mark.asyncio
async def test_rate_limit_reports_retry_after(figma_api):
    figma_api.add("GET", "/v1/me", status=429, headers={"Retry-After": "5"})

    async with create_connected_server_and_client_session(_server(figma_api)) as session:
        result = await session.call_tool("figma_get_me", {})

    payload = _payload(result)
    assert result.isError is True
    assert payload["error"] == "Error: Rate limit exceeded (retryable)"
    assert payload["details"]["retry_after"] == 5


@pytest.mark.asyncio
async def test_test_connection_reports_failure_without_error_flag(figma_api):
    figma_api.add("GET", "/v1/me", status=401)

    async with create_connected_server_and_client_session(_server(figma_api)) as session:
        result = await session.call_tool("figma_test_connection", {})

    assert result.isError is False
    assert _payload(result)["connected"] is False


@pytest.mark.asyncio
async def test_modify_variables_sends_only_given_changes(figma_api):
    figma_api.add("POST", "/v1/files/abc/variables", json_body={"status": 200, "error": False})

    async with create_connected_server_and_client_session(_server(figma_api)) as session:
        result = await session.call_tool(
            "figma_modify_variables",
            {
                "params": {
                    "file_key": "abc",
                    "variables": [{"action": "DELETE", "id": "VariableID:1:2"}],
                }
            },
        )

    assert result.isError is False
    assert figma_api.last_json() == {"variables": [{"action": "DELETE", "id": "VariableID:1:2"}]}


@pytest.mark.asyncio
async def test_tool_arguments_are_nested_under_params(figma_api):
    async with create_connected_server_and_client_session(_server(figma_api)) as session:
        tools = {tool.name: tool for tool in (await session.list_tools()).tools}

    get_file_schema = tools["figma_get_file"].inputSchema
    assert list(get_file_schema["properties"]) == ["params"]
    assert get_file_schema["required"] == ["params"]
    assert tools["figma_get_me"].inputSchema["properties"] == {}
