"""Tests for FigmaClient request building and response classification."""

import httpx
import pytest

from figma_mcp.client import DEFAULT_RETRY_AFTER, FigmaClient
from figma_mcp.credentials import TenantCredentials
from figma_mcp.errors import (
    AuthenticationError,
    ErrorKind,
    FigmaApiError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    RateLimitError,
)

from .conftest import TEST_TOKEN


class TestRequestBuilding:
    @pytest.mark.asyncio
    async def test_get_file_sends_token_and_depth(self, client, figma_api):
        figma_api.add("GET", "/v1/files/abc", json_body={"name": "Design"})

        result = await client.get_file("abc", depth=2)

        assert result == {"name": "Design"}
        request = figma_api.last_request
        assert str(request.url) == "https://api.figma.com/v1/files/abc?depth=2"
        assert request.headers["X-Figma-Token"] == TEST_TOKEN

    @pytest.mark.asyncio
    async def test_unset_options_and_false_flags_are_omitted(self, client, figma_api):
        figma_api.add("GET", "/v1/files/abc", json_body={})

        await client.get_file("abc", branch_data=False)

        assert figma_api.last_request.url.query == b""

    @pytest.mark.asyncio
    async def test_list_options_are_comma_joined(self, client, figma_api):
        figma_api.add("GET", "/v1/images/abc", json_body={"images": {}})

        await client.get_images("abc", ["1:2", "3:4"], scale=2.0, format="svg", svg_include_id=True)

        params = figma_api.last_request.url.params
        assert params["ids"] == "1:2,3:4"
        assert params["scale"] == "2"
        assert params["format"] == "svg"
        assert params["svg_include_id"] == "true"
        assert "contents_only" not in params

    @pytest.mark.asyncio
    async def test_post_comment_body(self, client, figma_api):
        figma_api.add("POST", "/v1/files/abc/comments", json_body={"id": "c1"})

        await client.post_comment("abc", "Looks good", client_meta={"node_id": "1:2"})

        assert figma_api.last_request.method == "POST"
        assert figma_api.last_json() == {"message": "Looks good", "client_meta": {"node_id": "1:2"}}

    @pytest.mark.asyncio
    async def test_delete_comment_reaction_passes_emoji_as_query(self, client, figma_api):
        figma_api.add("DELETE", "/v1/files/abc/comments/c1/reactions", status=200, json_body={})

        await client.delete_comment_reaction("abc", "c1", ":heart:")

        request = figma_api.last_request
        assert request.method == "DELETE"
        assert request.url.params["emoji"] == ":heart:"

    @pytest.mark.asyncio
    async def test_create_webhook_body(self, client, figma_api):
        figma_api.add("POST", "/v2/webhooks", json_body={"id": "w1"})

        result = await client.create_webhook(
            event_type="FILE_UPDATE",
            team_id="t1",
            endpoint="https://hooks.example.com/figma",
            passcode="secret",
        )

        assert result == {"id": "w1"}
        assert figma_api.last_json() == {
            "event_type": "FILE_UPDATE",
            "team_id": "t1",
            "endpoint": "https://hooks.example.com/figma",
            "passcode": "secret",
        }

    @pytest.mark.asyncio
    async def test_update_webhook_sends_only_given_fields(self, client, figma_api):
        figma_api.add("PUT", "/v2/webhooks/w1", json_body={"id": "w1", "status": "PAUSED"})

        await client.update_webhook("w1", status="PAUSED")

        assert figma_api.last_request.method == "PUT"
        assert figma_api.last_json() == {"status": "PAUSED"}

    @pytest.mark.asyncio
    async def test_post_variables_uses_api_field_names(self, client, figma_api):
        figma_api.add("POST", "/v1/files/abc/variables", json_body={"status": 200})

        await client.post_variables(
            "abc", variables=[{"action": "DELETE", "id": "VariableID:1"}]
        )

        assert figma_api.last_json() == {"variables": [{"action": "DELETE", "id": "VariableID:1"}]}

    @pytest.mark.asyncio
    async def test_update_dev_resources_wraps_list(self, client, figma_api):
        figma_api.add("PUT", "/v1/dev_resources", json_body={"links_updated": ["d1"]})

        await client.update_dev_resources([{"id": "d1", "name": "Storybook"}])

        assert figma_api.last_json() == {"dev_resources": [{"id": "d1", "name": "Storybook"}]}

    @pytest.mark.asyncio
    async def test_activity_log_params(self, client, figma_api):
        figma_api.add("GET", "/v1/activity_logs", json_body={"meta": {}})

        await client.get_activity_logs(event_type="fig_file.view", limit=50, order="desc")

        params = figma_api.last_request.url.params
        assert dict(params) == {"event_type": "fig_file.view", "limit": "50", "order": "desc"}

    @pytest.mark.asyncio
    async def test_library_actions_path_and_dates(self, client, figma_api):
        figma_api.add("GET", "/v1/analytics/libraries/lib1/component/actions", json_body={})

        await client.get_component_actions("lib1", group_by="component", start_date="2024-01-01")

        params = figma_api.last_request.url.params
        assert params["group_by"] == "component"
        assert params["start_date"] == "2024-01-01"
        assert "end_date" not in params

    @pytest.mark.asyncio
    async def test_base_url_override(self, figma_api):
        credentials = TenantCredentials(
            access_token=TEST_TOKEN, base_url="https://figma.internal.example.com"
        )
        client = FigmaClient(credentials, transport=figma_api.transport)
        figma_api.add("GET", "/v1/me", json_body={"id": "u1"})

        await client.get_me()

        assert figma_api.last_request.url.host == "figma.internal.example.com"

    @pytest.mark.asyncio
    async def test_missing_token_never_reaches_upstream(self, figma_api):
        client = FigmaClient(TenantCredentials(), transport=figma_api.transport)

        with pytest.raises(AuthenticationError):
            await client.get_me()

        assert figma_api.requests == []


class TestResponseHandling:
    @pytest.mark.asyncio
    async def test_no_content_returns_none(self, client, figma_api):
        figma_api.add("DELETE", "/v2/webhooks/w1", status=204)

        assert await client.delete_webhook("w1") is None

    @pytest.mark.asyncio
    async def test_rate_limit_uses_retry_after_header(self, client, figma_api):
        figma_api.add("GET", "/v1/me", status=429, headers={"Retry-After": "17"})

        with pytest.raises(RateLimitError) as exc_info:
            await client.get_me()

        assert exc_info.value.retry_after == 17
        assert exc_info.value.retryable is True
        assert exc_info.value.kind is ErrorKind.RATE_LIMIT

    @pytest.mark.asyncio
    @pytest.mark.parametrize("retry_after", [None, "soon"])
    async def test_rate_limit_default_retry_after(self, client, figma_api, retry_after):
        headers = {"Retry-After": retry_after} if retry_after else {}
        figma_api.add("GET", "/v1/me", status=429, headers=headers)

        with pytest.raises(RateLimitError) as exc_info:
            await client.get_me()

        assert exc_info.value.retry_after == DEFAULT_RETRY_AFTER

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status, error_class, kind",
        [
            (401, AuthenticationError, ErrorKind.AUTHENTICATION),
            (403, ForbiddenError, ErrorKind.FORBIDDEN),
            (404, NotFoundError, ErrorKind.NOT_FOUND),
        ],
    )
    async def test_status_classification(self, client, figma_api, status, error_class, kind):
        figma_api.add("GET", "/v1/files/abc", status=status, json_body={"err": "nope"})

        with pytest.raises(error_class) as exc_info:
            await client.get_file("abc")

        assert exc_info.value.kind is kind
        assert exc_info.value.status_code == status
        assert exc_info.value.retryable is False

    @pytest.mark.asyncio
    async def test_not_found_names_the_path(self, client):
        # Unrouted paths answer 404 in the fake API.
        with pytest.raises(NotFoundError) as exc_info:
            await client.get_file("missing")

        assert str(exc_info.value) == "Resource not found: /v1/files/missing"
        assert exc_info.value.to_dict()["path"] == "/v1/files/missing"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body, expected",
        [
            ({"message": "Invalid depth", "err": "other"}, "Invalid depth"),
            ({"err": "Bad node id"}, "Bad node id"),
            ({"error": "Something broke"}, "Something broke"),
            ({"error": True, "status": 400}, "API error: 400"),
        ],
    )
    async def test_error_message_extraction(self, client, figma_api, body, expected):
        figma_api.add("GET", "/v1/files/abc", status=400, json_body=body)

        with pytest.raises(FigmaApiError) as exc_info:
            await client.get_file("abc")

        assert exc_info.value.message == expected
        assert exc_info.value.kind is ErrorKind.API
        assert exc_info.value.retryable is False

    @pytest.mark.asyncio
    async def test_server_error_without_json_is_retryable(self, client, figma_api):
        figma_api.add("GET", "/v1/me", status=502, content=b"<html>Bad Gateway</html>")

        with pytest.raises(FigmaApiError) as exc_info:
            await client.get_me()

        assert exc_info.value.message == "API error: 502"
        assert exc_info.value.status_code == 502
        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    async def test_invalid_json_on_success(self, client, figma_api):
        figma_api.add("GET", "/v1/me", status=200, content=b"not json")

        with pytest.raises(FigmaApiError):
            await client.get_me()

    @pytest.mark.asyncio
    async def test_connection_failure_is_network_error(self, client, figma_api):
        figma_api.fail("GET", "/v1/me", httpx.ConnectError("Connection refused"))

        with pytest.raises(NetworkError) as exc_info:
            await client.get_me()

        assert exc_info.value.retryable is True
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(self, client, figma_api):
        figma_api.fail("GET", "/v1/me", httpx.ReadTimeout("timed out"))

        with pytest.raises(NetworkError, match="timed out"):
            await client.get_me()


class TestConnection:
    @pytest.mark.asyncio
    async def test_connected(self, client, figma_api):
        figma_api.add("GET", "/v1/me", json_body={"id": "u1", "handle": "ada"})

        result = await client.test_connection()

        assert result == {
            "connected": True,
            "message": "Successfully connected to Figma API",
            "user": {"id": "u1", "handle": "ada"},
        }

    @pytest.mark.asyncio
    async def test_rejected_token(self, client, figma_api):
        figma_api.add("GET", "/v1/me", status=401)

        result = await client.test_connection()

        assert result["connected"] is False
        assert "Authentication failed" in result["message"]
        assert "user" not in result

    @pytest.mark.asyncio
    async def test_token_that_cannot_be_sent(self, figma_api):
        client = FigmaClient(TenantCredentials(access_token="tök"), transport=figma_api.transport)
        figma_api.add("GET", "/v1/me", json_body={"id": "u1"})

        result = await client.test_connection()

        assert result["connected"] is False
        assert result["message"]
        assert figma_api.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error, message",
        [(RuntimeError("boom"), "boom"), (RuntimeError(), "RuntimeError")],
    )
    async def test_unexpected_failure_is_reported(self, client, figma_api, error, message):
        figma_api.fail("GET", "/v1/me", error)

        result = await client.test_connection()

        assert result == {"connected": False, "message": message}
