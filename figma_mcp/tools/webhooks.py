"""Webhook (v2) tools."""

from typing import Literal, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field, field_validator

from ..client import FigmaClient
from ..formatters import format_error, format_response, format_success
from .common import FigmaInput, check_http_url, tool_annotations

WebhookEventType = Literal[
    "FILE_UPDATE",
    "FILE_VERSION_UPDATE",
    "FILE_DELETE",
    "FILE_COMMENT",
    "LIBRARY_PUBLISH",
]
WebhookStatus = Literal["ACTIVE", "PAUSED"]

# ─── Input Models ────────────────────────────────────────────────────────────


class GetWebhooksInput(FigmaInput):
    team_id: Optional[str] = Field(default=None, description="Filter by team ID")


class CreateWebhookInput(FigmaInput):
    """Input for subscribing to team events."""

    event_type: WebhookEventType = Field(..., description="Event type to subscribe to")
    team_id: str = Field(..., description="Team ID to monitor", min_length=1)
    endpoint: str = Field(..., description="URL to receive webhook payloads")
    passcode: str = Field(..., description="Secret passcode echoed back in payloads", min_length=1)
    status: Optional[WebhookStatus] = Field(default=None, description="Webhook status")
    description: Optional[str] = Field(default=None, description="Webhook description")

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        return check_http_url(v)


class WebhookIdInput(FigmaInput):
    webhook_id: str = Field(..., description="The webhook ID", min_length=1)


class UpdateWebhookInput(WebhookIdInput):
    """Input for changing an existing webhook. Unset fields are left as they are."""

    event_type: Optional[WebhookEventType] = Field(default=None, description="Event type")
    endpoint: Optional[str] = Field(default=None, description="Endpoint URL")
    passcode: Optional[str] = Field(default=None, description="Passcode")
    status: Optional[WebhookStatus] = Field(default=None, description="Status")
    description: Optional[str] = Field(default=None, description="Description")

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: Optional[str]) -> Optional[str]:
        return check_http_url(v) if v is not None else v


# ─── Tools ───────────────────────────────────────────────────────────────────


def register_webhook_tools(mcp: FastMCP, client: FigmaClient) -> None:
    @mcp.tool(name="figma_get_webhooks", annotations=tool_annotations("List Webhooks"))
    async def figma_get_webhooks(params: GetWebhooksInput) -> CallToolResult:
        """List webhooks, optionally filtered by team.

        Args:
            params: Optional team ID.

        Returns:
            List of webhooks with their configurations.
        """
        try:
            return format_response(await client.get_webhooks(team_id=params.team_id))
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_create_webhook",
        annotations=tool_annotations("Create Webhook", read_only=False, idempotent=False),
    )
    async def figma_create_webhook(params: CreateWebhookInput) -> CallToolResult:
        """Create a webhook to receive notifications for file events.

        Event types: FILE_UPDATE, FILE_VERSION_UPDATE, FILE_DELETE,
        FILE_COMMENT, LIBRARY_PUBLISH.

        Args:
            params: Event type, team ID, endpoint URL, passcode and optional
                status (ACTIVE or PAUSED) and description.

        Returns:
            The created webhook configuration.
        """
        try:
            result = await client.create_webhook(
                event_type=params.event_type,
                team_id=params.team_id,
                endpoint=params.endpoint,
                passcode=params.passcode,
                status=params.status,
                description=params.description,
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)

    @mcp.tool(name="figma_get_webhook", annotations=tool_annotations("Get Webhook"))
    async def figma_get_webhook(params: WebhookIdInput) -> CallToolResult:
        """Get a specific webhook by ID.

        Args:
            params: The webhook ID.

        Returns:
            The webhook configuration.
        """
        try:
            return format_response(await client.get_webhook(params.webhook_id))
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_update_webhook",
        annotations=tool_annotations("Update Webhook", read_only=False),
    )
    async def figma_update_webhook(params: UpdateWebhookInput) -> CallToolResult:
        """Update an existing webhook.

        Args:
            params: Webhook ID plus any of event_type, endpoint, passcode,
                status and description.

        Returns:
            The updated webhook configuration.
        """
        try:
            result = await client.update_webhook(
                params.webhook_id,
                event_type=params.event_type,
                endpoint=params.endpoint,
                passcode=params.passcode,
                status=params.status,
                description=params.description,
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_delete_webhook",
        annotations=tool_annotations("Delete Webhook", read_only=False, destructive=True),
    )
    async def figma_delete_webhook(params: WebhookIdInput) -> CallToolResult:
        """Delete a webhook subscription permanently.

        Args:
            params: The webhook ID.

        Returns:
            Confirmation of deletion.
        """
        try:
            await client.delete_webhook(params.webhook_id)
            return format_success(f"Webhook {params.webhook_id} deleted successfully")
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_get_webhook_requests",
        annotations=tool_annotations("Get Webhook Requests"),
    )
    async def figma_get_webhook_requests(params: WebhookIdInput) -> CallToolResult:
        """Get recent webhook deliveries for debugging.

        Args:
            params: The webhook ID.

        Returns:
            Recent webhook requests with payloads and response statuses.
        """
        try:
            return format_response(await client.get_webhook_requests(params.webhook_id))
        except Exception as e:
            return format_error(e)
