"""Organization tools: activity logs, payments and library analytics."""

from typing import List, Literal, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from ..client import FigmaClient
from ..formatters import format_error, format_response
from .common import FigmaInput, tool_annotations

# ─── Input Models ────────────────────────────────────────────────────────────


class GetActivityLogsInput(FigmaInput):
    """Input for reading organization audit events."""

    event_type: Optional[str] = Field(default=None, description="Filter by event type")
    limit: Optional[int] = Field(default=None, description="Number of events", ge=1, le=1000)
    order: Optional[Literal["asc", "desc"]] = Field(default=None, description="Sort order")


class GetPaymentsInput(FigmaInput):
    user_ids: Optional[List[str]] = Field(default=None, description="Filter by user IDs")


class LibraryUsagesInput(FigmaInput):
    """Input for library usage analytics."""

    file_key: str = Field(..., description="The library file key", min_length=1)
    cursor: Optional[str] = Field(default=None, description="Pagination cursor")
    group_by: Optional[str] = Field(
        default=None,
        description="Dimension to group by, e.g. 'component', 'style', 'file' or 'team'",
    )


class LibraryActionsInput(LibraryUsagesInput):
    """Input for library action analytics (inserts and detaches)."""

    start_date: Optional[str] = Field(
        default=None, description="ISO 8601 start date, e.g. '2024-01-31'"
    )
    end_date: Optional[str] = Field(default=None, description="ISO 8601 end date")


# ─── Tools ───────────────────────────────────────────────────────────────────


def register_analytics_tools(mcp: FastMCP, client: FigmaClient) -> None:
    @mcp.tool(name="figma_get_activity_logs", annotations=tool_annotations("Get Activity Logs"))
    async def figma_get_activity_logs(params: GetActivityLogsInput) -> CallToolResult:
        """Get organization activity log events.

        Requires organization admin permissions.

        Args:
            params: Optional event_type, limit (1-1000) and order ('asc' or 'desc').

        Returns:
            Activity log entries with actor, event type, and entity info.
        """
        try:
            result = await client.get_activity_logs(
                event_type=params.event_type, limit=params.limit, order=params.order
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)

    @mcp.tool(name="figma_get_payments", annotations=tool_annotations("Get Payments"))
    async def figma_get_payments(params: GetPaymentsInput) -> CallToolResult:
        """Get payment status for users.

        Args:
            params: Optional user ID filter.

        Returns:
            Payment information for users.
        """
        try:
            return format_response(await client.get_payments(user_ids=params.user_ids))
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_get_component_actions",
        annotations=tool_annotations("Get Component Actions"),
    )
    async def figma_get_component_actions(params: LibraryActionsInput) -> CallToolResult:
        """Get component insert and detach analytics for a library.

        Args:
            params: Library file key, optional cursor, group_by and date range.

        Returns:
            Component action data with counts of inserts and detaches.
        """
        try:
            result = await client.get_component_actions(
                params.file_key,
                cursor=params.cursor,
                group_by=params.group_by,
                start_date=params.start_date,
                end_date=params.end_date,
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_get_component_usages",
        annotations=tool_annotations("Get Component Usages"),
    )
    async def figma_get_component_usages(params: LibraryUsagesInput) -> CallToolResult:
        """Get analytics on how library components are used across files.

        Args:
            params: Library file key, optional cursor and group_by.

        Returns:
            Component usage data with file and instance counts.
        """
        try:
            result = await client.get_component_usages(
                params.file_key, cursor=params.cursor, group_by=params.group_by
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)

    @mcp.tool(name="figma_get_style_actions", annotations=tool_annotations("Get Style Actions"))
    async def figma_get_style_actions(params: LibraryActionsInput) -> CallToolResult:
        """Get style insert and detach analytics for a library.

        Args:
            params: Library file key, optional cursor, group_by and date range.

        Returns:
            Style action data with counts of inserts and detaches.
        """
        try:
            result = await client.get_style_actions(
                params.file_key,
                cursor=params.cursor,
                group_by=params.group_by,
                start_date=params.start_date,
                end_date=params.end_date,
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)

    @mcp.tool(name="figma_get_style_usages", annotations=tool_annotations("Get Style Usages"))
    async def figma_get_style_usages(params: LibraryUsagesInput) -> CallToolResult:
        """Get analytics on how library styles are used across files.

        Args:
            params: Library file key, optional cursor and group_by.

        Returns:
            Style usage data with file and usage counts.
        """
        try:
            result = await client.get_style_usages(
                params.file_key, cursor=params.cursor, group_by=params.group_by
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)
