"""Current user and connection check tools."""

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult

from ..client import FigmaClient
from ..formatters import format_error, format_response
from .common import tool_annotations


def register_user_tools(mcp: FastMCP, client: FigmaClient) -> None:
    @mcp.tool(name="figma_get_me", annotations=tool_annotations("Get Current User"))
    async def figma_get_me() -> CallToolResult:
        """Get the user associated with the access token.

        Returns:
            User info including id, handle, email, and profile image URL.
        """
        try:
            return format_response(await client.get_me())
        except Exception as e:
            return format_error(e)

    @mcp.tool(name="figma_test_connection", annotations=tool_annotations("Test Connection"))
    async def figma_test_connection() -> CallToolResult:
        """Test the connection to the Figma API and return the authenticated user info.

        Returns:
            {"connected": bool, "message": str, "user": {...}} ("user" only when connected).
        """
        try:
            return format_response(await client.test_connection())
        except Exception as e:
            return format_error(e)
