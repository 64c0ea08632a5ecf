"""Published style tools."""

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from ..client import FigmaClient
from ..formatters import format_error, format_response
from .common import FigmaInput, tool_annotations
from .components import TeamLibraryInput
from .files import FileKeyInput


class StyleKeyInput(FigmaInput):
    style_key: str = Field(..., description="The style key", min_length=1)


def register_style_tools(mcp: FastMCP, client: FigmaClient) -> None:
    @mcp.tool(name="figma_get_team_styles", annotations=tool_annotations("Get Team Styles"))
    async def figma_get_team_styles(params: TeamLibraryInput) -> CallToolResult:
        """Get all styles published to a team library.

        Covers color, text, effect and grid styles.

        Args:
            params: Team ID, optional page_size and cursor.

        Returns:
            Styles with keys, names, descriptions, and style types.
        """
        try:
            result = await client.get_team_styles(
                params.team_id, page_size=params.page_size, cursor=params.cursor
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)

    @mcp.tool(name="figma_get_file_styles", annotations=tool_annotations("Get File Styles"))
    async def figma_get_file_styles(params: FileKeyInput) -> CallToolResult:
        """Get all styles in a file.

        Args:
            params: The file key.

        Returns:
            List of styles with their metadata.
        """
        try:
            return format_response(await client.get_file_styles(params.file_key))
        except Exception as e:
            return format_error(e)

    @mcp.tool(name="figma_get_style", annotations=tool_annotations("Get Style"))
    async def figma_get_style(params: StyleKeyInput) -> CallToolResult:
        """Get metadata for a published style.

        Args:
            params: The style key.

        Returns:
            Style metadata including name, description, type, and file key.
        """
        try:
            return format_response(await client.get_style(params.style_key))
        except Exception as e:
            return format_error(e)
