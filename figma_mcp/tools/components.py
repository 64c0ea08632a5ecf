"""Published component and component set tools."""

from typing import Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from ..client import FigmaClient
from ..config import MAX_PAGE_SIZE
from ..formatters import format_error, format_response
from .common import FigmaInput, tool_annotations
from .files import FileKeyInput


class TeamLibraryInput(FigmaInput):
    """Input for paging through a team library."""

    team_id: str = Field(..., description="The team ID", min_length=1)
    page_size: Optional[int] = Field(
        default=None, description="Number of items per page", ge=1, le=MAX_PAGE_SIZE
    )
    cursor: Optional[str] = Field(default=None, description="Pagination cursor")


class ComponentKeyInput(FigmaInput):
    component_key: str = Field(..., description="The component key", min_length=1)


class ComponentSetKeyInput(FigmaInput):
    component_set_key: str = Field(..., description="The component set key", min_length=1)


def register_component_tools(mcp: FastMCP, client: FigmaClient) -> None:
    @mcp.tool(
        name="figma_get_team_components",
        annotations=tool_annotations("Get Team Components"),
    )
    async def figma_get_team_components(params: TeamLibraryInput) -> CallToolResult:
        """Get all components published to a team library.

        Args:
            params: Team ID, optional page_size and cursor.

        Returns:
            Components with keys, names, descriptions, and thumbnails.
        """
        try:
            result = await client.get_team_components(
                params.team_id, page_size=params.page_size, cursor=params.cursor
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_get_file_components",
        annotations=tool_annotations("Get File Components"),
    )
    async def figma_get_file_components(params: FileKeyInput) -> CallToolResult:
        """Get all components in a file.

        Args:
            params: The file key.

        Returns:
            List of components with their metadata.
        """
        try:
            return format_response(await client.get_file_components(params.file_key))
        except Exception as e:
            return format_error(e)

    @mcp.tool(name="figma_get_component", annotations=tool_annotations("Get Component"))
    async def figma_get_component(params: ComponentKeyInput) -> CallToolResult:
        """Get metadata for a published component.

        Args:
            params: The component key.

        Returns:
            Component metadata including name, description, file key, and containing frame.
        """
        try:
            return format_response(await client.get_component(params.component_key))
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_get_team_component_sets",
        annotations=tool_annotations("Get Team Component Sets"),
    )
    async def figma_get_team_component_sets(params: TeamLibraryInput) -> CallToolResult:
        """Get all component sets (variant groups) published to a team library.

        Args:
            params: Team ID, optional page_size and cursor.

        Returns:
            List of component sets with metadata.
        """
        try:
            result = await client.get_team_component_sets(
                params.team_id, page_size=params.page_size, cursor=params.cursor
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_get_file_component_sets",
        annotations=tool_annotations("Get File Component Sets"),
    )
    async def figma_get_file_component_sets(params: FileKeyInput) -> CallToolResult:
        """Get all component sets in a file.

        Args:
            params: The file key.

        Returns:
            List of component sets with their metadata.
        """
        try:
            return format_response(await client.get_file_component_sets(params.file_key))
        except Exception as e:
            return format_error(e)

    @mcp.tool(name="figma_get_component_set", annotations=tool_annotations("Get Component Set"))
    async def figma_get_component_set(params: ComponentSetKeyInput) -> CallToolResult:
        """Get metadata for a published component set.

        Args:
            params: The component set key.

        Returns:
            Component set metadata including name, description, and containing frame.
        """
        try:
            return format_response(await client.get_component_set(params.component_set_key))
        except Exception as e:
            return format_error(e)
