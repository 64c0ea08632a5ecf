"""Team project and version history tools."""

from typing import Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from ..client import FigmaClient
from ..config import MAX_PAGE_SIZE
from ..formatters import format_error, format_response
from .common import FigmaInput, tool_annotations


class TeamInput(FigmaInput):
    """Input identifying a team."""

    team_id: str = Field(..., description="The team ID (from the team page URL)", min_length=1)


class GetProjectFilesInput(FigmaInput):
    project_id: str = Field(..., description="The project ID", min_length=1)
    branch_data: bool = Field(default=False, description="Include branch information")


class GetFileVersionsInput(FigmaInput):
    """Input for paging through a file's version history."""

    file_key: str = Field(..., description="The file key", min_length=1)
    page_size: Optional[int] = Field(
        default=None, description="Number of versions per page", ge=1, le=MAX_PAGE_SIZE
    )
    cursor: Optional[str] = Field(
        default=None, description="Pagination cursor from previous response"
    )


def register_project_tools(mcp: FastMCP, client: FigmaClient) -> None:
    @mcp.tool(name="figma_get_team_projects", annotations=tool_annotations("Get Team Projects"))
    async def figma_get_team_projects(params: TeamInput) -> CallToolResult:
        """Get all projects in a team.

        Args:
            params: The team ID.

        Returns:
            List of projects with their IDs and names.
        """
        try:
            return format_response(await client.get_team_projects(params.team_id))
        except Exception as e:
            return format_error(e)

    @mcp.tool(name="figma_get_project_files", annotations=tool_annotations("Get Project Files"))
    async def figma_get_project_files(params: GetProjectFilesInput) -> CallToolResult:
        """Get all files in a project.

        Args:
            params: The project ID and optional branch_data flag.

        Returns:
            List of files with their keys, names, thumbnails, and last modified dates.
        """
        try:
            result = await client.get_project_files(
                params.project_id, branch_data=params.branch_data
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)


def register_version_tools(mcp: FastMCP, client: FigmaClient) -> None:
    @mcp.tool(name="figma_get_file_versions", annotations=tool_annotations("Get File Versions"))
    async def figma_get_file_versions(params: GetFileVersionsInput) -> CallToolResult:
        """Get version history for a Figma file.

        Args:
            params: File key, optional page_size and cursor.

        Returns:
            List of versions with IDs, labels, descriptions, timestamps, and user info.
        """
        try:
            result = await client.get_file_versions(
                params.file_key, page_size=params.page_size, cursor=params.cursor
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)
