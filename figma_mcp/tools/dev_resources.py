"""Dev resource tools: links from design nodes to code and docs."""

from typing import List, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field, field_validator

from ..client import FigmaClient
from ..formatters import format_error, format_response, format_success
from .common import FigmaInput, check_http_url, tool_annotations

# ─── Input Models ────────────────────────────────────────────────────────────


class GetDevResourcesInput(FigmaInput):
    file_key: str = Field(..., description="The file key", min_length=1)
    node_ids: Optional[List[str]] = Field(default=None, description="Filter by node IDs")


class NewDevResource(FigmaInput):
    name: str = Field(..., description="Resource name", min_length=1)
    url: str = Field(..., description="Resource URL")
    file_key: str = Field(..., description="File key", min_length=1)
    node_id: str = Field(..., description="Node ID to attach to", min_length=1)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return check_http_url(v)


class DevResourceUpdate(FigmaInput):
    id: str = Field(..., description="Resource ID", min_length=1)
    name: Optional[str] = Field(default=None, description="New name")
    url: Optional[str] = Field(default=None, description="New URL")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: Optional[str]) -> Optional[str]:
        return check_http_url(v) if v is not None else v


class CreateDevResourcesInput(FigmaInput):
    resources: List[NewDevResource] = Field(..., description="Resources to create", min_length=1)


class UpdateDevResourcesInput(FigmaInput):
    resources: List[DevResourceUpdate] = Field(..., description="Resources to update", min_length=1)


class DeleteDevResourceInput(FigmaInput):
    file_key: str = Field(..., description="The file key", min_length=1)
    dev_resource_id: str = Field(..., description="The dev resource ID", min_length=1)


# ─── Tools ───────────────────────────────────────────────────────────────────


def register_dev_resource_tools(mcp: FastMCP, client: FigmaClient) -> None:
    @mcp.tool(name="figma_get_dev_resources", annotations=tool_annotations("Get Dev Resources"))
    async def figma_get_dev_resources(params: GetDevResourcesInput) -> CallToolResult:
        """Get dev resources attached to nodes in a file.

        Dev resources are links to code, documentation and similar material.

        Args:
            params: File key and optional node ID filter.

        Returns:
            List of dev resources with URLs and associated node info.
        """
        try:
            result = await client.get_dev_resources(params.file_key, node_ids=params.node_ids)
            return format_response(result)
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_create_dev_resources",
        annotations=tool_annotations("Create Dev Resources", read_only=False, idempotent=False),
    )
    async def figma_create_dev_resources(params: CreateDevResourcesInput) -> CallToolResult:
        """Attach dev resources to design nodes.

        Args:
            params: Resources, each with name, url, file_key and node_id.

        Returns:
            The created dev resources (and any per-item errors).
        """
        try:
            resources = [r.model_dump() for r in params.resources]
            return format_response(await client.create_dev_resources(resources))
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_update_dev_resources",
        annotations=tool_annotations("Update Dev Resources", read_only=False),
    )
    async def figma_update_dev_resources(params: UpdateDevResourcesInput) -> CallToolResult:
        """Rename or re-point existing dev resources.

        Args:
            params: Resource updates, each with id and optional name, url.

        Returns:
            The updated dev resources.
        """
        try:
            resources = [r.model_dump(exclude_none=True) for r in params.resources]
            return format_response(await client.update_dev_resources(resources))
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_delete_dev_resource",
        annotations=tool_annotations("Delete Dev Resource", read_only=False, destructive=True),
    )
    async def figma_delete_dev_resource(params: DeleteDevResourceInput) -> CallToolResult:
        """Remove a dev resource link from a node.

        Args:
            params: File key and dev resource ID.

        Returns:
            Confirmation of deletion.
        """
        try:
            await client.delete_dev_resource(params.file_key, params.dev_resource_id)
            return format_success(
                f"Dev resource {params.dev_resource_id} deleted successfully"
            )
        except Exception as e:
            return format_error(e)
