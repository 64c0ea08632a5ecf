"""File, node and image export tools."""

from typing import List, Literal, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from ..client import FigmaClient
from ..formatters import format_error, format_response
from .common import FigmaInput, tool_annotations

# ─── Input Models ────────────────────────────────────────────────────────────


class GetFileInput(FigmaInput):
    """Input for retrieving a whole Figma file."""

    file_key: str = Field(..., description="The file key from the Figma URL", min_length=1)
    version: Optional[str] = Field(default=None, description="Specific version ID to retrieve")
    ids: Optional[List[str]] = Field(
        default=None,
        description="Only return these node IDs (and their ancestors)",
    )
    depth: Optional[int] = Field(
        default=None, description="Depth of node tree to return", ge=1, le=4
    )
    geometry: Optional[Literal["paths"]] = Field(
        default=None, description="Set to 'paths' to export vector data"
    )
    plugin_data: Optional[str] = Field(
        default=None,
        description="Comma separated plugin IDs (or 'shared') whose data to include",
    )
    branch_data: bool = Field(default=False, description="Include branch metadata")


class GetFileNodesInput(FigmaInput):
    """Input for retrieving specific nodes of a file."""

    file_key: str = Field(..., description="The file key", min_length=1)
    ids: List[str] = Field(..., description="Node IDs to retrieve", min_length=1)
    version: Optional[str] = Field(default=None, description="Specific version ID")
    depth: Optional[int] = Field(default=None, description="Depth of node tree", ge=1, le=4)
    geometry: Optional[Literal["paths"]] = Field(
        default=None, description="Set to 'paths' to export vector data"
    )
    plugin_data: Optional[str] = Field(
        default=None, description="Plugin IDs (or 'shared') whose data to include"
    )


class FileKeyInput(FigmaInput):
    """Input for tools that only need a file key."""

    file_key: str = Field(..., description="The file key", min_length=1)


class GetImagesInput(FigmaInput):
    """Input for rendering nodes as images."""

    file_key: str = Field(..., description="The file key", min_length=1)
    ids: List[str] = Field(..., description="Node IDs to render", min_length=1)
    format: Literal["jpg", "png", "svg", "pdf"] = Field(default="png", description="Image format")
    scale: float = Field(default=1, description="Render scale", ge=0.01, le=4)
    svg_include_id: bool = Field(default=False, description="Include id attribute in SVG")
    svg_include_node_id: bool = Field(
        default=False, description="Include data-node-id attribute in SVG"
    )
    svg_simplify_stroke: bool = Field(default=False, description="Simplify strokes in SVG")
    contents_only: bool = Field(default=False, description="Exclude the containing frame")
    use_absolute_bounds: bool = Field(default=False, description="Use absolute bounds")
    version: Optional[str] = Field(default=None, description="Specific version ID")


# ─── Tools ───────────────────────────────────────────────────────────────────


def register_file_tools(mcp: FastMCP, client: FigmaClient) -> None:
    @mcp.tool(name="figma_get_file", annotations=tool_annotations("Get Figma File"))
    async def figma_get_file(params: GetFileInput) -> CallToolResult:
        """Get a Figma file by key.

        Returns the full document structure including all pages and layers.
        Use depth to limit how much of the node tree comes back.

        Args:
            params: File key plus optional version, ids, depth (1-4), geometry,
                plugin_data and branch_data.

        Returns:
            The complete file document with all nodes, components, and styles.
        """
        try:
            result = await client.get_file(
                params.file_key,
                version=params.version,
                ids=params.ids,
                depth=params.depth,
                geometry=params.geometry,
                plugin_data=params.plugin_data,
                branch_data=params.branch_data,
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)

    @mcp.tool(name="figma_get_file_nodes", annotations=tool_annotations("Get File Nodes"))
    async def figma_get_file_nodes(params: GetFileNodesInput) -> CallToolResult:
        """Get specific nodes from a Figma file.

        More efficient than fetching the entire file when you know the node IDs.

        Args:
            params: File key, node IDs and optional version, depth, geometry, plugin_data.

        Returns:
            The requested nodes with their properties and children.
        """
        try:
            result = await client.get_file_nodes(
                params.file_key,
                params.ids,
                version=params.version,
                depth=params.depth,
                geometry=params.geometry,
                plugin_data=params.plugin_data,
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)

    @mcp.tool(name="figma_get_file_meta", annotations=tool_annotations("Get File Metadata"))
    async def figma_get_file_meta(params: FileKeyInput) -> CallToolResult:
        """Get file metadata without the full document.

        Much faster than figma_get_file when only name, last modified date,
        thumbnail and version are needed.

        Args:
            params: The file key.

        Returns:
            File metadata including name, lastModified, thumbnailUrl, and version.
        """
        try:
            return format_response(await client.get_file_meta(params.file_key))
        except Exception as e:
            return format_error(e)

    @mcp.tool(name="figma_get_images", annotations=tool_annotations("Export Images"))
    async def figma_get_images(params: GetImagesInput) -> CallToolResult:
        """Export images from a Figma file.

        Renders nodes as jpg, png, svg or pdf at a scale between 0.01 and 4.

        Args:
            params: File key, node IDs, format (default png), scale (default 1)
                and optional SVG / bounds flags.

        Returns:
            URLs to the rendered images (valid for 14 days).
        """
        try:
            result = await client.get_images(
                params.file_key,
                params.ids,
                scale=params.scale,
                format=params.format,
                svg_include_id=params.svg_include_id,
                svg_include_node_id=params.svg_include_node_id,
                svg_simplify_stroke=params.svg_simplify_stroke,
                contents_only=params.contents_only,
                use_absolute_bounds=params.use_absolute_bounds,
                version=params.version,
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)

    @mcp.tool(name="figma_get_image_fills", annotations=tool_annotations("Get Image Fills"))
    async def figma_get_image_fills(params: FileKeyInput) -> CallToolResult:
        """Get download links for images used as fills in a file.

        Args:
            params: The file key.

        Returns:
            Map of image references to their download URLs.
        """
        try:
            return format_response(await client.get_image_fills(params.file_key))
        except Exception as e:
            return format_error(e)
