"""MCP tool registrations, one tool per Figma API operation."""

from typing import Tuple

from mcp.server.fastmcp import FastMCP

from ..client import FigmaClient
from .analytics import register_analytics_tools
from .comments import register_comment_tools
from .components import register_component_tools
from .dev_resources import register_dev_resource_tools
from .files import register_file_tools
from .projects import register_project_tools, register_version_tools
from .styles import register_style_tools
from .users import register_user_tools
from .variables import register_variable_tools
from .webhooks import register_webhook_tools

TOOL_NAMES: Tuple[str, ...] = (
    # Files
    "figma_get_file",
    "figma_get_file_nodes",
    "figma_get_file_meta",
    "figma_get_images",
    "figma_get_image_fills",
    # Comments
    "figma_get_comments",
    "figma_post_comment",
    "figma_delete_comment",
    "figma_get_comment_reactions",
    "figma_post_comment_reaction",
    "figma_delete_comment_reaction",
    # Projects & Teams
    "figma_get_team_projects",
    "figma_get_project_files",
    # Versions
    "figma_get_file_versions",
    # Components
    "figma_get_team_components",
    "figma_get_file_components",
    "figma_get_component",
    "figma_get_team_component_sets",
    "figma_get_file_component_sets",
    "figma_get_component_set",
    # Styles
    "figma_get_team_styles",
    "figma_get_file_styles",
    "figma_get_style",
    # Webhooks
    "figma_get_webhooks",
    "figma_create_webhook",
    "figma_get_webhook",
    "figma_update_webhook",
    "figma_delete_webhook",
    "figma_get_webhook_requests",
    # Variables
    "figma_get_local_variables",
    "figma_get_published_variables",
    "figma_modify_variables",
    # Dev Resources
    "figma_get_dev_resources",
    "figma_create_dev_resources",
    "figma_update_dev_resources",
    "figma_delete_dev_resource",
    # Analytics
    "figma_get_activity_logs",
    "figma_get_payments",
    "figma_get_component_actions",
    "figma_get_component_usages",
    "figma_get_style_actions",
    "figma_get_style_usages",
    # Users
    "figma_get_me",
    "figma_test_connection",
)


def register_all_tools(mcp: FastMCP, client: FigmaClient) -> None:
    """Register every Figma tool on ``mcp``, bound to this request's ``client``."""
    register_file_tools(mcp, client)
    register_comment_tools(mcp, client)
    register_project_tools(mcp, client)
    register_version_tools(mcp, client)
    register_component_tools(mcp, client)
    register_style_tools(mcp, client)
    register_webhook_tools(mcp, client)
    register_variable_tools(mcp, client)
    register_dev_resource_tools(mcp, client)
    register_analytics_tools(mcp, client)
    register_user_tools(mcp, client)
