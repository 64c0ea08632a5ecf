"""
Figma MCP Server
Exposes the Figma REST API as MCP tools over stateless streamable HTTP.

Each request carries its own Figma personal access token in the
``X-Figma-Token`` header, so one deployment can serve many tenants.
"""

__version__ = "1.0.0"
