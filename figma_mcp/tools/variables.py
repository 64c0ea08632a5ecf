"""Variable tools: read local/published variables and apply bulk changes."""

from typing import Any, Dict, List, Literal, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import BaseModel, ConfigDict, Field

from ..client import FigmaClient
from ..formatters import format_error, format_response
from .common import FigmaInput, tool_annotations
from .files import FileKeyInput

Action = Literal["CREATE", "UPDATE", "DELETE"]

# ─── Input Models ────────────────────────────────────────────────────────────


class _Change(BaseModel):
    model_config = ConfigDict(extra="forbid")


class VariableCollectionChange(_Change):
    action: Action = Field(..., description="Operation type")
    id: Optional[str] = Field(default=None, description="Collection ID (required for UPDATE/DELETE)")
    name: Optional[str] = Field(default=None, description="Collection name")
    initialModeId: Optional[str] = Field(default=None, description="Initial mode ID for CREATE")


class VariableModeChange(_Change):
    action: Action = Field(..., description="Operation type")
    id: Optional[str] = Field(default=None, description="Mode ID (required for UPDATE/DELETE)")
    variableCollectionId: Optional[str] = Field(
        default=None, description="Collection ID (required for CREATE)"
    )
    name: Optional[str] = Field(default=None, description="Mode name")


class VariableChange(_Change):
    action: Action = Field(..., description="Operation type")
    id: Optional[str] = Field(default=None, description="Variable ID (required for UPDATE/DELETE)")
    name: Optional[str] = Field(default=None, description="Variable name")
    variableCollectionId: Optional[str] = Field(
        default=None, description="Collection ID (required for CREATE)"
    )
    resolvedType: Optional[Literal["BOOLEAN", "FLOAT", "STRING", "COLOR"]] = Field(
        default=None, description="Variable type"
    )
    description: Optional[str] = Field(default=None, description="Variable description")
    hiddenFromPublishing: Optional[bool] = Field(default=None, description="Hide from publishing")
    scopes: Optional[List[str]] = Field(default=None, description="Variable scopes")
    codeSyntax: Optional[Dict[str, str]] = Field(default=None, description="Code syntax mapping")


class VariableModeValue(_Change):
    variableId: str = Field(..., description="Variable ID")
    modeId: str = Field(..., description="Mode ID")
    value: Any = Field(..., description="Value for this mode")


class ModifyVariablesInput(FigmaInput):
    """Input for a bulk variables change set."""

    file_key: str = Field(..., description="The file key", min_length=1)
    variable_collections: Optional[List[VariableCollectionChange]] = Field(
        default=None, description="Collection operations"
    )
    variable_modes: Optional[List[VariableModeChange]] = Field(
        default=None, description="Mode operations"
    )
    variables: Optional[List[VariableChange]] = Field(
        default=None, description="Variable operations"
    )
    variable_mode_values: Optional[List[VariableModeValue]] = Field(
        default=None, description="Mode value assignments"
    )


def _dump(changes: Optional[List[_Change]]) -> Optional[List[Dict[str, Any]]]:
    if changes is None:
        return None
    return [change.model_dump(exclude_unset=True) for change in changes]


# ─── Tools ───────────────────────────────────────────────────────────────────


def register_variable_tools(mcp: FastMCP, client: FigmaClient) -> None:
    @mcp.tool(
        name="figma_get_local_variables",
        annotations=tool_annotations("Get Local Variables"),
    )
    async def figma_get_local_variables(params: FileKeyInput) -> CallToolResult:
        """Get all local variables and variable collections in a file.

        Args:
            params: The file key.

        Returns:
            Variables and collections with their values across all modes.
        """
        try:
            return format_response(await client.get_local_variables(params.file_key))
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_get_published_variables",
        annotations=tool_annotations("Get Published Variables"),
    )
    async def figma_get_published_variables(params: FileKeyInput) -> CallToolResult:
        """Get variables published from a file as a library.

        Args:
            params: The file key.

        Returns:
            Published variables and variable collections.
        """
        try:
            return format_response(await client.get_published_variables(params.file_key))
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_modify_variables",
        annotations=tool_annotations(
            "Modify Variables", read_only=False, destructive=True, idempotent=False
        ),
    )
    async def figma_modify_variables(params: ModifyVariablesInput) -> CallToolResult:
        """Create, update, or delete variables in a file.

        Bulk operations on variables, variable collections and modes. Each
        operation needs an action of CREATE, UPDATE or DELETE. This can
        change a team's design system, so confirm intent before calling.

        Args:
            params: File key and any of variable_collections, variable_modes,
                variables, variable_mode_values.

        Returns:
            Updated variables state after modifications.
        """
        try:
            result = await client.post_variables(
                params.file_key,
                variable_collections=_dump(params.variable_collections),
                variable_modes=_dump(params.variable_modes),
                variables=_dump(params.variables),
                variable_mode_values=_dump(params.variable_mode_values),
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)
