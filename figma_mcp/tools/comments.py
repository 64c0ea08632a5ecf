"""Comment and comment reaction tools."""

from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from ..client import FigmaClient
from ..formatters import format_error, format_response, format_success
from .common import FigmaInput, tool_annotations

# ─── Input Models ────────────────────────────────────────────────────────────


class GetCommentsInput(FigmaInput):
    """Input for listing comments on a file."""

    file_key: str = Field(..., description="The file key", min_length=1)
    as_md: bool = Field(default=False, description="Return message content as markdown")


class PostCommentInput(FigmaInput):
    """Input for posting a comment or a reply."""

    file_key: str = Field(..., description="The file key", min_length=1)
    message: str = Field(..., description="The comment message", min_length=1)
    comment_id: Optional[str] = Field(default=None, description="ID of comment to reply to")
    node_id: Optional[str] = Field(default=None, description="Node ID to attach comment to")
    x: Optional[float] = Field(default=None, description="X coordinate for comment position")
    y: Optional[float] = Field(default=None, description="Y coordinate for comment position")

    def client_meta(self) -> Optional[Dict[str, Any]]:
        """Position block for the comment, or None when no position was given."""
        if self.node_id is None and self.x is None and self.y is None:
            return None
        meta = {"node_id": self.node_id, "x": self.x, "y": self.y}
        return {key: value for key, value in meta.items() if value is not None}


class CommentInput(FigmaInput):
    """Input identifying one comment."""

    file_key: str = Field(..., description="The file key", min_length=1)
    comment_id: str = Field(..., description="The comment ID", min_length=1)


class GetCommentReactionsInput(CommentInput):
    cursor: Optional[str] = Field(default=None, description="Pagination cursor")


class CommentReactionInput(CommentInput):
    emoji: str = Field(
        ..., description="The emoji shortcode, e.g. ':heart:' or ':+1:'", min_length=1
    )


# ─── Tools ───────────────────────────────────────────────────────────────────


def register_comment_tools(mcp: FastMCP, client: FigmaClient) -> None:
    @mcp.tool(name="figma_get_comments", annotations=tool_annotations("Get File Comments"))
    async def figma_get_comments(params: GetCommentsInput) -> CallToolResult:
        """Get all comments on a Figma file.

        Includes resolved comments and replies.

        Args:
            params: File key and optional as_md flag.

        Returns:
            List of comments with user info, timestamps, and thread structure.
        """
        try:
            result = await client.get_comments(params.file_key, as_md=params.as_md)
            return format_response(result)
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_post_comment",
        annotations=tool_annotations("Post Comment", read_only=False, idempotent=False),
    )
    async def figma_post_comment(params: PostCommentInput) -> CallToolResult:
        """Post a comment on a Figma file.

        Creates a new comment, or a reply when comment_id is set. Pin the
        comment with node_id and/or x, y coordinates.

        Args:
            params: File key, message and optional comment_id, node_id, x, y.

        Returns:
            The created comment with its ID and metadata.
        """
        try:
            result = await client.post_comment(
                params.file_key,
                params.message,
                comment_id=params.comment_id,
                client_meta=params.client_meta(),
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_delete_comment",
        annotations=tool_annotations("Delete Comment", read_only=False, destructive=True),
    )
    async def figma_delete_comment(params: CommentInput) -> CallToolResult:
        """Delete a comment from a Figma file.

        Only the comment author can delete it.

        Args:
            params: File key and the comment ID to delete.

        Returns:
            Confirmation of deletion.
        """
        try:
            await client.delete_comment(params.file_key, params.comment_id)
            return format_success(f"Comment {params.comment_id} deleted successfully")
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_get_comment_reactions",
        annotations=tool_annotations("Get Comment Reactions"),
    )
    async def figma_get_comment_reactions(params: GetCommentReactionsInput) -> CallToolResult:
        """Get emoji reactions on a comment.

        Args:
            params: File key, comment ID and optional pagination cursor.

        Returns:
            List of reactions with user and emoji info.
        """
        try:
            result = await client.get_comment_reactions(
                params.file_key, params.comment_id, cursor=params.cursor
            )
            return format_response(result)
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_post_comment_reaction",
        annotations=tool_annotations("Add Comment Reaction", read_only=False),
    )
    async def figma_post_comment_reaction(params: CommentReactionInput) -> CallToolResult:
        """Add an emoji reaction to a comment.

        Args:
            params: File key, comment ID and emoji.

        Returns:
            Confirmation of reaction added.
        """
        try:
            await client.post_comment_reaction(params.file_key, params.comment_id, params.emoji)
            return format_success(
                f"Reaction {params.emoji} added to comment {params.comment_id}"
            )
        except Exception as e:
            return format_error(e)

    @mcp.tool(
        name="figma_delete_comment_reaction",
        annotations=tool_annotations(
            "Remove Comment Reaction", read_only=False, destructive=True
        ),
    )
    async def figma_delete_comment_reaction(params: CommentReactionInput) -> CallToolResult:
        """Remove your emoji reaction from a comment.

        Args:
            params: File key, comment ID and the emoji to remove.

        Returns:
            Confirmation of reaction removed.
        """
        try:
            await client.delete_comment_reaction(
                params.file_key, params.comment_id, params.emoji
            )
            return format_success(
                f"Reaction {params.emoji} removed from comment {params.comment_id}"
            )
        except Exception as e:
            return format_error(e)
