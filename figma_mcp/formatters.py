"""Builders for the tool response envelope.

Every tool answers with text content holding JSON, and sets ``isError`` on
failure, so callers can treat all tools alike.
"""

import json
import logging
from typing import Any, Dict

from mcp.types import CallToolResult, TextContent

from .errors import FigmaApiError, error_details

logger = logging.getLogger(__name__)


def _text_result(payload: Any, is_error: bool = False) -> CallToolResult:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


def format_response(data: Any) -> CallToolResult:
    """Wrap a raw API result unchanged."""
    return _text_result(data)


def format_success(message: str, data: Any = None) -> CallToolResult:
    """Confirmation for operations that return no body (deletes, reactions)."""
    result: Dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        result["data"] = data
    return _text_result(result)


def format_error(error: Exception) -> CallToolResult:
    """Convert any exception raised by a tool handler into the error envelope."""
    details = error_details(error)
    message = f"Error: {error}"
    if isinstance(error, FigmaApiError) and error.retryable:
        message += " (retryable)"
    logger.warning("Tool call failed: %s", details)
    return _text_result({"error": message, "details": details}, is_error=True)
