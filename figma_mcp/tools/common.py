"""Shared pieces for tool input models and tool annotations."""

from typing import Any, Dict
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict


class FigmaInput(BaseModel):
    """Base for all tool inputs."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


def tool_annotations(
    title: str,
    read_only: bool = True,
    destructive: bool = False,
    idempotent: bool = True,
) -> Dict[str, Any]:
    """MCP tool hints. Every tool talks to the Figma API, so all are open-world."""
    return {
        "title": title,
        "readOnlyHint": read_only,
        "destructiveHint": destructive,
        "idempotentHint": idempotent,
        "openWorldHint": True,
    }


def check_http_url(value: str) -> str:
    """Validator body for URL fields: absolute http(s) URLs only."""
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"'{value}' is not a valid http(s) URL")
    return value
