"""Process-wide settings read from the environment.

Nothing tenant-specific lives here: tokens and base URL overrides arrive
with each request.
"""

import os

from . import __version__


def _env_int(key: str, default: int) -> int:
    """Read an integer setting, falling back to ``default`` when unset or invalid."""
    try:
        return int(os.environ.get(key, ""))
    except ValueError:
        return default


def _env_float(key: str, default: float) -> float:
    try:
        return float(os.environ.get(key, ""))
    except ValueError:
        return default


# ─── Server ──────────────────────────────────────────────────────────────────

SERVER_NAME = "figma_mcp"
SERVER_VERSION = __version__
HOST = os.environ.get("FIGMA_MCP_HOST", "0.0.0.0")
PORT = _env_int("FIGMA_MCP_PORT", 8000)
LOG_LEVEL = os.environ.get("FIGMA_MCP_LOG_LEVEL", "INFO")

# ─── Upstream API ────────────────────────────────────────────────────────────

FIGMA_API_BASE_URL = "https://api.figma.com"
REQUEST_TIMEOUT = _env_float("FIGMA_REQUEST_TIMEOUT", 30.0)

# ─── Limits ──────────────────────────────────────────────────────────────────

CHARACTER_LIMIT = _env_int("CHARACTER_LIMIT", 50000)
DEFAULT_PAGE_SIZE = _env_int("DEFAULT_PAGE_SIZE", 20)
MAX_PAGE_SIZE = _env_int("MAX_PAGE_SIZE", 100)
