#!/usr/bin/env python3
"""
HTTP entry point for the multi-tenant Figma MCP server.

Routes:
  POST /mcp     Stateless streamable-HTTP MCP endpoint (requires X-Figma-Token)
  GET  /health  Health check
  GET  /sse     Not supported (501)
  *             Discovery document

Run:
  pip install -e .
  figma-mcp --port 8000        (or: python -m figma_mcp)
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

import httpx
import uvicorn
from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from .client import FigmaClient
from .config import (
    CHARACTER_LIMIT,
    DEFAULT_PAGE_SIZE,
    HOST,
    LOG_LEVEL,
    MAX_PAGE_SIZE,
    PORT,
    SERVER_NAME,
    SERVER_VERSION,
)
from .credentials import (
    BASE_URL_HEADER,
    TOKEN_HEADER,
    TenantCredentials,
    parse_tenant_credentials,
    validate_credentials,
)
from .errors import AuthenticationError, StatefulModeNotSupportedError
from .tools import TOOL_NAMES, register_all_tools

logger = logging.getLogger(__name__)

STATEFUL_MODE_MESSAGE = (
    "Stateful mode is not supported for multi-tenant deployments. "
    f"Use the stateless /mcp endpoint with {TOKEN_HEADER} header instead."
)

# ─── MCP Server Factory ──────────────────────────────────────────────────────


def create_figma_server(
    credentials: TenantCredentials,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastMCP:
    """Build an MCP server whose tools act with ``credentials``.

    Called once per inbound request; the server and its client are thrown
    away when the request ends.
    """
    mcp = FastMCP(
        SERVER_NAME,
        json_response=True,
        stateless_http=True,
        # Host checks belong to the gateway; tenants authenticate per request.
        transport_security=TransportSecuritySettings(enable_dns_rebinding_protection=False),
    )
    register_all_tools(mcp, FigmaClient(credentials, transport=transport))
    return mcp


class TenantMcpEndpoint:
    """ASGI endpoint for ``POST /mcp``.

    Rejects requests without a token before anything touches the Figma API,
    then serves the MCP exchange through a throwaway stateless session manager.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._transport = transport

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        credentials = parse_tenant_credentials(request.headers)
        try:
            validate_credentials(credentials)
        except AuthenticationError as e:
            logger.info("Rejected /mcp request without %s header", TOKEN_HEADER)
            response = JSONResponse(
                {
                    "error": "Unauthorized",
                    "message": str(e),
                    "required_headers": [TOKEN_HEADER],
                },
                status_code=401,
            )
            await response(scope, receive, send)
            return

        mcp = create_figma_server(credentials, transport=self._transport)
        # streamable_http_app() creates the session manager; its routes are unused.
        mcp.streamable_http_app()
        session_manager = mcp.session_manager
        async with session_manager.run():
            await session_manager.handle_request(scope, receive, send)


# ─── Static Routes ───────────────────────────────────────────────────────────


def discovery_document() -> Dict[str, Any]:
    """Static description of the server, its headers and its tools."""
    tools: List[str] = list(TOOL_NAMES)
    return {
        "name": SERVER_NAME,
        "version": SERVER_VERSION,
        "description": "Multi-tenant Figma MCP Server - Access the full Figma REST API",
        "endpoints": {
            "mcp": "/mcp (POST) - Streamable HTTP MCP endpoint",
            "health": "/health - Health check",
        },
        "authentication": {
            "description": "Pass Figma personal access token via request header",
            "required_headers": {TOKEN_HEADER: "Your Figma personal access token"},
            "optional_headers": {BASE_URL_HEADER: "Override the default Figma API base URL"},
        },
        "limits": {
            "character_limit": CHARACTER_LIMIT,
            "default_page_size": DEFAULT_PAGE_SIZE,
            "max_page_size": MAX_PAGE_SIZE,
        },
        "tools": tools,
    }


async def health(request: Request) -> Response:
    return JSONResponse({"status": "ok", "server": SERVER_NAME})


async def sse(request: Request) -> Response:
    return PlainTextResponse(
        f"SSE transport is not supported. {STATEFUL_MODE_MESSAGE}", status_code=501
    )


async def discovery(request: Request) -> Response:
    return JSONResponse(discovery_document())


# ─── Application ─────────────────────────────────────────────────────────────


def build_app(
    stateful: bool = False,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Starlette:
    """Create the ASGI application.

    Args:
        stateful: Session-persistent MCP is refused; passing True raises
            StatefulModeNotSupportedError.
        transport: Optional httpx transport for upstream Figma calls.
    """
    if stateful:
        raise StatefulModeNotSupportedError(STATEFUL_MODE_MESSAGE)

    all_methods = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    routes = [
        Route("/health", health, methods=["GET"]),
        Route("/mcp", TenantMcpEndpoint(transport), methods=["POST"]),
        Route("/sse", sse, methods=["GET", "POST"]),
        Route("/{path:path}", discovery, methods=all_methods),
    ]
    return Starlette(routes=routes)


app = build_app()


# ─── Entry Point ─────────────────────────────────────────────────────────────


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Multi-tenant Figma MCP server")
    parser.add_argument("--host", default=HOST, help=f"Bind address (default: {HOST})")
    parser.add_argument("--port", type=int, default=PORT, help=f"Port (default: {PORT})")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level")
    parser.add_argument(
        "--stateful",
        action="store_true",
        help="Keep MCP sessions between requests (not supported)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="[%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    try:
        application = build_app(stateful=args.stateful)
    except StatefulModeNotSupportedError as e:
        parser.exit(2, f"error: {e}\n")

    logger.info("Starting %s %s on %s:%s", SERVER_NAME, SERVER_VERSION, args.host, args.port)
    uvicorn.run(application, host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
