import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from mcp.server.fastmcp import FastMCP

from mcp_fetch.core.config import settings

logger = logging.getLogger(__name__)

def normalize_prefix(prefix: str) -> str:
    """'api/' -> '/api', '' -> ''."""
    if not prefix:
        return ""
    if not prefix.startswith("/"):
        prefix = f"/{prefix}"
    return prefix.rstrip("/")

def create_app(server: FastMCP, uri_prefix: str = "") -> FastAPI:
    """
    HTTP application for the SSE transport.

    The MCP SSE app is mounted under the prefix (`{prefix}/sse` for the
    event stream, `{prefix}/messages/` for client posts) next to an
    `{prefix}/info` endpoint.
    """
    prefix = normalize_prefix(uri_prefix)
    mcp_settings = server.settings
    endpoints = {
        "sse": f"{prefix}{mcp_settings.sse_path}",
        "message": f"{prefix}{mcp_settings.message_path}",
        "info": f"{prefix}/info",
    }

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("MCP Fetch server listening, URI prefix: %s", prefix or "/ (root)")
        for name, path in endpoints.items():
            logger.info("%s endpoint: %s", name, path)
        yield
        logger.info("Closing SSE server...")

    app = FastAPI(
        title="MCP Fetch Server",
        version=settings.SERVER_VERSION,
        lifespan=lifespan,
    )

    @app.get(endpoints["info"])
    async def info():
        """Basic server info"""
        return {
            "name": "MCP Fetch Server",
            "version": settings.SERVER_VERSION,
            "transport": "SSE",
            "endpoints": endpoints,
        }

    # Mounted last so the info route keeps precedence at the root prefix.
    app.mount(prefix or "/", server.sse_app(mount_path=prefix or "/"))
    return app
