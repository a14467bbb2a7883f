import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from mcp_fetch.api.http import create_app
from mcp_fetch.api.server import create_server
from mcp_fetch.core.config import settings
from mcp_fetch.core.log import setup_logging

logger = logging.getLogger("mcp_fetch")

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mcp-fetch",
        description="MCP server that renders web pages and returns them as Markdown",
    )
    parser.add_argument("--sse", action="store_true", help="Serve over SSE/HTTP instead of stdio")
    parser.add_argument("--port", type=int, default=settings.PORT, help="HTTP port for --sse (env PORT)")
    parser.add_argument("--prefix", default=settings.URI_PREFIX, help="URI prefix for --sse routes (env URI_PREFIX)")
    return parser.parse_args(argv)

def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging()
    logger.info("Starting MCP Fetch server...")

    server = create_server(settings)
    try:
        if args.sse:
            logger.info("Starting MCP Fetch server with SSE transport on port %s...", args.port)
            app = create_app(server, args.prefix)
            # uvicorn handles SIGINT/SIGTERM and runs the app's shutdown.
            uvicorn.run(app, host="0.0.0.0", port=args.port, log_level=settings.LOG_LEVEL.lower())
        else:
            logger.info("MCP Fetch server connected to stdio transport")
            server.run(transport="stdio")
    except KeyboardInterrupt:
        logger.info("Received interrupt, shutting down...")
    except Exception:
        logger.exception("Error running MCP Fetch server")
        sys.exit(1)

if __name__ == "__main__":
    main()
