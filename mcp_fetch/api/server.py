import logging
from typing import Annotated, Optional
from urllib.parse import unquote

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent
from pydantic import Field

from mcp_fetch.core.config import Settings, settings as default_settings
from mcp_fetch.fetch.base import InvalidUrlError, ResourceFetchError
from mcp_fetch.schemas import FetchOptions
from mcp_fetch.services import fetcher

logger = logging.getLogger(__name__)

TOOL_NAME = "fetch-url"
TOOL_DESCRIPTION = "Fetch a URL using a headless browser and return the content as markdown"
RESOURCE_TEMPLATE = "fetch://{url}"
RESOURCE_NAME = "fetch-template"
MARKDOWN_MIME_TYPE = "text/markdown"

async def fetch_url_tool(
    url: str,
    timeout: Optional[int] = None,
    wait_for_selector: Optional[str] = None,
    include_images: Optional[bool] = None,
) -> CallToolResult:
    """
    Tool handler. Failures are returned as an error-flagged text result,
    never raised to the protocol layer.
    """
    overrides = {
        "timeout": timeout,
        "wait_for_selector": wait_for_selector,
        "include_images": include_images,
    }
    try:
        options = FetchOptions(**{k: v for k, v in overrides.items() if v is not None})
        result = await fetcher.fetch_url(url, options)
        return CallToolResult(content=[TextContent(type="text", text=result.to_text())])
    except Exception as e:
        logger.warning("Tool %s failed for %s: %s", TOOL_NAME, url, e)
        return CallToolResult(
            content=[TextContent(type="text", text=f"Error fetching {url}: {e}")],
            isError=True,
        )

async def read_fetch_resource(url: str) -> str:
    """
    Resource template handler. `url` arrives percent-encoded; failures are
    raised to the caller.
    """
    target = unquote(url or "")
    if not target:
        raise InvalidUrlError("Invalid URL")
    try:
        result = await fetcher.fetch_url(target)
    except Exception as e:
        raise ResourceFetchError(f"Error fetching URL: {e}") from e
    return result.to_text()

def create_server(config: Optional[Settings] = None) -> FastMCP:
    """Build the MCP server with the fetch tool and the fetch:// resource template."""
    config = config or default_settings
    server = FastMCP(config.SERVER_NAME)

    # Argument names are the tool's wire format.
    @server.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def fetch_url(
        url: Annotated[str, Field(description="The URL to fetch")],
        timeout: Annotated[
            Optional[int], Field(gt=0, description="Timeout in milliseconds (default: 30000)")
        ] = None,
        waitForSelector: Annotated[
            Optional[str], Field(description="CSS selector to wait for")
        ] = None,
        includeImages: Annotated[
            Optional[bool],
            Field(description="Whether to include image references in markdown (default: false)"),
        ] = None,
    ):
        return await fetch_url_tool(url, timeout, waitForSelector, includeImages)

    @server.resource(RESOURCE_TEMPLATE, name=RESOURCE_NAME, mime_type=MARKDOWN_MIME_TYPE)
    async def fetch_resource(url: str) -> str:
        return await read_fetch_resource(url)

    return server
