import asyncio
import logging
from typing import Dict, List, Optional
from urllib.parse import urlparse

from mcp_fetch.core.config import settings
from mcp_fetch.fetch.base import InvalidUrlError, RenderedDocument
from mcp_fetch.fetch.content import locate_main_content
from mcp_fetch.fetch.document import SoupDocument
from mcp_fetch.fetch.markdown import html_to_markdown
from mcp_fetch.fetch.metadata import extract_metadata
from mcp_fetch.fetch.renderer import render_page
from mcp_fetch.schemas import FetchOptions, FetchOutcome, FetchResult

logger = logging.getLogger(__name__)

def validate_url(url: str) -> None:
    """Reject anything that is not an absolute http(s) URL with a host."""
    if not url or not isinstance(url, str):
        raise InvalidUrlError("Invalid URL")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidUrlError(f"Invalid URL: {url}")

async def _extract(
    url: str,
    title: str,
    document: RenderedDocument,
    options: FetchOptions,
) -> FetchResult:
    metadata = await extract_metadata(document)
    html = await locate_main_content(document, options.content_selectors)
    markdown = html_to_markdown(html, include_images=options.include_images)
    return FetchResult(url=url, title=title, markdown=markdown, metadata=metadata)

async def fetch_url(url: str, options: Optional[FetchOptions] = None) -> FetchResult:
    """
    Fetch one page in a real browser and convert its main content to Markdown.

    1. Validate the URL (no browser is started for a malformed one)
    2. Render the page in its own browser instance
    3. Extract metadata and locate the main content in the rendered document
    4. Convert the content to Markdown

    Steps 3 and 4 run before the browser is closed; the browser is closed
    whether they succeed or not. Any failure propagates to the caller.
    """
    options = options or FetchOptions()
    validate_url(url)

    async with render_page(url, options) as page:
        result = await _extract(url, page.title, page.document, options)

    logger.info("Fetched %s: %d chars of markdown", url, len(result.markdown))
    return result

async def fetch_from_html(
    url: str,
    html: str,
    options: Optional[FetchOptions] = None,
    title: Optional[str] = None,
) -> FetchResult:
    """
    Run the extraction pipeline over already-available HTML, without a browser.

    The title defaults to the document's <title>.
    """
    options = options or FetchOptions()
    document = SoupDocument(html)
    if title is None:
        title = document.title
    return await _extract(url, title, document, options)

async def fetch_many(
    urls: List[str],
    options: Optional[FetchOptions] = None,
    max_concurrency: Optional[int] = None,
) -> Dict[str, FetchOutcome]:
    """
    Fetch several URLs concurrently, isolating failures per URL.

    At most `max_concurrency` browsers run at the same time (defaults to
    settings.MAX_CONCURRENT_FETCHES); the remaining fetches wait for a slot.
    Every URL gets an outcome holding either its result or the error message.
    """
    options = options or FetchOptions()
    limit = settings.MAX_CONCURRENT_FETCHES if max_concurrency is None else max_concurrency
    if limit < 1:
        raise ValueError("max_concurrency must be at least 1")
    sem = asyncio.Semaphore(limit)

    async def _fetch_one(url: str) -> FetchOutcome:
        async with sem:
            try:
                result = await fetch_url(url, options)
            except Exception as e:
                logger.error("Error fetching %s: %s", url, e)
                return FetchOutcome(url=url, error=str(e) or e.__class__.__name__)
        return FetchOutcome(url=url, result=result)

    outcomes = await asyncio.gather(*(_fetch_one(url) for url in urls))
    return {outcome.url: outcome for outcome in outcomes}

async def fetch_multiple_urls(
    urls: List[str],
    options: Optional[FetchOptions] = None,
    max_concurrency: Optional[int] = None,
) -> Dict[str, FetchResult]:
    """
    Fetch several URLs concurrently and return only the successful results.

    A failing URL is logged by fetch_many and left out of the mapping; it
    never aborts its siblings and no exception reaches the caller. Use
    fetch_many to see why a URL is missing.
    """
    outcomes = await fetch_many(urls, options, max_concurrency)
    return {url: outcome.result for url, outcome in outcomes.items() if outcome.ok}
