"""
Main-content heuristic.

Selectors are tried in order and the first element found wins. When none
matches, the whole document body is used. This is a heuristic, not a
guarantee of semantic correctness; callers that need a different rule pass
their own selector list (see FetchOptions.content_selectors).
"""

import logging
from typing import Sequence

from mcp_fetch.fetch.base import RenderedDocument

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_SELECTORS = ("main", "article", "#content", ".content")


async def locate_main_content(
    document: RenderedDocument,
    selectors: Sequence[str] = DEFAULT_CONTENT_SELECTORS,
) -> str:
    """Return the inner HTML of the subtree considered the page's main content."""
    for selector in selectors:
        html = await document.inner_html(selector)
        if html is not None:
            logger.debug("Main content matched selector %r", selector)
            return html

    logger.debug("No content selector matched, falling back to <body>")
    return await document.body_html()
