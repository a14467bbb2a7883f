import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeout

from mcp_fetch.core.config import settings
from mcp_fetch.fetch.base import (
    NavigationError,
    NavigationTimeoutError,
    RenderedPage,
    SelectorNotFoundError,
)
from mcp_fetch.schemas import FetchOptions

logger = logging.getLogger(__name__)

VIEWPORT = {"width": 1280, "height": 800}

# Relaxes Chromium's own sandbox so it starts as root inside containers.
# This is an environment concession, not a security boundary.
BROWSER_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]

_INNER_HTML_JS = """
(selector) => {
    const el = document.querySelector(selector);
    return el ? el.innerHTML : null;
}
"""

_BODY_HTML_JS = "() => document.body ? document.body.innerHTML : ''"

_META_TAGS_JS = """
() => Array.from(document.querySelectorAll('meta')).map((meta) => ({
    name: meta.getAttribute('name'),
    property: meta.getAttribute('property'),
    content: meta.getAttribute('content'),
}))
"""


class PlaywrightDocument:
    """RenderedDocument evaluated inside a live Playwright page."""

    def __init__(self, page: Page):
        self._page = page

    async def inner_html(self, selector: str) -> Optional[str]:
        return await self._page.evaluate(_INNER_HTML_JS, selector)

    async def body_html(self) -> str:
        return await self._page.evaluate(_BODY_HTML_JS)

    async def meta_tags(self) -> List[Dict[str, Optional[str]]]:
        return await self._page.evaluate(_META_TAGS_JS)


@asynccontextmanager
async def render_page(url: str, options: FetchOptions) -> AsyncIterator[RenderedPage]:
    """
    Render `url` in a fresh headless Chromium and yield the rendered page.

    Every call gets its own browser, closed when the `async with` block
    exits, whether it exits normally or through an exception raised here or
    in the caller's block.

    Raises:
        NavigationTimeoutError: network did not settle within options.timeout
        NavigationError: the page could not be loaded
        SelectorNotFoundError: options.wait_for_selector never appeared
    """
    async with async_playwright() as p:
        browser = await p.chromium.launch(
            headless=settings.PLAYWRIGHT_HEADLESS,
            args=BROWSER_ARGS,
        )
        try:
            # Viewport and user agent must be in place before the first request.
            page = await browser.new_page(viewport=VIEWPORT, user_agent=options.user_agent)

            logger.info("Navigating to %s (timeout %sms)", url, options.timeout)
            try:
                await page.goto(url, wait_until="networkidle", timeout=options.timeout)
            except PlaywrightTimeout as exc:
                raise NavigationTimeoutError(
                    f"Timeout of {options.timeout}ms exceeded while loading {url}"
                ) from exc
            except PlaywrightError as exc:
                raise NavigationError(f"Failed to load {url}: {exc.message}") from exc

            if options.wait_for_selector:
                try:
                    await page.wait_for_selector(
                        options.wait_for_selector, state="attached", timeout=options.timeout
                    )
                except PlaywrightTimeout as exc:
                    raise SelectorNotFoundError(options.wait_for_selector, options.timeout) from exc

            title = await page.title()
            # Serialized DOM after rendering; part of the page contract even
            # though extraction reads through the live document instead.
            raw_html = await page.content()

            yield RenderedPage(title=title, raw_html=raw_html, document=PlaywrightDocument(page))
        finally:
            await browser.close()
            logger.debug("Browser closed for %s", url)
