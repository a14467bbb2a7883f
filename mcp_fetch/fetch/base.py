from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol

class FetchError(Exception):
    """Base class for every failure of a single fetch."""

class InvalidUrlError(FetchError):
    """The URL was rejected before any browser work started."""

class NavigationError(FetchError):
    """The target could not be loaded."""

class NavigationTimeoutError(NavigationError):
    """The network did not settle within the timeout."""

class SelectorNotFoundError(FetchError):
    """waitForSelector was given but the element never appeared."""

    def __init__(self, selector: str, timeout_ms: int):
        super().__init__(f"Selector '{selector}' not found within {timeout_ms}ms")
        self.selector = selector
        self.timeout_ms = timeout_ms

class ResourceFetchError(FetchError):
    """Raised from the resource template path."""


class RenderedDocument(Protocol):
    """
    Read-only queries against a rendered document.

    The content locator and the metadata extractor only talk to this
    interface, so the rendering backend can be swapped without touching
    extraction logic.
    """

    async def inner_html(self, selector: str) -> Optional[str]:
        """Inner HTML of the first element matching `selector`, or None."""
        ...

    async def body_html(self) -> str:
        """Inner HTML of <body> (empty string when there is none)."""
        ...

    async def meta_tags(self) -> List[Dict[str, Optional[str]]]:
        """One dict per <meta> element with `name`, `property` and `content`."""
        ...


@dataclass
class RenderedPage:
    title: str
    raw_html: str
    document: RenderedDocument  # only valid while the rendering session is open
