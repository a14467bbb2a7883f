from typing import Dict, List, Optional

import pytest
from bs4 import BeautifulSoup

from mcp_fetch.core import config
from mcp_fetch.fetch import renderer

SAMPLE_HTML = """
<html>
<head>
    <title>Sample Page</title>
    <meta name="description" content="Plain description">
    <meta property="og:description" content="Open Graph description">
    <meta name="author" content="Jane Doe">
    <meta property="og:title" content="Sample OG Title">
    <meta name="keywords" content="ignored, keys">
</head>
<body>
    <nav><a href="/">Home</a></nav>
    <main>
        <h1>Main Heading</h1>
        <p>Intro with <em>emphasis</em>.</p>
        <img src="https://example.com/cat.png" alt="A cat">
        <script>console.log("tracking")</script>
    </main>
    <article><p>Article text</p></article>
    <footer>Footer text</footer>
</body>
</html>
"""


class FakePage:
    """Stands in for a Playwright page; evaluates the renderer's scripts with BeautifulSoup."""

    def __init__(self, html: str, calls: List[str], goto_error=None, selector_error=None):
        self._soup = BeautifulSoup(html, "html.parser")
        self._html = html
        self._calls = calls
        self._goto_error = goto_error
        self._selector_error = selector_error
        self.goto_kwargs: Dict = {}
        self.selector_kwargs: Dict = {}

    async def goto(self, url, **kwargs):
        self._calls.append("goto")
        self.goto_kwargs = kwargs
        if self._goto_error is not None:
            raise self._goto_error

    async def wait_for_selector(self, selector, **kwargs):
        self._calls.append("wait_for_selector")
        self.selector_kwargs = {"selector": selector, **kwargs}
        if self._selector_error is not None:
            raise self._selector_error

    async def title(self):
        return self._soup.title.get_text() if self._soup.title else ""

    async def content(self):
        return self._html

    async def evaluate(self, script, arg=None):
        if script == renderer._INNER_HTML_JS:
            element = self._soup.select_one(arg)
            return element.decode_contents() if element is not None else None
        if script == renderer._BODY_HTML_JS:
            return self._soup.body.decode_contents() if self._soup.body else ""
        if script == renderer._META_TAGS_JS:
            return [
                {"name": m.get("name"), "property": m.get("property"), "content": m.get("content")}
                for m in self._soup.find_all("meta")
            ]
        raise AssertionError(f"unexpected script: {script}")


class FakeBrowser:
    def __init__(self, page: FakePage, calls: List[str]):
        self.page = page
        self._calls = calls
        self.new_page_kwargs: Dict = {}
        self.closed = False

    async def new_page(self, **kwargs):
        self._calls.append("new_page")
        self.new_page_kwargs = kwargs
        return self.page

    async def close(self):
        self._calls.append("close")
        self.closed = True


class FakePlaywright:
    """Replacement for `async_playwright` recording every browser it launches."""

    def __init__(self, html: str = SAMPLE_HTML, goto_error=None, selector_error=None):
        self.html = html
        self.goto_error = goto_error
        self.selector_error = selector_error
        self.calls: List[str] = []
        self.browsers: List[FakeBrowser] = []
        self.launch_kwargs: Optional[Dict] = None
        self.chromium = self

    def __call__(self):
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.calls.append("stop")
        return False

    async def launch(self, **kwargs):
        self.calls.append("launch")
        self.launch_kwargs = kwargs
        page = FakePage(self.html, self.calls, self.goto_error, self.selector_error)
        browser = FakeBrowser(page, self.calls)
        self.browsers.append(browser)
        return browser

    @property
    def all_closed(self) -> bool:
        return all(browser.closed for browser in self.browsers)


@pytest.fixture
def sample_html():
    return SAMPLE_HTML


@pytest.fixture
def fake_playwright(monkeypatch):
    """Patch Playwright in the renderer; call the fixture to configure the fake."""
    def _install(**kwargs) -> FakePlaywright:
        fake = FakePlaywright(**kwargs)
        monkeypatch.setattr(renderer, "async_playwright", fake)
        return fake
    return _install


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Restore settings touched by tests"""
    original_concurrency = config.settings.MAX_CONCURRENT_FETCHES
    original_timeout = config.settings.DEFAULT_TIMEOUT_MS

    yield

    config.settings.MAX_CONCURRENT_FETCHES = original_concurrency
    config.settings.DEFAULT_TIMEOUT_MS = original_timeout
