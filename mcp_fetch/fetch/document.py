from typing import Dict, List, Optional

from bs4 import BeautifulSoup

# A browser moves these into <head>; they are never body content.
HEAD_TAGS = ["head", "title", "meta", "link", "base"]


class SoupDocument:
    """RenderedDocument backed by static HTML parsed with BeautifulSoup."""

    def __init__(self, html: str):
        self._html = html or ""
        self._soup = BeautifulSoup(self._html, "html.parser")

    async def inner_html(self, selector: str) -> Optional[str]:
        element = self._soup.select_one(selector)
        if element is None:
            return None
        return element.decode_contents()

    async def body_html(self) -> str:
        if self._soup.body is not None:
            return self._soup.body.decode_contents()

        # html.parser does not synthesize <body>: everything outside the
        # head-only elements is the body.
        soup = BeautifulSoup(self._html, "html.parser")
        for element in soup(HEAD_TAGS):
            element.decompose()
        root = soup.html or soup
        return root.decode_contents()

    async def meta_tags(self) -> List[Dict[str, Optional[str]]]:
        return [
            {
                "name": meta.get("name"),
                "property": meta.get("property"),
                "content": meta.get("content"),
            }
            for meta in self._soup.find_all("meta")
        ]

    @property
    def title(self) -> str:
        if self._soup.title is None:
            return ""
        return self._soup.title.get_text(strip=True)
