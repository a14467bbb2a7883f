import asyncio
import pytest

from mcp_fetch.fetch.content import DEFAULT_CONTENT_SELECTORS, locate_main_content
from mcp_fetch.fetch.document import SoupDocument

def locate(html, selectors=DEFAULT_CONTENT_SELECTORS):
    return asyncio.run(locate_main_content(SoupDocument(html), selectors))

class TestContentLocator:
    """Unit tests for the main-content priority order"""

    def test_default_order(self):
        assert DEFAULT_CONTENT_SELECTORS == ("main", "article", "#content", ".content")

    def test_main_beats_article(self):
        html = "<body><article><p>Article</p></article><main><p>Main</p></main></body>"
        content = locate(html)
        assert "Main" in content
        assert "Article" not in content

    def test_article_beats_content_id(self):
        html = '<body><div id="content">By id</div><article>Article</article></body>'
        assert locate(html) == "Article"

    def test_content_id_beats_content_class(self):
        html = '<body><div class="content">By class</div><div id="content">By id</div></body>'
        assert locate(html) == "By id"

    def test_content_class(self):
        html = '<body><nav>Menu</nav><section class="page content">By class</section></body>'
        assert locate(html) == "By class"

    def test_body_fallback(self):
        html = "<html><body><nav>Menu</nav><p>Text</p></body></html>"
        content = locate(html)
        assert "Menu" in content
        assert "<p>Text</p>" in content

    def test_fragment_without_body_is_body_content(self):
        assert locate("<p>fragment</p>", selectors=("main",)) == "<p>fragment</p>"

    def test_head_elements_excluded_without_body(self):
        html = '<title>Tab</title><meta name="author" content="Jane"><p>Visible</p>'
        assert locate(html, selectors=()) == "<p>Visible</p>"

    def test_custom_selectors(self):
        html = '<body><main>Main</main><div class="post">Post</div></body>'
        assert locate(html, selectors=(".post", "main")) == "Post"

    @pytest.mark.parametrize("selectors", [(), ("section",)])
    def test_unmatched_custom_selectors_fall_back_to_body(self, selectors):
        assert locate("<body><p>Only</p></body>", selectors) == "<p>Only</p>"
