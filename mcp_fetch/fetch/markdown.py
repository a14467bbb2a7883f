"""
HTML to Markdown conversion.

The output format is fixed because downstream renderers depend on it:
ATX headings, `---` rules, `-` bullets, fenced code blocks and `*` emphasis.
"""

from bs4 import BeautifulSoup
from markdownify import ATX, ASTERISK, MarkdownConverter

# Removed together with their content before conversion, always.
NOISE_TAGS = ["script", "style", "noscript", "iframe"]

MARKDOWN_OPTIONS = {
    "heading_style": ATX,
    "bullets": "-",
    "strong_em_symbol": ASTERISK,
    "code_language": "",
}


class ImageMarkdownConverter(MarkdownConverter):
    """Emits ![alt](src) for every image, including inside headings and table cells."""

    def convert_img(self, el, text, *args, **kwargs):
        alt = el.get("alt") or ""
        src = el.get("src") or ""
        if not src:
            return ""
        title = el.get("title") or ""
        title_part = ' "%s"' % title.replace('"', r"\"") if title else ""
        return f"![{alt}]({src}{title_part})"


def _strip_tags(soup: BeautifulSoup, include_images: bool) -> None:
    tags = list(NOISE_TAGS)
    if not include_images:
        # No alt-text fallback: images disappear entirely.
        tags.append("img")
    for element in soup(tags):
        element.decompose()


def html_to_markdown(html_content: str, include_images: bool = False) -> str:
    """
    Convert an HTML fragment to Markdown.

    Args:
        html_content: HTML fragment (typically the inner HTML of the main content)
        include_images: Keep <img> elements as ![alt](src) references

    Returns:
        str: Markdown text without leading or trailing blank lines
    """
    soup = BeautifulSoup(html_content or "", "html.parser")
    _strip_tags(soup, include_images)

    markdown = ImageMarkdownConverter(**MARKDOWN_OPTIONS).convert_soup(soup)
    return markdown.strip()
