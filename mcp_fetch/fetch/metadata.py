from typing import Dict, Iterable, Mapping, Optional

from mcp_fetch.fetch.base import RenderedDocument

# Canonical field -> raw meta keys, later keys override earlier ones.
# og:description wins over the bare description tag when both exist.
METADATA_FIELDS = {
    "description": ("description", "og:description"),
    "author": ("author",),
    "ogTitle": ("og:title",),
}


def collect_meta_tags(tags: Iterable[Mapping[str, Optional[str]]]) -> Dict[str, str]:
    """
    Build the raw key -> content mapping from meta declarations.

    The key is the `name` attribute, or `property` when `name` is missing.
    Tags without a key or without content are skipped; on duplicate keys
    the last tag seen wins.
    """
    raw: Dict[str, str] = {}
    for tag in tags:
        key = tag.get("name") or tag.get("property")
        content = tag.get("content")
        if key and content:
            raw[key] = content
    return raw


def project_metadata(raw: Mapping[str, str]) -> Dict[str, str]:
    """Keep only the allow-listed canonical fields. Missing fields are left out."""
    metadata: Dict[str, str] = {}
    for field, sources in METADATA_FIELDS.items():
        for source in sources:
            if raw.get(source):
                metadata[field] = raw[source]
    return metadata


async def extract_metadata(document: RenderedDocument) -> Dict[str, str]:
    tags = await document.meta_tags()
    return project_metadata(collect_meta_tags(tags))
