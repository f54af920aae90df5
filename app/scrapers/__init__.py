import re
from app.scrapers.errors import FetchFailure, PreviewError, UnsupportedContentType
from app.scrapers.meta import RawMetadata, extract_metadata, scan_existing_tags
from app.scrapers.resolver import (
    Document,
    LinkMetadata,
    PageMetadataSet,
    host_of,
    is_absolute_url,
    resolve_link_metadata,
    resolve_page_metadata,
)
from app.scrapers.page import fetch_link_metadata, new_client
from app.scrapers.embeds import lookup_embed

# A line holding nothing but an http(s) URL
BARE_URL_PATTERN = re.compile(r"^(https?://[^\s<]+)$", re.IGNORECASE | re.MULTILINE)


def find_bare_urls(content: str) -> list[str]:
    """Every bare-URL line in `content`, in document order, duplicates included."""
    return [m.group(1) for m in BARE_URL_PATTERN.finditer(content or "")]
