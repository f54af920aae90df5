"""
Fills in social-sharing <meta> tags a rendered page is missing.

The caller passes what the head already contains (see
app.scrapers.meta.scan_existing_tags). If an upstream SEO layer already set
the five core Open Graph tags, nothing is added. Otherwise each tag that is
absent or empty gets exactly one synthesized value; tags that are present
with content are never touched.
"""
from dataclasses import dataclass

from app.config import Settings, get_settings
from app.rendering import render_meta_tags
from app.scrapers.meta import OG_TAGS, tag_attribute
from app.scrapers.resolver import Document, PageMetadataSet, resolve_page_metadata

# og:site_name counts towards the threshold but is not required for it
CORE_OG_TAGS = ("og:title", "og:description", "og:image", "og:url", "og:type")
UPSTREAM_THRESHOLD = 5

TWITTER_CARD_TYPE = "summary_large_image"


@dataclass
class MetaTag:
    attribute: str
    key: str
    value: str
    is_url: bool = False


def _present(existing: dict, key: str) -> bool:
    value = existing.get(key)
    return bool(value and value.strip())


def handled_upstream(existing: dict[str, str | None]) -> bool:
    """True when at least five Open Graph tags, including every core one, already have content."""
    present = sum(1 for key in OG_TAGS if _present(existing, key))
    return present >= UPSTREAM_THRESHOLD and all(_present(existing, key) for key in CORE_OG_TAGS)


def _tag(key: str, value: str, is_url: bool = False) -> MetaTag:
    return MetaTag(attribute=tag_attribute(key), key=key, value=value, is_url=is_url)


def missing_tags(page: PageMetadataSet, existing: dict[str, str | None]) -> list[MetaTag]:
    """
    One MetaTag per absent or empty social tag, Twitter Card tags first.

    Twitter values mirror the page's own metadata; there is no separate chain.
    Twitter title/description/image are skipped when the page has no value.
    """
    tags = []

    if not _present(existing, "twitter:card"):
        tags.append(_tag("twitter:card", TWITTER_CARD_TYPE))
    if not _present(existing, "twitter:title") and page.title:
        tags.append(_tag("twitter:title", page.title))
    if not _present(existing, "twitter:description") and page.excerpt:
        tags.append(_tag("twitter:description", page.excerpt))
    if not _present(existing, "twitter:image") and page.image:
        tags.append(_tag("twitter:image", page.image, is_url=True))

    og_values = [
        ("og:title", page.title, False),
        ("og:description", page.excerpt, False),
        ("og:image", page.image, True),
        ("og:url", page.canonical_url, True),
        ("og:type", page.content_type, False),
        ("og:site_name", page.site_name, False),
    ]
    for key, value, is_url in og_values:
        if not _present(existing, key):
            tags.append(_tag(key, value, is_url))

    return tags


def synthesize_meta_tags(
    document: Document,
    existing: dict[str, str | None] | None = None,
    is_singular: bool = True,
    settings: Settings | None = None,
) -> list[MetaTag]:
    """Work out which tags to add for one render of a single-resource view."""
    if not is_singular:
        return []
    existing = existing or {}
    if handled_upstream(existing):
        print("[META] Core Open Graph tags already present, nothing to add")
        return []

    settings = settings or get_settings()
    page = resolve_page_metadata(document, settings)
    tags = missing_tags(page, existing)
    if tags:
        print(f"[META] Synthesizing {len(tags)} tag(s): {', '.join(t.key for t in tags)}")
    return tags


def render_missing_meta_tags(
    document: Document,
    existing: dict[str, str | None] | None = None,
    is_singular: bool = True,
    settings: Settings | None = None,
) -> str:
    """Markup for the tags synthesize_meta_tags decides on, ready to append to <head>."""
    return render_meta_tags(synthesize_meta_tags(document, existing, is_singular, settings))
