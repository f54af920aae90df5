from dataclasses import dataclass
from bs4 import BeautifulSoup

# Open Graph uses property="og:*", Twitter Cards use name="twitter:*"
OG_TAGS = ("og:title", "og:description", "og:image", "og:url", "og:type", "og:site_name")
TWITTER_TAGS = ("twitter:card", "twitter:title", "twitter:description", "twitter:image")
SOCIAL_TAGS = OG_TAGS + TWITTER_TAGS


@dataclass
class RawMetadata:
    """What a fetched page says about itself, before any fallback is applied."""
    og_title: str | None = None
    og_description: str | None = None
    og_image: str | None = None
    html_title: str | None = None
    meta_description: str | None = None
    first_image: str | None = None


def tag_attribute(key: str) -> str:
    """The attribute a social tag is keyed by."""
    return "name" if key.lower().startswith("twitter:") else "property"


def parse_html(markup: str | bytes | None) -> BeautifulSoup:
    """Parse untrusted markup. Anything the tokenizer chokes on becomes an empty document."""
    try:
        return BeautifulSoup(markup or "", "html.parser")
    except Exception as e:
        print(f"[META] Could not parse markup: {e}")
        return BeautifulSoup("", "html.parser")


def _soup(markup) -> BeautifulSoup:
    if isinstance(markup, BeautifulSoup):
        return markup
    return parse_html(markup)


def _matching_meta(soup: BeautifulSoup, key: str, attribute: str):
    wanted = key.lower()
    for tag in soup.find_all("meta"):
        value = tag.get(attribute)
        if isinstance(value, str) and value.strip().lower() == wanted:
            yield tag


def find_meta(markup, key: str, attribute: str | None = None) -> str | None:
    """
    Return the content of the first <meta> keyed by `key`, scanning left to right.

    `attribute` defaults to property for og:* and name for everything else.
    Occurrences with empty content are skipped, not treated as a hit.
    """
    soup = _soup(markup)
    for tag in _matching_meta(soup, key, attribute or tag_attribute(key)):
        content = (tag.get("content") or "").strip()
        if content:
            return content
    return None


def find_title(markup) -> str | None:
    """Text of the first non-empty <title> element."""
    for tag in _soup(markup).find_all("title"):
        text = tag.get_text().strip()
        if text:
            return text
    return None


def find_description(markup) -> str | None:
    return find_meta(markup, "description", "name")


def find_first_image(markup) -> str | None:
    """src of the first <img> in document order that has one."""
    for tag in _soup(markup).find_all("img"):
        src = tag.get("src")
        if isinstance(src, str) and src.strip():
            return src.strip()
    return None


def extract_metadata(html: str | bytes | None) -> RawMetadata:
    """Run every extraction the preview card needs against one page."""
    soup = parse_html(html)
    return RawMetadata(
        og_title=find_meta(soup, "og:title"),
        og_description=find_meta(soup, "og:description"),
        og_image=find_meta(soup, "og:image"),
        html_title=find_title(soup),
        meta_description=find_description(soup),
        first_image=find_first_image(soup),
    )


def scan_existing_tags(head_html: str | None) -> dict[str, str | None]:
    """
    Build the existing-tag map for an already rendered head.

    Each social tag maps to its first non-empty content, to "" when the tag
    is only present with empty content, or to None when it is absent.
    """
    soup = parse_html(head_html)
    existing: dict[str, str | None] = {}
    for key in SOCIAL_TAGS:
        tags = list(_matching_meta(soup, key, tag_attribute(key)))
        if not tags:
            existing[key] = None
            continue
        existing[key] = find_meta(soup, key) or ""
    return existing
