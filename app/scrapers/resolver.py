"""
Fallback chains that turn partial metadata into something renderable.

Every field walks the same ladder: the specific signal (Open Graph, the
document's own excerpt or featured image), then a generic one found in the
markup, then a fixed default. The first non-empty rung wins.
"""
import re
from dataclasses import dataclass
from urllib.parse import urlparse

from bs4 import NavigableString

from app.config import Settings, get_settings
from app.scrapers.meta import RawMetadata, find_first_image, parse_html

_WHITESPACE = re.compile(r"\s+")


@dataclass
class LinkMetadata:
    url: str
    title: str
    description: str
    image: str
    source_host: str


@dataclass
class Document:
    """The fields of the document being rendered that synthesis draws on."""
    title: str
    excerpt: str = ""
    body: str = ""
    permalink: str = ""
    site_name: str = ""
    featured_image: str | None = None


@dataclass
class PageMetadataSet:
    title: str
    excerpt: str
    canonical_url: str
    site_name: str
    image: str
    content_type: str = "article"


def host_of(url: str) -> str:
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def is_absolute_url(value: str | None) -> bool:
    """True for http(s) URLs with a host."""
    if not value:
        return False
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return parsed.scheme.lower() in ("http", "https") and bool(parsed.netloc)


def first_of(*candidates: str | None) -> str | None:
    """First candidate that is non-empty once trimmed."""
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate.strip()
    return None


def truncate(text: str, limit: int) -> str:
    # Hard cut; the result is always a prefix of the input.
    return text[:limit] if limit >= 0 else text


def absolutize(image: str | None, base_url: str) -> str | None:
    """
    Make a local image path absolute against the site's base URL.

    http(s) URLs pass through, scheme-less paths are joined onto `base_url`,
    and anything with another scheme (data:, javascript:) is dropped.
    """
    if not image or not image.strip():
        return None
    image = image.strip()
    if is_absolute_url(image):
        return image
    try:
        parsed = urlparse(image)
    except ValueError:
        return None
    if parsed.scheme:
        return None
    base = base_url.rstrip("/")
    if image.startswith("//"):
        scheme = urlparse(base).scheme or "https"
        return f"{scheme}:{image}"
    return f"{base}/{image.lstrip('/')}"


def resolve_link_metadata(url: str, raw: RawMetadata, settings: Settings | None = None) -> LinkMetadata:
    """Fill every LinkMetadata field for a fetched page, falling back tier by tier."""
    settings = settings or get_settings()
    host = host_of(url)

    title = first_of(raw.og_title, raw.html_title) or host or url

    description = first_of(raw.og_description, raw.meta_description) or ""
    description = truncate(description, settings.preview_description_length)

    # Fetched pages are not ours to resolve against; relative paths are misses.
    image = next(
        (c.strip() for c in (raw.og_image, raw.first_image) if is_absolute_url(c)),
        settings.default_preview_image,
    )

    return LinkMetadata(url=url, title=title, description=description, image=image, source_host=host)


def strip_markup(html: str | None) -> str:
    """Visible text of a fragment with scripts and styles removed and whitespace collapsed."""
    if not html:
        return ""
    soup = parse_html(html)
    for tag in soup(["script", "style", "noscript", "template"]):
        tag.decompose()
    return _WHITESPACE.sub(" ", soup.get_text(separator=" ")).strip()


def _plain_text(tag) -> str | None:
    # Headings with nested markup never count as matching the title.
    if not tag.contents or not all(isinstance(child, NavigableString) for child in tag.contents):
        return None
    return tag.get_text().strip()


def find_image_near_title(body: str | None, title: str | None) -> str | None:
    """
    src of the first image after the h1/h2 (or, failing that, the <p>) whose
    whole text is the title. Headings are tried across the body before paragraphs.
    """
    if not body or not title or not title.strip():
        return None
    wanted = title.strip().casefold()
    soup = parse_html(body)
    for names in (["h1", "h2"], ["p"]):
        for tag in soup.find_all(names):
            text = _plain_text(tag)
            if text is None or text.casefold() != wanted:
                continue
            for img in tag.find_all_next("img"):
                src = img.get("src")
                if isinstance(src, str) and src.strip():
                    return src.strip()
    return None


def resolve_page_metadata(document: Document, settings: Settings | None = None) -> PageMetadataSet:
    """Build the document's own social metadata from its fields."""
    settings = settings or get_settings()
    title = (document.title or "").strip()

    excerpt = first_of(strip_markup(document.excerpt), strip_markup(document.body), title) or ""
    excerpt = truncate(excerpt, settings.social_description_length)

    image = None
    for candidate in (
        lambda: document.featured_image,
        lambda: find_image_near_title(document.body, title),
        lambda: find_first_image(document.body or ""),
    ):
        image = absolutize(candidate(), settings.site_url)
        if image:
            break

    return PageMetadataSet(
        title=title,
        excerpt=excerpt,
        canonical_url=(document.permalink or "").strip(),
        site_name=first_of(document.site_name, settings.site_name) or "",
        image=image or settings.default_social_image,
    )
