from pathlib import Path
from urllib.parse import quote, urlparse

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.config import Settings, get_settings
from app.scrapers.resolver import LinkMetadata

TEMPLATES_DIR = Path(__file__).parent / "templates"

# Characters left alone when URL-escaping; everything else is percent-encoded.
_URL_SAFE = "/:?#[]@!$&'()*+,;=%~-._"


def esc_url(value: str | None) -> str:
    """
    Percent-encode a URL for an href/src attribute.
    Schemes other than http(s) are refused and produce an empty string.
    """
    value = (value or "").strip()
    if not value:
        return ""
    try:
        scheme = urlparse(value).scheme.lower()
    except ValueError:
        # Unparseable netloc such as "https://[bad": keep it, still escaped
        if value.lower().startswith(("http://", "https://")):
            return quote(value, safe=_URL_SAFE)
        return ""
    if scheme and scheme not in ("http", "https"):
        return ""
    return quote(value, safe=_URL_SAFE)


# Autoescape handles the text/attribute context; esc_url is applied on top for URLs.
env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)
env.filters["esc_url"] = esc_url


def render_plain_link(url: str) -> str:
    return env.get_template("plain_link.html").render(url=url)


def render_card(card: LinkMetadata, settings: Settings | None = None) -> str:
    """Preview card markup. The placeholder image is never shown."""
    settings = settings or get_settings()
    show_image = bool(card.image) and card.image != settings.default_preview_image
    return env.get_template("preview_card.html").render(card=card, show_image=show_image)


def render_meta_tags(tags) -> str:
    """One <meta> element per tag, newline-terminated."""
    return env.get_template("meta_tags.html").render(tags=tags)
