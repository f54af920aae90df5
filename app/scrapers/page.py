import httpx

from app.config import Settings, get_settings
from app.scrapers.errors import FetchFailure, UnsupportedContentType
from app.scrapers.meta import extract_metadata
from app.scrapers.resolver import LinkMetadata, resolve_link_metadata


def build_headers(settings: Settings) -> dict:
    return {
        "User-Agent": settings.user_agent,
        "Accept-Language": "en-US,en;q=0.9",
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }


def new_client(settings: Settings | None = None) -> httpx.AsyncClient:
    """A client configured the way every preview fetch expects: short timeout, identifying UA."""
    settings = settings or get_settings()
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=settings.timeout,
        headers=build_headers(settings),
    )


async def fetch_html(url: str, client: httpx.AsyncClient, settings: Settings | None = None) -> str:
    """
    GET `url` once and return its body if it is an HTML page.

    Raises FetchFailure for transport errors, unusable URLs and HTTP error statuses,
    UnsupportedContentType when the response is anything but text/html.
    No retries.
    """
    settings = settings or get_settings()
    try:
        response = await client.get(url, headers=build_headers(settings), timeout=settings.timeout)
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
        raise FetchFailure(url, f"{type(e).__name__}: {e}") from e

    if response.status_code >= 400:
        raise FetchFailure(url, f"HTTP {response.status_code}")

    content_type = response.headers.get("content-type", "")
    if "text/html" not in content_type.lower():
        raise UnsupportedContentType(url, content_type)

    return response.text


async def fetch_link_metadata(
    url: str,
    client: httpx.AsyncClient | None = None,
    settings: Settings | None = None,
) -> LinkMetadata:
    """Fetch a page and resolve a complete LinkMetadata for it."""
    settings = settings or get_settings()
    if client is None:
        async with new_client(settings) as own_client:
            html = await fetch_html(url, own_client, settings)
    else:
        html = await fetch_html(url, client, settings)
    return resolve_link_metadata(url, extract_metadata(html), settings)
