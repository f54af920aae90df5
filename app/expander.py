"""
Turns bare-URL lines in user content into preview cards.

For every line that is nothing but an http(s) URL:
1. Native oEmbed render from a known provider: used verbatim.
2. One GET with a short timeout, Open Graph then HTML fallbacks: preview card.
3. Fetch failure or non-HTML response: plain anchor.
Nothing is cached or retried; the same URL twice means two fetches.
"""
import asyncio
from typing import Awaitable, Callable

import httpx

from app.config import Settings, get_settings
from app.rendering import render_card, render_plain_link
from app.scrapers import BARE_URL_PATTERN
from app.scrapers.embeds import lookup_embed
from app.scrapers.errors import PreviewError
from app.scrapers.page import fetch_link_metadata, new_client

EmbedLookup = Callable[[str, httpx.AsyncClient], Awaitable[str | None]]

_DEFAULT = object()


async def render_link(
    url: str,
    client: httpx.AsyncClient,
    settings: Settings | None = None,
    embed_lookup: EmbedLookup | None = _DEFAULT,
) -> str:
    """Replacement markup for a single bare URL. Never raises for fetch or parse problems."""
    settings = settings or get_settings()
    if embed_lookup is _DEFAULT:
        embed_lookup = lookup_embed if settings.native_embeds else None

    if embed_lookup is not None:
        try:
            embed = await embed_lookup(url, client)
        except Exception as e:
            print(f"[EMBED] Lookup raised for {url}: {e}")
            embed = None
        if embed:
            return embed

    try:
        card = await fetch_link_metadata(url, client, settings)
    except PreviewError as e:
        print(f"[PREVIEW] Falling back to plain link: {e}")
        return render_plain_link(url)
    except Exception as e:
        print(f"[PREVIEW] Unexpected error for {url}, using plain link: {e}")
        return render_plain_link(url)

    print(f"[PREVIEW] Card for {url}: title={card.title[:60]!r}, has_description={bool(card.description)}")
    return render_card(card, settings)


async def expand_links(
    content: str,
    client: httpx.AsyncClient | None = None,
    settings: Settings | None = None,
    embed_lookup: EmbedLookup | None = _DEFAULT,
) -> str:
    """
    Replace every bare-URL line of `content` with an embed, card or plain link.

    Matches are rendered concurrently; substitution keeps document order.
    """
    if not content:
        return content or ""
    settings = settings or get_settings()
    urls = [m.group(1) for m in BARE_URL_PATTERN.finditer(content)]
    if not urls:
        return content

    print(f"[EXPAND] {len(urls)} bare URL line(s) to expand")

    async def render_all(active: httpx.AsyncClient) -> list[str]:
        return await asyncio.gather(
            *(render_link(url, active, settings, embed_lookup) for url in urls)
        )

    if client is None:
        async with new_client(settings) as own_client:
            rendered = await render_all(own_client)
    else:
        rendered = await render_all(client)

    replacements = iter(rendered)
    return BARE_URL_PATTERN.sub(lambda _m: next(replacements), content)
