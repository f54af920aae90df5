import re
import httpx

# Public oEmbed endpoints that need no API key.
# Instagram's endpoint now requires an app token, so it is not listed.
OEMBED_PROVIDERS = [
    (re.compile(r"^(www\.|m\.)?(youtube\.com|youtu\.be)$", re.IGNORECASE), "https://www.youtube.com/oembed"),
    (re.compile(r"^(www\.|player\.)?vimeo\.com$", re.IGNORECASE), "https://vimeo.com/api/oembed.json"),
    (re.compile(r"^(www\.|mobile\.)?(twitter\.com|x\.com)$", re.IGNORECASE), "https://publish.twitter.com/oembed"),
]


def find_provider(url: str) -> str | None:
    """Return the oEmbed endpoint for a URL, or None if no known provider serves it."""
    match = re.match(r"https?://([^/?#:]+)", url, re.IGNORECASE)
    if not match:
        return None
    host = match.group(1)
    for pattern, endpoint in OEMBED_PROVIDERS:
        if pattern.match(host):
            return endpoint
    return None


async def lookup_embed(url: str, client: httpx.AsyncClient) -> str | None:
    """
    Ask the provider's oEmbed endpoint for a rich embed of `url`.
    Returns the provider's HTML verbatim, or None for no embed (including any failure).
    """
    endpoint = find_provider(url)
    if not endpoint:
        return None

    # oEmbed only accepts twitter.com, not x.com
    target = re.sub(r"^https?://(www\.|mobile\.)?x\.com/", "https://twitter.com/", url, flags=re.IGNORECASE)
    params = {"url": target, "format": "json"}
    if "twitter.com" in endpoint:
        params["omit_script"] = "true"

    try:
        resp = await client.get(endpoint, params=params)
        if resp.status_code != 200:
            print(f"[EMBED] {endpoint} answered {resp.status_code} for {url}")
            return None
        html = resp.json().get("html", "")
    except Exception as e:
        print(f"[EMBED] oEmbed lookup failed for {url}: {e}")
        return None

    if isinstance(html, str) and html.strip():
        print(f"[EMBED] Native embed for {url} ({len(html)} chars)")
        return html
    return None
