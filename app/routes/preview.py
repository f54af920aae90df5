from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

from app.config import get_settings
from app.expander import expand_links, render_link
from app.scrapers import Document, is_absolute_url, scan_existing_tags
from app.scrapers.errors import FetchFailure, UnsupportedContentType
from app.scrapers.page import fetch_link_metadata, new_client
from app.synthesizer import synthesize_meta_tags
from app.rendering import render_meta_tags

router = APIRouter()


class PreviewRequest(BaseModel):
    url: str


class ExpandRequest(BaseModel):
    content: str


class DocumentIn(BaseModel):
    title: str
    excerpt: str = ""
    body: str = ""
    permalink: str = ""
    site_name: str = ""
    featured_image: str | None = None


class MetaTagsRequest(BaseModel):
    document: DocumentIn
    head_html: str = ""
    existing: dict[str, str | None] | None = None
    is_singular: bool = True


def _require_http_url(url: str) -> str:
    url = url.strip()
    if not is_absolute_url(url):
        raise HTTPException(status_code=422, detail="url must be an absolute http(s) URL")
    return url


@router.post("/preview")
async def preview(body: PreviewRequest):
    """Resolved preview metadata for one URL, as JSON."""
    url = _require_http_url(body.url)
    try:
        card = await fetch_link_metadata(url)
    except UnsupportedContentType as e:
        raise HTTPException(status_code=415, detail=str(e))
    except FetchFailure as e:
        raise HTTPException(status_code=502, detail=str(e))
    return JSONResponse(asdict(card))


@router.get("/preview/card", response_class=HTMLResponse)
async def preview_card(url: str = Query(...)):
    """The markup a bare-URL line would be replaced with."""
    url = _require_http_url(url)
    settings = get_settings()
    async with new_client(settings) as client:
        html = await render_link(url, client, settings)
    return HTMLResponse(html)


@router.post("/expand")
async def expand(body: ExpandRequest):
    return JSONResponse({"content": await expand_links(body.content)})


@router.post("/meta-tags")
async def meta_tags(body: MetaTagsRequest):
    """
    Social tags to append to a document's <head>.

    `existing` wins over `head_html` when both are given; with neither,
    every tag is treated as missing.
    """
    existing = body.existing if body.existing is not None else scan_existing_tags(body.head_html)
    document = Document(**body.document.model_dump())
    tags = synthesize_meta_tags(document, existing, body.is_singular)
    return JSONResponse({
        "tags": [asdict(tag) for tag in tags],
        "html": render_meta_tags(tags),
    })
