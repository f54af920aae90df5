from app.scrapers.meta import RawMetadata
from app.scrapers import resolver
from app.scrapers.resolver import Document


URL = "https://news.example.com/2024/story"


def test_title_prefers_open_graph(settings):
    raw = RawMetadata(og_title="OG", html_title="HTML")
    assert resolver.resolve_link_metadata(URL, raw, settings).title == "OG"


def test_title_falls_back_to_html_title(settings):
    raw = RawMetadata(og_title="   ", html_title="HTML")
    assert resolver.resolve_link_metadata(URL, raw, settings).title == "HTML"


def test_title_falls_back_to_host(settings):
    card = resolver.resolve_link_metadata(URL, RawMetadata(), settings)
    assert card.title == "news.example.com"
    assert card.source_host == "news.example.com"
    assert card.url == URL


def test_description_chain(settings):
    raw = RawMetadata(meta_description="From meta")
    assert resolver.resolve_link_metadata(URL, raw, settings).description == "From meta"
    raw = RawMetadata(og_description="From OG", meta_description="From meta")
    assert resolver.resolve_link_metadata(URL, raw, settings).description == "From OG"
    assert resolver.resolve_link_metadata(URL, RawMetadata(), settings).description == ""


def test_long_description_is_cut_to_a_prefix(settings):
    text = "word " * 100
    card = resolver.resolve_link_metadata(URL, RawMetadata(og_description=text), settings)
    assert len(card.description) <= settings.preview_description_length
    assert text.strip().startswith(card.description)


def test_image_chain(settings):
    raw = RawMetadata(og_image="https://cdn.example.com/og.png", first_image="https://cdn.example.com/img.png")
    assert resolver.resolve_link_metadata(URL, raw, settings).image == "https://cdn.example.com/og.png"

    raw = RawMetadata(first_image="https://cdn.example.com/img.png")
    assert resolver.resolve_link_metadata(URL, raw, settings).image == "https://cdn.example.com/img.png"


def test_relative_fetched_images_fall_through_to_default(settings):
    raw = RawMetadata(og_image="/og.png", first_image="images/pic.jpg")
    assert resolver.resolve_link_metadata(URL, raw, settings).image == settings.default_preview_image


def test_no_image_signal_uses_default(settings):
    assert resolver.resolve_link_metadata(URL, RawMetadata(), settings).image == settings.default_preview_image


def test_absolutize():
    base = "https://blog.example.org"
    assert resolver.absolutize("https://cdn.example.com/a.png", base) == "https://cdn.example.com/a.png"
    assert resolver.absolutize("/uploads/a.png", base) == "https://blog.example.org/uploads/a.png"
    assert resolver.absolutize("uploads/a.png", base + "/") == "https://blog.example.org/uploads/a.png"
    assert resolver.absolutize("//cdn.example.com/a.png", base) == "https://cdn.example.com/a.png"
    assert resolver.absolutize("data:image/png;base64,AAAA", base) is None
    assert resolver.absolutize("", base) is None


def test_strip_markup_drops_scripts_and_collapses_whitespace():
    body = (
        "<script>var tracking = 1;</script>"
        "<p>First  para.</p>\n"
        "<p>Second\n\tpara.</p>"
        "<p>Third para.</p>"
    )
    assert resolver.strip_markup(body) == "First para. Second para. Third para."


def test_image_near_heading_title():
    body = (
        '<img src="/before.png">'
        "<h2> My Post </h2>"
        "<p>intro</p>"
        '<img src="/after.png">'
    )
    assert resolver.find_image_near_title(body, "My Post") == "/after.png"


def test_image_near_paragraph_title():
    body = '<p>My Post</p><div><img src="/inside.png"></div>'
    assert resolver.find_image_near_title(body, "My Post") == "/inside.png"


def test_nested_markup_in_heading_defeats_the_match():
    body = '<h1><em>My Post</em></h1><img src="/after.png">'
    assert resolver.find_image_near_title(body, "My Post") is None


def test_no_title_match():
    assert resolver.find_image_near_title('<h1>Other</h1><img src="/x.png">', "My Post") is None
    assert resolver.find_image_near_title('<img src="/x.png">', "") is None


def test_page_description_falls_back_to_body_then_title(settings):
    body = "<script>ignored()</script><p>One.</p><p>Two.</p><p>" + "x" * 300 + "</p>"
    page = resolver.resolve_page_metadata(Document(title="Post", body=body), settings)
    full = "One. Two. " + "x" * 300
    assert page.excerpt == full[: settings.social_description_length]

    page = resolver.resolve_page_metadata(Document(title="Post"), settings)
    assert page.excerpt == "Post"


def test_page_excerpt_wins_when_present(settings):
    page = resolver.resolve_page_metadata(Document(title="Post", excerpt="Short summary", body="<p>Body</p>"), settings)
    assert page.excerpt == "Short summary"


def test_page_image_chain(settings):
    featured = Document(title="Post", featured_image="https://cdn.example.com/hero.jpg", body='<img src="/x.png">')
    assert resolver.resolve_page_metadata(featured, settings).image == "https://cdn.example.com/hero.jpg"

    near_title = Document(title="Post", body='<img src="/first.png"><h1>Post</h1><img src="/second.png">')
    assert resolver.resolve_page_metadata(near_title, settings).image == "https://blog.example.org/second.png"

    first_only = Document(title="Post", body='<p>text</p><img src="/first.png">')
    assert resolver.resolve_page_metadata(first_only, settings).image == "https://blog.example.org/first.png"

    nothing = Document(title="Post", body="<p>text</p>")
    assert resolver.resolve_page_metadata(nothing, settings).image == settings.default_social_image


def test_page_metadata_fixed_fields(settings):
    page = resolver.resolve_page_metadata(
        Document(title="Post", permalink="https://blog.example.org/post/"), settings
    )
    assert page.content_type == "article"
    assert page.canonical_url == "https://blog.example.org/post/"
    assert page.site_name == "Example Blog"
