class PreviewError(Exception):
    """Base class for anything that stops a link from becoming a preview card."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class FetchFailure(PreviewError):
    """Transport error, DNS failure, timeout or an HTTP error status."""


class UnsupportedContentType(PreviewError):
    """The response was fetched fine but is not an HTML page."""

    def __init__(self, url: str, content_type: str):
        super().__init__(url, f"unsupported content type {content_type or '(none)'}")
        self.content_type = content_type
