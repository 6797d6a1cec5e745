"""Custom exceptions for pagefetch."""

from pagefetch.results import PageStatus


class ScrapeError(Exception):
    """Base exception class for pagefetch."""

    pass


class AllBackendsExhausted(ScrapeError):
    """Every planned backend failed to produce content for a URL."""

    def __init__(self, url: str, status: PageStatus) -> None:
        self.url = url
        self.status = status
        super().__init__(f"All scraping methods failed for URL: {url}")
