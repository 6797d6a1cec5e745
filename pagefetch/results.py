from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class BackendResult:
    """
    Uniform result returned by every backend scraper.

    Fields:
        raw_content   : Raw HTML/text of the page (or extracted PDF text).
        screenshot    : Screenshot URL/base64 if the backend produced one.
        status_code   : Page status reported by the provider. None means the
                        status is unknown (transport failure, timeout).
        error_message : Provider-reported page error, or the transport/decode
                        error message when the call itself failed.
    """
    raw_content: str = ""
    screenshot: str = ""
    status_code: int | None = None
    error_message: str | None = None


@dataclass(frozen=True)
class AttemptOutcome:
    """
    One backend attempt after post-processing.

    text is the markdown used for the sufficiency test, html the cleaned HTML
    and raw_html the content exactly as the backend returned it.
    """
    text: str = ""
    html: str = ""
    raw_html: str = ""
    screenshot: str = ""
    status_code: int | None = None
    page_error: str | None = None


@dataclass(frozen=True)
class PageStatus:
    """Status and error carried across attempts of one URL."""
    code: int = 200
    error: str | None = None

    def advance(self, outcome: AttemptOutcome) -> "PageStatus":
        """
        Fold one attempt into the carried status.

        The latest known status code wins. An error is kept only for codes
        >= 400 and is cleared by a later code < 400.
        """
        code = outcome.status_code if outcome.status_code else self.code
        error = self.error
        if outcome.status_code is not None:
            if outcome.page_error and outcome.status_code >= 400:
                error = outcome.page_error
            elif outcome.status_code < 400:
                error = None
        return PageStatus(code=code, error=error)


@dataclass
class Document:
    """Normalized output for one URL."""
    content: str
    markdown: str
    html: str | None = None
    raw_html: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
