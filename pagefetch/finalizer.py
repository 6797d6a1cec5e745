from bs4 import BeautifulSoup

from pagefetch.html_cleaner import remove_unwanted_elements
from pagefetch.markdown import parse_markdown
from pagefetch.metadata import extract_metadata
from pagefetch.options import ExtractorOptions, PageOptions
from pagefetch.results import AttemptOutcome, BackendResult, Document, PageStatus


def to_outcome(result: BackendResult, options: PageOptions) -> AttemptOutcome:
    """Clean and convert a backend result."""
    cleaned = remove_unwanted_elements(result.raw_content, options)
    return AttemptOutcome(
        text=parse_markdown(cleaned),
        html=cleaned,
        raw_html=result.raw_content,
        screenshot=result.screenshot,
        status_code=result.status_code,
        page_error=result.error_message or None,
    )


def build_document(
    url: str,
    outcome: AttemptOutcome,
    status: PageStatus,
    page_options: PageOptions,
    extractor_options: ExtractorOptions,
) -> Document:
    metadata = {}
    if outcome.raw_html:
        metadata = extract_metadata(BeautifulSoup(outcome.raw_html, "html.parser"), url)

    if outcome.screenshot:
        metadata["screenshot"] = outcome.screenshot
    metadata.update(sourceURL=url, pageStatusCode=status.code, pageError=status.error)

    include_raw = page_options.include_raw_html or extractor_options.needs_raw_html
    return Document(
        content=outcome.text,
        markdown=outcome.text,
        html=outcome.html if page_options.include_html else None,
        raw_html=outcome.raw_html if include_raw else None,
        metadata=metadata,
    )


def failed_document(url: str, status: PageStatus) -> Document:
    """Document returned when no backend produced any content."""
    return Document(
        content="",
        markdown="",
        html="",
        metadata={"sourceURL": url, "pageStatusCode": status.code, "pageError": status.error},
    )
