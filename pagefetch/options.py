from dataclasses import dataclass

RAW_HTML_EXTRACTION_MODE = "llm-extraction-from-raw-html"


@dataclass(frozen=True)
class PageOptions:
    """
    Per-request options.

    wait_for is in milliseconds. headers are forwarded to the backends that
    support custom headers. scroll_x_paths is only set by custom scraping
    rules and is passed through to the render service.
    """
    only_main_content: bool = True
    include_html: bool = False
    include_raw_html: bool = False
    wait_for: int = 0
    screenshot: bool = False
    headers: dict[str, str] | None = None
    parse_pdf: bool = True
    fallback: bool = True
    remove_tags: tuple[str, ...] = ()
    only_include_tags: tuple[str, ...] = ()
    scroll_x_paths: tuple[str, ...] = ()


@dataclass(frozen=True)
class ExtractorOptions:
    mode: str = "llm-extraction-from-markdown"

    @property
    def needs_raw_html(self) -> bool:
        return self.mode == RAW_HTML_EXTRACTION_MODE
