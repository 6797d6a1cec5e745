"""
Single-URL scraping with backend fallback.

For one URL the scraper plans an order of backends, then tries them one at a
time. After each attempt the custom scraping rules may ask for one extra
fetch, and the policy decides whether to stop, fall back, or give up. The
last outcome becomes the Document.
"""

import dataclasses
import logging
from collections.abc import Mapping

import aiohttp

from .backends import build_backends
from .base_scraper import BaseScraper
from .custom import PDF, CustomScrape, handle_custom_scraping
from .exceptions import AllBackendsExhausted
from .finalizer import build_document, failed_document, to_outcome
from .host_params import HostParamsResolver, HostParamsTable, load_host_params
from .html_cleaner import remove_unwanted_elements
from .logging_config import setup_logging
from .markdown import parse_markdown
from .options import ExtractorOptions, PageOptions
from .pdf import PdfExtractor
from .planner import FallbackPlanner
from .policy import Verdict, is_sufficient, judge
from .results import AttemptOutcome, BackendResult, Document, PageStatus
from .scrape_log import ScrapeLog
from .settings import DEFAULT_SCRAPE_CONFIG, Backend, BackendSettings, ScrapeConfig, load_backend_settings
from .storage import resolve_results_dir

logger = logging.getLogger(__name__)


class SingleUrlScraper:
    """
    Orchestrates backend attempts for single URLs.

    Use as an async context manager to own an aiohttp session and build the
    configured backends, or pass `backends` (and `pdf`) explicitly. Owned
    backends are rebuilt on every entry, and the scrape log is flushed on
    every exit.
    Attempts for one URL are strictly sequential; different URLs may be
    scraped concurrently on the same instance.
    """

    def __init__(
        self,
        config: ScrapeConfig | None = None,
        settings: BackendSettings | None = None,
        host_params: HostParamsTable | None = None,
        scrape_log: ScrapeLog | None = None,
        backends: Mapping[Backend, BaseScraper] | None = None,
        pdf: PdfExtractor | None = None,
    ):
        self.config = config or DEFAULT_SCRAPE_CONFIG
        self.settings = settings if settings is not None else load_backend_settings()
        table = host_params if host_params is not None else load_host_params(config=self.config)
        self.resolver = HostParamsResolver(table, self.config)
        self.scrape_log = scrape_log or ScrapeLog(
            enabled=self.config.scrape_log_enabled,
            name=self.config.scrape_log_name,
            results_dir=resolve_results_dir(self.config.results_dir),
            max_entries=self.config.scrape_log_max_entries,
        )
        self.pdf = pdf
        self.backends: dict[Backend, BaseScraper] = dict(backends or {})
        self.planner = FallbackPlanner(self.backends)

        # Backends and PDF extractor built here are bound to one session and rebuilt per `async with`
        self._owns_backends = not self.backends
        self._owns_pdf = pdf is None
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self):
        if self._owns_backends:
            self._session = aiohttp.ClientSession()
            if self._owns_pdf:
                self.pdf = PdfExtractor(self._session, self.config)
            self.backends = build_backends(
                self._session, self.settings, self.resolver, self.pdf, self.scrape_log, self.config
            )
            self.planner = FallbackPlanner(self.backends)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        try:
            if self._session:
                await self._session.close()
        finally:
            self._session = None
            if self._owns_backends:
                self.backends = {}
                self.planner = FallbackPlanner(self.backends)
                if self._owns_pdf:
                    self.pdf = None
            self._flush_scrape_log()

    def _flush_scrape_log(self) -> None:
        if not self.scrape_log.enabled:
            return
        try:
            self.scrape_log.flush()
        except Exception:
            logger.warning("Failed to persist the scrape log", exc_info=True)

    def plan(self, url: str, options: PageOptions) -> list[Backend]:
        override = self.resolver.lookup(url)
        return self.planner.plan(
            forced=override.default_backend if override else None,
            want_wait=bool(options.wait_for and options.wait_for > 0),
            want_screenshot=options.screenshot is True,
            has_headers=options.headers is not None,
        )

    async def scrape(
        self,
        url: str,
        page_options: PageOptions | None = None,
        extractor_options: ExtractorOptions | None = None,
        existing_html: str = "",
    ) -> Document:
        """
        Scrape one URL.

        Never raises for a failed fetch: when every backend fails the
        Document has empty content and the last known status/error.
        """
        url = url.strip()
        page_options = page_options or PageOptions()
        extractor_options = extractor_options or ExtractorOptions()

        try:
            outcome, status = await self._run(url, page_options, existing_html)
        except AllBackendsExhausted as e:
            logger.error("Error: %s - Failed to fetch URL: %s", e, url)
            return failed_document(url, e.status)

        return build_document(url, outcome, status, page_options, extractor_options)

    async def _run(self, url: str, options: PageOptions, existing_html: str) -> tuple[AttemptOutcome, PageStatus]:
        status = PageStatus()

        # Content from an earlier crawl stage makes backend attempts unnecessary
        if existing_html and is_sufficient(existing_html, self.config):
            cleaned = remove_unwanted_elements(existing_html, options)
            outcome = AttemptOutcome(text=parse_markdown(cleaned), html=cleaned, raw_html=existing_html)
            return outcome, status

        order = self.plan(url, options)
        logger.debug("Backend order for %s: %s", url, [str(b) for b in order])

        outcome = AttemptOutcome()
        for i, backend in enumerate(order):
            outcome = await self._attempt(url, backend, options)
            status = status.advance(outcome)

            verdict = judge(outcome, status, self.config)
            if verdict is not Verdict.NEXT:
                break
            if i + 1 < len(order):
                logger.info("Falling back to %s", order[i + 1])

        if not outcome.text:
            raise AllBackendsExhausted(url, status)
        return outcome, status

    async def _attempt(self, url: str, backend: Backend, options: PageOptions) -> AttemptOutcome:
        logger.info("Scraping %s with %s", url, backend)
        result = await self.backends[backend].fetch(url, options)

        directive = handle_custom_scraping(result.raw_content, url)
        if directive is not None:
            custom = await self._custom_fetch(directive, options)
            if custom is not None:
                result = dataclasses.replace(result, raw_content=custom.raw_content, screenshot=custom.screenshot)

        return to_outcome(result, options)

    async def _custom_fetch(self, directive: CustomScrape, options: PageOptions) -> BackendResult | None:
        """The single extra fetch requested by a custom scraping rule."""
        logger.info("Custom scraping %s via %s", directive.url, directive.backend)
        if directive.backend == PDF:
            if self.pdf is None:
                logger.warning("No PDF extractor configured, ignoring custom scrape of %s", directive.url)
                return None
            return await self.pdf.extract(directive.url, options.parse_pdf)

        backend = self.backends.get(directive.backend)
        if backend is None:
            logger.warning("%s is not configured, ignoring custom scrape of %s", directive.backend, directive.url)
            return None
        custom_options = dataclasses.replace(
            options,
            wait_for=directive.wait_after_load,
            screenshot=False,
            headers=None,
            scroll_x_paths=directive.scroll_x_paths,
        )
        return await backend.fetch(directive.url, custom_options)


async def scrape_single_url(
    url: str,
    page_options: PageOptions | None = None,
    extractor_options: ExtractorOptions | None = None,
    existing_html: str = "",
    config: ScrapeConfig | None = None,
) -> Document:
    """
    Scrape one URL with the configured backends and a fresh session.

    Entry point for scripts: sets up logging on first use and persists the
    scrape log when done.
    """
    setup_logging()
    async with SingleUrlScraper(config=config) as scraper:
        return await scraper.scrape(url, page_options, extractor_options, existing_html)
