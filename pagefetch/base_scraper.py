import asyncio
import json
import logging

import aiohttp

from .host_params import HostParamsResolver
from .options import PageOptions
from .pdf import PdfExtractor
from .results import BackendResult
from .scrape_log import ScrapeLog, is_success_status
from .settings import DEFAULT_SCRAPE_CONFIG, Backend, BackendSettings, ScrapeConfig
from .utils import TIMEOUT_MESSAGE, empty_result, error_text, is_pdf_response

logger = logging.getLogger(__name__)


class BaseScraper:
    """
    Common shell of every backend.

    Subclasses implement `_fetch`. `fetch` adds what all backends share:
    - exactly one scrape log record per call, on every exit path
    - timeouts become an empty result with "Request timed out"
    - undecodable payloads and transport errors become an empty result
      carrying the error text
    so a backend call never raises into the orchestration loop.
    """

    name: Backend
    supports_screenshot = False

    def __init__(
        self,
        session: aiohttp.ClientSession,
        settings: BackendSettings,
        resolver: HostParamsResolver,
        pdf: PdfExtractor,
        scrape_log: ScrapeLog,
        config: ScrapeConfig | None = None,
    ):
        self.session = session
        self.settings = settings
        self.resolver = resolver
        self.pdf = pdf
        self.scrape_log = scrape_log
        self.config = config or DEFAULT_SCRAPE_CONFIG

    async def fetch(self, url: str, options: PageOptions | None = None) -> BackendResult:
        options = options or PageOptions()
        async with self.scrape_log.attempt(url, self.name) as entry:
            try:
                result = await self._fetch(url, options)
            except asyncio.TimeoutError:
                logger.info("[%s] Request timed out for %s", self.name, url)
                result = empty_result(TIMEOUT_MESSAGE)
            except json.JSONDecodeError as e:
                logger.error("[%s] Error parsing JSON response for url: %s -> %s", self.name, url, e)
                result = empty_result(error_text(e))
            except Exception as e:
                logger.error("[%s] Error fetching url: %s -> %s", self.name, url, e)
                result = empty_result(error_text(e))

            entry.status_code = result.status_code
            entry.error_message = result.error_message
            entry.html = result.raw_content
            entry.success = is_success_status(result.status_code)
            return result

    async def _fetch(self, url: str, options: PageOptions) -> BackendResult:
        raise NotImplementedError

    async def _pdf_or_none(self, url: str, resp: aiohttp.ClientResponse, options: PageOptions) -> BackendResult | None:
        """Route PDF responses to the PDF extractor, whichever backend fetched them."""
        if not is_pdf_response(resp.headers):
            return None
        logger.info("[%s] %s is a PDF, extracting", self.name, url)
        return await self.pdf.extract(url, options.parse_pdf)

    async def _error_payload(self, resp: aiohttp.ClientResponse) -> dict:
        """Best-effort JSON body of a failed provider response."""
        try:
            data = await resp.json(content_type=None)
        except (ValueError, aiohttp.ContentTypeError):
            return {}
        return data if isinstance(data, dict) else {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!s})"
