import asyncio
import io
import logging

import aiohttp
from pdfminer.high_level import extract_text

from pagefetch.results import BackendResult
from pagefetch.settings import DEFAULT_SCRAPE_CONFIG, ScrapeConfig
from pagefetch.utils import TIMEOUT_MESSAGE, client_timeout, empty_result, error_text

logger = logging.getLogger(__name__)


class PdfExtractor:
    """
    Downloads a PDF and turns it into text.

    With parse=False the bytes are returned decoded as UTF-8 so callers can
    handle the document themselves.
    """

    def __init__(self, session: aiohttp.ClientSession, config: ScrapeConfig | None = None):
        self.session = session
        self.config = config or DEFAULT_SCRAPE_CONFIG

    async def extract(self, url: str, parse: bool = True) -> BackendResult:
        """Never raises; download and parse failures come back as an empty result with the error."""
        try:
            return await self._extract(url, parse)
        except asyncio.TimeoutError:
            logger.info("[pdf] Request timed out for %s", url)
            return empty_result(TIMEOUT_MESSAGE)
        except Exception as e:
            logger.error("[pdf] Error processing %s -> %s", url, e)
            return empty_result(error_text(e))

    async def _extract(self, url: str, parse: bool) -> BackendResult:
        headers = {"User-Agent": self.config.user_agent}
        async with self.session.get(
            url, headers=headers, timeout=client_timeout(self.config.universal_timeout_ms * 2), allow_redirects=True
        ) as resp:
            if not 200 <= resp.status < 300:
                logger.error("[pdf] Error fetching %s with status: %s", url, resp.status)
                return BackendResult(status_code=resp.status, error_message=resp.reason)
            body = await resp.read()

        if parse:
            content = await asyncio.to_thread(pdf_to_text, body)
        else:
            content = body.decode("utf-8", errors="replace")
        return BackendResult(raw_content=content, status_code=resp.status)


def pdf_to_text(data: bytes) -> str:
    return extract_text(io.BytesIO(data)).strip()
