import logging

from .base_scraper import BaseScraper
from .options import PageOptions
from .results import BackendResult
from .settings import Backend
from .utils import client_timeout

logger = logging.getLogger(__name__)

DEFAULT_HTTP_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate, br",
    "Connection": "keep-alive",
}

class HttpScraper(BaseScraper):
    """
    Plain HTTP fetch built on aiohttp.

    - No rendering, no custom wait
    - Fixed universal timeout
    - Anything but a 200 is returned as status + reason without content
    """
    name = Backend.FETCH

    async def _fetch(self, url: str, options: PageOptions) -> BackendResult:
        headers = {**DEFAULT_HTTP_HEADERS, "User-Agent": self.config.user_agent}

        async with self.session.get(
            url, headers=headers,
            timeout=client_timeout(self.config.universal_timeout_ms), allow_redirects=True
        ) as resp:
            if resp.status != 200:
                logger.error("[%s] Error fetching url: %s with status: %s", self.name, url, resp.status)
                return BackendResult(status_code=resp.status, error_message=resp.reason)

            pdf_result = await self._pdf_or_none(url, resp, options)
            if pdf_result is not None:
                return pdf_result

            text = await resp.text(errors="replace")

        return BackendResult(raw_content=text, status_code=200)
