import json
import logging

from .base_scraper import BaseScraper
from .options import PageOptions
from .results import BackendResult
from .settings import Backend
from .utils import client_timeout

logger = logging.getLogger(__name__)


class BrowserServiceScraper(BaseScraper):
    """
    Headless-browser microservice (`POST {browser_service_url}`).

    - Sends {url, wait_after_load, headers}, expects JSON
      {content, pageStatusCode, pageError}
    - A host params `wait` takes precedence over the request's wait
    - Hard timeout is the universal timeout plus the wait
    """

    name = Backend.BROWSER_SERVICE

    async def _fetch(self, url: str, options: PageOptions) -> BackendResult:
        req = self.resolver.resolve(url)
        wait = req.params.get("wait", options.wait_for) or 0

        payload = {"url": url, "wait_after_load": wait, "headers": options.headers}

        async with self.session.post(
            self.settings.browser_service_url,
            json=payload,
            timeout=client_timeout(self.config.universal_timeout_ms + wait),
        ) as resp:
            if resp.status != 200:
                logger.error("[%s] Error fetching url: %s with status: %s", self.name, url, resp.status)
                data = await self._error_payload(resp)
                return BackendResult(status_code=data.get("pageStatusCode"), error_message=data.get("pageError"))

            pdf_result = await self._pdf_or_none(url, resp, options)
            if pdf_result is not None:
                return pdf_result

            raw = await resp.text()

        data = json.loads(raw)
        return BackendResult(
            raw_content=data.get("content") or "",
            status_code=data.get("pageStatusCode"),
            error_message=data.get("pageError"),
        )
