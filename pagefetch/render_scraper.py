import logging

from .base_scraper import BaseScraper
from .options import PageOptions
from .results import BackendResult
from .settings import Backend
from .utils import client_timeout

logger = logging.getLogger(__name__)


class RenderServiceScraper(BaseScraper):
    """
    Headless render service (`POST {render_service_url}/scrape`).

    - The only backend that can take screenshots
    - Host params `wait` / `screenshot` take precedence over the request
    - Hard timeout is the universal timeout plus the wait
    """

    name = Backend.RENDER_SERVICE
    supports_screenshot = True

    async def _fetch(self, url: str, options: PageOptions) -> BackendResult:
        req = self.resolver.resolve(url)
        wait = req.params.get("wait", options.wait_for) or 0
        screenshot = req.params.get("screenshot", options.screenshot)
        logger.info("[%s] Scraping %s with wait: %s and screenshot: %s", self.name, url, wait, screenshot)

        page_options = {"parsePDF": options.parse_pdf}
        if options.scroll_x_paths:
            page_options["scrollXPaths"] = list(options.scroll_x_paths)

        payload = {
            "url": url,
            "wait": wait,
            "screenshot": screenshot,
            "headers": options.headers,
            "pageOptions": page_options,
        }
        endpoint = self.settings.render_service_url.rstrip("/") + "/scrape"

        async with self.session.post(
            endpoint, json=payload, timeout=client_timeout(self.config.universal_timeout_ms + wait)
        ) as resp:
            if resp.status != 200:
                logger.error("[%s] Error fetching url: %s with status: %s", self.name, url, resp.status)
                data = await self._error_payload(resp)
                return BackendResult(status_code=data.get("pageStatusCode"), error_message=data.get("pageError"))

            pdf_result = await self._pdf_or_none(url, resp, options)
            if pdf_result is not None:
                return pdf_result

            data = await resp.json(content_type=None)

        return BackendResult(
            raw_content=data.get("content") or "",
            screenshot=data.get("screenshot") or "",
            status_code=data.get("pageStatusCode"),
            error_message=data.get("pageError"),
        )
