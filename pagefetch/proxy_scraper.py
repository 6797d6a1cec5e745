import logging
from typing import Any

from .base_scraper import BaseScraper
from .options import PageOptions
from .results import BackendResult
from .settings import Backend
from .utils import client_timeout

logger = logging.getLogger(__name__)

# Custom headers are only forwarded by the proxy when prefixed.
FORWARDED_HEADER_PREFIX = "Spb-"


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ProxyScraper(BaseScraper):
    """
    SaaS rendering proxy.

    Two modes share this class:
    - "fast" (`proxy`): waits for domcontentloaded, short timeout when the
      request disables fallback
    - "full-load" (`proxy-load`): waits for networkidle2
    The provider reports the page's own status (transparent_status_code).
    """

    def __init__(self, *args, wait_browser: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.wait_browser = wait_browser or self.config.default_wait_condition
        if self.wait_browser == self.config.load_wait_condition:
            self.name = Backend.PROXY_LOAD
        else:
            self.name = Backend.PROXY

    def timeout_ms(self, options: PageOptions) -> int:
        if self.name is Backend.PROXY and options.fallback is False:
            return self.config.proxy_short_timeout_ms
        return self.config.proxy_timeout_ms

    def build_query(self, url: str, options: PageOptions) -> tuple[dict[str, str], dict[str, str], int]:
        """Query string, forwarded headers and the provider-side timeout for one call."""
        req = self.resolver.resolve(url, self.wait_browser, self.timeout_ms(options))
        timeout_ms = int(req.params.get("timeout", self.timeout_ms(options)))

        query = {"api_key": self.settings.proxy_api_key, "url": url}
        query.update({k: _query_value(v) for k, v in req.params.items() if v is not None})
        query["transparent_status_code"] = "True"

        headers = {**req.headers, **(options.headers or {})}
        forwarded = {f"{FORWARDED_HEADER_PREFIX}{k}": v for k, v in headers.items()}
        if forwarded:
            query["forward_headers"] = "true"
        return query, forwarded, timeout_ms

    async def _fetch(self, url: str, options: PageOptions) -> BackendResult:
        query, headers, timeout_ms = self.build_query(url, options)

        async with self.session.get(
            self.config.proxy_api_url,
            params=query,
            headers=headers,
            timeout=client_timeout(timeout_ms + self.config.proxy_timeout_margin_ms),
        ) as resp:
            if not 200 <= resp.status < 300:
                logger.error("[%s] Error fetching url: %s with status: %s", self.name, url, resp.status)
                return BackendResult(status_code=resp.status, error_message=resp.reason)

            pdf_result = await self._pdf_or_none(url, resp, options)
            if pdf_result is not None:
                return pdf_result

            body = await resp.read()

        page_error = resp.reason if resp.reason != "OK" else None
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.error("[%s] Error decoding response data for url: %s -> %s", self.name, url, e)
            return BackendResult(status_code=resp.status, error_message=str(e))

        return BackendResult(raw_content=text, status_code=resp.status, error_message=page_error)
