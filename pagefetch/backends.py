import aiohttp

from .base_scraper import BaseScraper
from .browser_scraper import BrowserServiceScraper
from .host_params import HostParamsResolver
from .http_scraper import HttpScraper
from .pdf import PdfExtractor
from .proxy_scraper import ProxyScraper
from .render_scraper import RenderServiceScraper
from .scrape_log import ScrapeLog
from .settings import DEFAULT_SCRAPE_CONFIG, Backend, BackendSettings, ScrapeConfig


def build_backends(
    session: aiohttp.ClientSession,
    settings: BackendSettings,
    resolver: HostParamsResolver,
    pdf: PdfExtractor,
    scrape_log: ScrapeLog,
    config: ScrapeConfig | None = None,
) -> dict[Backend, BaseScraper]:
    """
    Instantiate every available backend, keyed by id.

    Backends whose endpoint/credential is not configured are left out.
    """
    cfg = config or DEFAULT_SCRAPE_CONFIG
    deps = dict(session=session, settings=settings, resolver=resolver, pdf=pdf, scrape_log=scrape_log, config=cfg)
    factories = {
        Backend.RENDER_SERVICE: lambda: RenderServiceScraper(**deps),
        Backend.PROXY: lambda: ProxyScraper(wait_browser=cfg.default_wait_condition, **deps),
        Backend.BROWSER_SERVICE: lambda: BrowserServiceScraper(**deps),
        Backend.PROXY_LOAD: lambda: ProxyScraper(wait_browser=cfg.load_wait_condition, **deps),
        Backend.FETCH: lambda: HttpScraper(**deps),
    }
    return {backend: factories[backend]() for backend in settings.available_backends()}
