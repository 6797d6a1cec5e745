import logging
import os
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[1]


class Backend(str, Enum):
    """Identifiers of the fetching backends, as used in host_params.yaml."""

    RENDER_SERVICE = "render-service"
    PROXY = "proxy"
    BROWSER_SERVICE = "browser-service"
    PROXY_LOAD = "proxy-load"
    FETCH = "fetch"

    def __str__(self) -> str:
        return self.value


# Availability scan order
BASE_BACKENDS = (
    Backend.RENDER_SERVICE,
    Backend.PROXY,
    Backend.BROWSER_SERVICE,
    Backend.PROXY_LOAD,
    Backend.FETCH,
)


class BackendSettings(BaseModel):
    """
    Endpoints and credentials of the remote backends.

    A backend whose endpoint/credential is missing is unavailable and never
    planned. The plain fetch backend needs nothing and is always available.
    """
    render_service_url: str | None = None
    proxy_api_key: str | None = None
    browser_service_url: str | None = None

    def is_available(self, backend: Backend) -> bool:
        if backend in (Backend.PROXY, Backend.PROXY_LOAD):
            return bool(self.proxy_api_key)
        if backend is Backend.RENDER_SERVICE:
            return bool(self.render_service_url)
        if backend is Backend.BROWSER_SERVICE:
            return bool(self.browser_service_url)
        return True

    def available_backends(self) -> list[Backend]:
        return [b for b in BASE_BACKENDS if self.is_available(b)]


def load_backend_settings(environ: dict[str, str] | None = None) -> BackendSettings:
    """
    Read backend endpoints from the environment.

    Empty values count as unset.
    """
    env = os.environ if environ is None else environ
    return BackendSettings(
        render_service_url=env.get("RENDER_SERVICE_URL") or None,
        proxy_api_key=env.get("PROXY_API_KEY") or None,
        browser_service_url=env.get("BROWSER_SERVICE_URL") or None,
    )


@dataclass
class ScrapeConfig:
    """
    Central configuration for scraping behavior.

    Values can be overridden via scrape_config.yaml at the project root.
    """

    # General
    user_agent: str = "Mozilla/5.0"
    min_content_chars: int = 100

    # Timeouts (milliseconds)
    universal_timeout_ms: int = 15_000
    proxy_timeout_ms: int = 15_000
    proxy_short_timeout_ms: int = 7_000  # used when fallback is disabled
    proxy_timeout_margin_ms: int = 5_000

    # Wait conditions
    default_wait_condition: str = "domcontentloaded"
    load_wait_condition: str = "networkidle2"

    # Rendering proxy API
    proxy_api_url: str = "https://app.scrapingbee.com/api/v1/"

    # Host overrides
    host_params_path: str = "host_params.yaml"

    # Audit log, appended to <results_dir>/<scrape_log_name>.csv
    scrape_log_enabled: bool = True
    scrape_log_name: str = "scrape_log"
    scrape_log_max_entries: int = 500  # buffered records before an automatic flush
    results_dir: str = "results"


def load_scrape_config(path: str | Path | None = None) -> ScrapeConfig:
    """
    Load ScrapeConfig from YAML if present; otherwise use defaults.

    By default, looks for `scrape_config.yaml` at the project root.
    """

    if path is None:
        path = PROJECT_ROOT / "scrape_config.yaml"

    path = Path(path)

    if not path.exists():
        logger.info("[config] YAML not found at %s, using defaults", path)
        return ScrapeConfig()

    raw = path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw) or {}

    if not isinstance(data, dict):
        logger.warning("[config] Expected mapping in %s, got %s, using defaults", path, type(data))
        return ScrapeConfig()

    allowed_keys = {f.name for f in fields(ScrapeConfig)}
    filtered = {k: v for k, v in data.items() if k in allowed_keys}

    return ScrapeConfig(**filtered)

DEFAULT_SCRAPE_CONFIG = load_scrape_config()
