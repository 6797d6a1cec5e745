"""
Host parameter resolution.

Per-host overrides live in host_params.yaml, keyed by hostname without the
scheme and without a leading "www.":

    platform.openai.com:
      params:
        wait_browser: networkidle2
        block_resources: false
    news.ycombinator.com:
      default_backend: browser-service

An entry is shallow-merged over the default request parameters, so a
`params` mapping in an entry replaces the default `params` as a whole.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, Field

from pagefetch.settings import DEFAULT_SCRAPE_CONFIG, PROJECT_ROOT, Backend, ScrapeConfig

logger = logging.getLogger(__name__)

SCRAPE_MARKER_HEADERS = {"ScrapingService-Request": "TRUE"}


class HostOverride(BaseModel):
    default_backend: Backend | None = None
    params: dict[str, Any] | None = None
    headers: dict[str, str] | None = None


class RequestParams(BaseModel):
    url: str
    params: dict[str, Any] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)
    default_backend: Backend | None = None


HostParamsTable = Mapping[str, HostOverride]


def normalize_host(url: str) -> str | None:
    """Return the lowercase hostname of url without "www.", or None if url is malformed."""
    try:
        host = urlparse(url.strip()).hostname
    except ValueError:
        return None
    if not host:
        return None
    if host.startswith("www."):
        host = host[len("www."):]
    return host


def load_host_params(path: str | Path | None = None, config: ScrapeConfig | None = None) -> HostParamsTable:
    """
    Load the host override table from YAML.

    A missing file yields an empty table. An unknown backend name raises a
    pydantic ValidationError.
    """
    cfg = config or DEFAULT_SCRAPE_CONFIG
    p = Path(path) if path is not None else Path(cfg.host_params_path)
    if not p.is_absolute():
        p = PROJECT_ROOT / p

    if not p.exists():
        logger.info("[config] Host params file not found at %s, no host overrides", p)
        return MappingProxyType({})

    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        logger.warning("[config] Expected mapping in %s, got %s, no host overrides", p, type(data))
        return MappingProxyType({})

    table = {}
    for host, entry in data.items():
        key = normalize_host(f"http://{host}") or str(host).lower()
        table[key] = HostOverride.model_validate(entry or {})
    return MappingProxyType(table)


class HostParamsResolver:
    """Overlays the host override table onto default request parameters."""

    def __init__(self, table: HostParamsTable | None = None, config: ScrapeConfig | None = None):
        self.table = MappingProxyType(dict(table or {}))
        self.config = config or DEFAULT_SCRAPE_CONFIG

    def lookup(self, url: str) -> HostOverride | None:
        host = normalize_host(url)
        if host is None:
            logger.warning("Invalid URL %r, using default params", url)
            return None
        return self.table.get(host)

    def defaults(self, url: str, wait_condition: str | None = None, timeout_ms: int | None = None) -> RequestParams:
        return RequestParams(
            url=url,
            params={
                "timeout": timeout_ms if timeout_ms is not None else self.config.universal_timeout_ms,
                "wait_browser": wait_condition or self.config.default_wait_condition,
            },
            headers=dict(SCRAPE_MARKER_HEADERS),
        )

    def resolve(self, url: str, wait_condition: str | None = None, timeout_ms: int | None = None) -> RequestParams:
        """
        Effective request parameters for url.

        Never raises: a malformed URL is logged and gets the defaults.
        """
        defaults = self.defaults(url, wait_condition, timeout_ms)
        entry = self.lookup(url)
        if entry is None:
            return defaults
        overrides = entry.model_dump(exclude_unset=True, exclude_none=True)
        return defaults.model_copy(update=overrides, deep=True)
