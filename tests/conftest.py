from types import MappingProxyType

import pytest

from fakes import FakePdf
from pagefetch.host_params import HostOverride, HostParamsResolver
from pagefetch.scrape_log import ScrapeLog
from pagefetch.settings import BackendSettings, ScrapeConfig


@pytest.fixture
def config():
    return ScrapeConfig()


@pytest.fixture
def all_settings():
    return BackendSettings(
        render_service_url="http://render.local",
        proxy_api_key="key-123",
        browser_service_url="http://browser.local/scrape",
    )


@pytest.fixture
def host_table():
    return MappingProxyType({
        "slow.example.com": HostOverride(params={"wait": 2000, "wait_browser": "networkidle2"}),
        "forced.example.com": HostOverride(default_backend="fetch"),
    })


@pytest.fixture
def resolver(host_table, config):
    return HostParamsResolver(host_table, config)


@pytest.fixture
def scrape_log():
    return ScrapeLog()


@pytest.fixture
def fake_pdf():
    return FakePdf()
