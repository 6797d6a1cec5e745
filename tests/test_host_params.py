from pathlib import Path

import pytest
from pydantic import ValidationError

from pagefetch.host_params import (
    SCRAPE_MARKER_HEADERS,
    HostOverride,
    HostParamsResolver,
    load_host_params,
    normalize_host,
)
from pagefetch.settings import Backend


@pytest.mark.parametrize("url,host", [
    ("https://www.example.com/a?b=1", "example.com"),
    ("http://Docs.Example.com", "docs.example.com"),
    ("https://wwwfoo.com", "wwwfoo.com"),
    ("not a url", None),
    ("", None),
])
def test_normalize_host(url, host):
    assert normalize_host(url) == host


def test_unknown_host_gets_defaults(resolver, config):
    params = resolver.resolve("https://unknown.org/page")

    assert params.params == {"timeout": config.universal_timeout_ms, "wait_browser": config.default_wait_condition}
    assert params.headers == SCRAPE_MARKER_HEADERS
    assert params.default_backend is None
    assert params == resolver.defaults("https://unknown.org/page")


def test_override_fields_replace_defaults_verbatim(resolver):
    params = resolver.resolve("https://www.slow.example.com/x")

    # shallow merge: params replaced as a whole, headers kept
    assert params.params == {"wait": 2000, "wait_browser": "networkidle2"}
    assert params.headers == SCRAPE_MARKER_HEADERS


def test_forced_backend_override(resolver):
    params = resolver.resolve("https://forced.example.com")

    assert params.default_backend is Backend.FETCH
    assert "timeout" in params.params


def test_resolve_passes_wait_condition_and_timeout(resolver):
    params = resolver.resolve("https://unknown.org", "networkidle2", 7000)

    assert params.params == {"timeout": 7000, "wait_browser": "networkidle2"}


def test_malformed_url_falls_back_to_defaults(resolver):
    params = resolver.resolve("::::")

    assert params.params["timeout"] == resolver.config.universal_timeout_ms
    assert resolver.lookup("::::") is None


def test_resolved_params_do_not_leak_into_table(resolver, host_table):
    params = resolver.resolve("https://slow.example.com")
    params.params["wait"] = 1

    assert host_table["slow.example.com"].params["wait"] == 2000


def test_load_host_params_from_yaml(tmp_path: Path):
    path = tmp_path / "host_params.yaml"
    path.write_text(
        "www.Example.com:\n"
        "  default_backend: browser-service\n"
        "  params:\n"
        "    wait: 1500\n",
        encoding="utf-8",
    )

    table = load_host_params(path)

    assert set(table) == {"example.com"}
    assert table["example.com"].default_backend is Backend.BROWSER_SERVICE
    with pytest.raises(TypeError):
        table["other.com"] = HostOverride()


def test_load_host_params_rejects_unknown_backend(tmp_path: Path):
    path = tmp_path / "host_params.yaml"
    path.write_text("example.com:\n  default_backend: carrier-pigeon\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_host_params(path)


def test_load_host_params_missing_file(tmp_path: Path):
    assert dict(load_host_params(tmp_path / "missing.yaml")) == {}


def test_shipped_host_params_are_valid():
    table = load_host_params()

    assert "platform.openai.com" in table
    assert HostParamsResolver(table).resolve("https://platform.openai.com/docs").params["wait_browser"] == "networkidle2"
