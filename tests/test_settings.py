from pathlib import Path

from pagefetch.settings import Backend, BackendSettings, ScrapeConfig, load_backend_settings, load_scrape_config


def test_load_backend_settings_reads_env():
    settings = load_backend_settings({
        "RENDER_SERVICE_URL": "http://render.local",
        "PROXY_API_KEY": "abc",
        "BROWSER_SERVICE_URL": "",
    })

    assert settings.render_service_url == "http://render.local"
    assert settings.proxy_api_key == "abc"
    assert settings.browser_service_url is None


def test_available_backends_follow_configuration():
    settings = BackendSettings(proxy_api_key="abc")

    assert settings.available_backends() == [Backend.PROXY, Backend.PROXY_LOAD, Backend.FETCH]


def test_fetch_is_always_available():
    assert BackendSettings().available_backends() == [Backend.FETCH]


def test_load_scrape_config_filters_unknown_keys(tmp_path: Path):
    cfg_file = tmp_path / "scrape_config.yaml"
    cfg_file.write_text(
        "universal_timeout_ms: 20000\nmin_content_chars: 50\nnot_a_setting: 1\n",
        encoding="utf-8",
    )

    cfg = load_scrape_config(cfg_file)

    assert cfg.universal_timeout_ms == 20000
    assert cfg.min_content_chars == 50
    assert cfg.proxy_short_timeout_ms == ScrapeConfig().proxy_short_timeout_ms


def test_load_scrape_config_missing_file_uses_defaults(tmp_path: Path):
    assert load_scrape_config(tmp_path / "nope.yaml") == ScrapeConfig()


def test_load_scrape_config_non_mapping_uses_defaults(tmp_path: Path):
    cfg_file = tmp_path / "scrape_config.yaml"
    cfg_file.write_text("- a\n- b\n", encoding="utf-8")

    assert load_scrape_config(cfg_file) == ScrapeConfig()
