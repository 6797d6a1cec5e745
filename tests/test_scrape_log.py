from pathlib import Path

import pandas as pd
import pytest

from pagefetch.scrape_log import ScrapeLog, is_success_status
from pagefetch.settings import PROJECT_ROOT
from pagefetch.storage import resolve_results_dir


@pytest.mark.parametrize("status,expected", [(200, True), (204, True), (404, True), (None, False), (403, False), (500, False)])
def test_success_status(status, expected):
    assert is_success_status(status) is expected


async def test_attempt_records_on_normal_exit():
    log = ScrapeLog()

    async with log.attempt("https://example.com", "fetch") as entry:
        entry.success = True
        entry.status_code = 200

    [recorded] = log.entries
    assert recorded.backend == "fetch"
    assert recorded.success is True
    assert recorded.elapsed_s >= 0


async def test_attempt_records_when_body_raises():
    log = ScrapeLog()

    with pytest.raises(RuntimeError):
        async with log.attempt("https://example.com", "proxy"):
            raise RuntimeError("boom")

    [recorded] = log.entries
    assert recorded.error_message == "boom"
    assert recorded.success is False


async def test_disabled_log_records_nothing():
    log = ScrapeLog(enabled=False)

    async with log.attempt("https://example.com", "fetch"):
        pass

    assert log.entries == []


async def test_flush_writes_csv(tmp_path: Path):
    log = ScrapeLog()
    async with log.attempt("https://example.com", "fetch") as entry:
        entry.status_code = 200

    out = log.flush("attempts", results_dir=tmp_path)

    assert out == tmp_path / "attempts.csv"
    df = pd.read_csv(out)
    assert list(df["backend"]) == ["fetch"]
    assert log.entries == []


def test_flush_empty_log_writes_nothing(tmp_path: Path):
    assert ScrapeLog().flush(results_dir=tmp_path) is None
    assert not any(tmp_path.iterdir())


async def test_full_buffer_is_flushed_automatically(tmp_path: Path):
    log = ScrapeLog(name="attempts", results_dir=tmp_path, max_entries=2)

    for backend in ("proxy", "fetch", "render-service"):
        async with log.attempt("https://example.com", backend):
            pass

    assert [e.backend for e in log.entries] == ["render-service"]
    assert list(pd.read_csv(tmp_path / "attempts.csv")["backend"]) == ["proxy", "fetch"]


async def test_flush_appends_to_existing_csv(tmp_path: Path):
    log = ScrapeLog(name="attempts", results_dir=tmp_path)

    for backend in ("proxy", "fetch"):
        async with log.attempt("https://example.com", backend):
            pass
        log.flush()

    assert list(pd.read_csv(tmp_path / "attempts.csv")["backend"]) == ["proxy", "fetch"]


def test_results_dir_resolution(tmp_path: Path):
    assert resolve_results_dir("out") == PROJECT_ROOT / "out"
    assert resolve_results_dir(str(tmp_path)) == tmp_path
