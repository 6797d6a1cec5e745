"""
Audit log of backend attempts.

Every call to a backend is recorded exactly once, whatever way the call
exits. Recording never fails the attempt itself.
"""

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict, dataclass
from pathlib import Path

import pandas as pd

from .storage import save_df

logger = logging.getLogger(__name__)


@dataclass
class ScrapeLogEntry:
    """
    One backend attempt.

    Fields:
        url           : The URL that was requested.
        backend       : Backend id, e.g. "render-service" or "fetch".
        success       : True for a 2xx (or 404) page status, or a routed PDF.
        status_code   : Page status code if known.
        elapsed_s     : Wall time of the attempt in seconds.
        error_message : Provider/transport error text, if any.
        html          : Raw content returned by the backend.
    """
    url: str
    backend: str
    success: bool = False
    status_code: int | None = None
    elapsed_s: float | None = None
    error_message: str | None = None
    html: str = ""


def is_success_status(status_code: int | None) -> bool:
    if status_code is None:
        return False
    return 200 <= status_code < 300 or status_code == 404


class ScrapeLog:
    """
    Scrape log buffered in memory and appended as CSV through the storage layer.

    The buffer is flushed automatically once it holds `max_entries` records,
    and by SingleUrlScraper on exit.
    """

    def __init__(
        self,
        enabled: bool = True,
        name: str = "scrape_log",
        results_dir: Path | None = None,
        max_entries: int | None = None,
    ):
        self.enabled = enabled
        self.name = name
        self.results_dir = results_dir
        self.max_entries = max_entries
        self._entries: list[ScrapeLogEntry] = []

    @property
    def entries(self) -> list[ScrapeLogEntry]:
        return list(self._entries)

    @asynccontextmanager
    async def attempt(self, url: str, backend: str) -> AsyncIterator[ScrapeLogEntry]:
        """
        Time one backend attempt and record it on exit.

        The caller fills in the yielded entry; elapsed time is set here.
        """
        entry = ScrapeLogEntry(url=url, backend=str(backend))
        t0 = time.perf_counter()
        try:
            yield entry
        except Exception as e:
            if not entry.error_message:
                entry.error_message = str(e) or type(e).__name__
            raise
        finally:
            entry.elapsed_s = time.perf_counter() - t0
            await self.record(entry)

    async def record(self, entry: ScrapeLogEntry) -> None:
        if not self.enabled:
            return
        try:
            self._entries.append(entry)
            logger.debug(
                "[scrape-log] %s %s success=%s status=%s in %.2fs",
                entry.backend, entry.url, entry.success, entry.status_code, entry.elapsed_s or 0.0,
            )
            if self.max_entries and len(self._entries) >= self.max_entries:
                self.flush()
        except Exception:
            logger.warning("Failed to record scrape attempt for %s", entry.url, exc_info=True)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([asdict(e) for e in self._entries])

    def flush(self, name: str | None = None, results_dir: Path | None = None) -> Path | None:
        """Append the recorded attempts to <results_dir>/<name>.csv and clear them."""
        out_path = save_df(
            self.to_frame(), name or self.name, results_dir=results_dir or self.results_dir, append=True
        )
        self._entries.clear()
        return out_path
