"""
Fallback order planning: which backends to try for a URL, and in what order.

Requests that wait, screenshot or send custom headers imply browser behavior
the proxy and plain fetch cannot provide, so the heavy backends go first.

A host entry can force a backend to the front of the order. A forced backend
that is not configured is dropped with a warning instead, so an unavailable
backend is never planned.
"""

import logging
from collections.abc import Iterable

from pagefetch.settings import BASE_BACKENDS, Backend

logger = logging.getLogger(__name__)

DEFAULT_ORDER = (
    Backend.PROXY,
    Backend.RENDER_SERVICE,
    Backend.BROWSER_SERVICE,
    Backend.PROXY_LOAD,
    Backend.FETCH,
)

HEAVY_BACKENDS = (Backend.RENDER_SERVICE, Backend.BROWSER_SERVICE)


class FallbackPlanner:
    def __init__(self, available: Iterable[Backend]):
        available = set(available)
        # keep availability-scan order
        self.available = [b for b in BASE_BACKENDS if b in available]

    def plan(
        self,
        forced: Backend | None = None,
        want_wait: bool = False,
        want_screenshot: bool = False,
        has_headers: bool = False,
    ) -> list[Backend]:
        """Ordered, duplicate-free list of available backends to attempt."""
        order = list(DEFAULT_ORDER)
        if want_wait or want_screenshot or has_headers:
            order = [*HEAVY_BACKENDS, *(b for b in order if b not in HEAVY_BACKENDS)]

        order = [b for b in order if b in self.available]

        if forced is not None and forced not in self.available:
            logger.warning("Forced backend %s is not configured, ignoring", forced)
            forced = None

        candidates = [forced] if forced is not None else []
        candidates += order + self.available
        # dict keeps first occurrence
        return list(dict.fromkeys(candidates))
