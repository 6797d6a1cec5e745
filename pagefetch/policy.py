"""
Policy module: decides, after each backend attempt, whether the scrape is
done, must stop, or should fall back to the next backend.

The logic is:
- explicit
- configurable
- easily auditable
"""

from enum import Enum

from pagefetch.results import AttemptOutcome, PageStatus
from pagefetch.settings import DEFAULT_SCRAPE_CONFIG, ScrapeConfig


class Verdict(str, Enum):
    SUCCEEDED = "succeeded"
    STOP = "stop"
    NEXT = "next"


def is_sufficient(text: str, config: ScrapeConfig | None = None) -> bool:
    cfg = config or DEFAULT_SCRAPE_CONFIG
    return len((text or "").strip()) >= cfg.min_content_chars


def judge(outcome: AttemptOutcome, status: PageStatus, config: ScrapeConfig | None = None) -> Verdict:
    if is_sufficient(outcome.text, config):
        return Verdict.SUCCEEDED

    # A confirmed "not found" will not be fixed by another backend
    if status.code == 404:
        return Verdict.STOP

    return Verdict.NEXT
