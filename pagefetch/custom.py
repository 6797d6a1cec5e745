"""
Custom scraping rules.

Some pages are recognisable from the first fetch as needing something else:
a docs framework that only renders after scrolling, or a Google Drive viewer
that wraps a PDF. A rule turns such a page into a single directive for one
extra fetch.
"""

import re
from dataclasses import dataclass

from pagefetch.settings import Backend

PDF = "pdf"

GOOGLE_DRIVE_FILE_RE = re.compile(r"https://drive\.google\.com/file/d/([^/]+)/view")


@dataclass(frozen=True)
class CustomScrape:
    """Directive for the one extra fetch. backend is Backend.RENDER_SERVICE or PDF."""
    backend: Backend | str
    url: str
    wait_after_load: int = 0
    scroll_x_paths: tuple[str, ...] = ()


def handle_custom_scraping(text: str, url: str) -> CustomScrape | None:
    # ReadMe-hosted API references load the playground lazily
    if '<meta name="readme-deck"' in text:
        return CustomScrape(
            backend=Backend.RENDER_SERVICE,
            url=url,
            wait_after_load=1000,
            scroll_x_paths=('//*[@id="ReferencePlayground"]/section[3]/div/pre/div/div/div[5]',),
        )

    # Vanta trust centers
    if '<link href="https://static.vanta.com' in text:
        return CustomScrape(backend=Backend.RENDER_SERVICE, url=url, wait_after_load=3000)

    match = GOOGLE_DRIVE_FILE_RE.search(url)
    if match:
        file_id = match.group(1)
        return CustomScrape(backend=PDF, url=f"https://drive.google.com/uc?export=download&id={file_id}")

    return None
