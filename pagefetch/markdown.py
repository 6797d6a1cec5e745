import io
import logging
from functools import lru_cache

from bs4 import BeautifulSoup
from markitdown import MarkItDown

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _converter() -> MarkItDown:
    return MarkItDown()


def parse_markdown(html: str) -> str:
    """
    Convert cleaned HTML to markdown.

    Falls back to the plain text of the document if markitdown fails on it.
    """
    if not html or not html.strip():
        return ""

    try:
        stream = io.BytesIO(html.encode("utf-8"))
        result = _converter().convert_stream(stream, file_extension=".html")
        return result.text_content.strip() if result and result.text_content else ""
    except Exception as e:
        logger.debug("markitdown conversion failed, using plain text: %s", e)
        return BeautifulSoup(html, "html.parser").get_text("\n", strip=True)
