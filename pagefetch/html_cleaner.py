import logging

from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from pagefetch.options import PageOptions

logger = logging.getLogger(__name__)

ALWAYS_REMOVED = "script, style, noscript, meta, head"

# Page chrome dropped when only the main content is wanted
NON_MAIN_SELECTORS = [
    "header", "footer", "nav", "aside",
    ".header", ".top", ".navbar", "#header",
    ".footer", ".bottom", "#footer",
    ".sidebar", ".side", ".aside", "#sidebar",
    ".modal", ".popup", "#modal", ".overlay",
    ".ad", ".ads", ".advert", "#ad",
    ".lang-selector", ".language", "#language-selector",
    ".social", ".social-media", ".social-links", "#social",
    ".menu", ".navigation", "#nav",
    ".breadcrumbs", "#breadcrumbs",
    "#search-form", ".search", "#search",
    ".share", "#share",
    ".widget", "#widget",
    ".cookie", "#cookie",
]


def _decompose(soup: BeautifulSoup, selector: str) -> None:
    try:
        matches = soup.select(selector)
    except SelectorSyntaxError:
        logger.warning("Ignoring invalid selector %r", selector)
        return
    for el in matches:
        # nested matches go with their ancestor
        if not el.decomposed:
            el.decompose()


def remove_unwanted_elements(html: str, options: PageOptions | None = None) -> str:
    """Strip scripts, styles and (optionally) navigation chrome from html."""
    options = options or PageOptions()
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")

    if options.only_include_tags:
        kept = BeautifulSoup("<div></div>", "html.parser")
        root = kept.div
        for selector in options.only_include_tags:
            try:
                matches = soup.select(selector)
            except SelectorSyntaxError:
                logger.warning("Ignoring invalid selector %r", selector)
                continue
            for el in matches:
                root.append(el.extract())
        return str(root)

    _decompose(soup, ALWAYS_REMOVED)

    for selector in options.remove_tags:
        _decompose(soup, selector)

    if options.only_main_content:
        for selector in NON_MAIN_SELECTORS:
            _decompose(soup, selector)

    return str(soup)
