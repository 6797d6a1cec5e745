import logging
from typing import Any

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# metadata key -> (attribute, value) of the <meta> tag carrying it
META_TAGS = {
    "description": ("name", "description"),
    "keywords": ("name", "keywords"),
    "robots": ("name", "robots"),
    "ogTitle": ("property", "og:title"),
    "ogDescription": ("property", "og:description"),
    "ogUrl": ("property", "og:url"),
    "ogImage": ("property", "og:image"),
    "ogAudio": ("property", "og:audio"),
    "ogDeterminer": ("property", "og:determiner"),
    "ogLocale": ("property", "og:locale"),
    "ogSiteName": ("property", "og:site_name"),
    "ogVideo": ("property", "og:video"),
    "dctermsCreated": ("name", "dcterms.created"),
    "dcDateCreated": ("name", "dc.date.created"),
    "dcDate": ("name", "dc.date"),
    "dctermsType": ("name", "dcterms.type"),
    "dcType": ("name", "dc.type"),
    "dctermsAudience": ("name", "dcterms.audience"),
    "dctermsSubject": ("name", "dcterms.subject"),
    "dcSubject": ("name", "dc.subject"),
    "dcDescription": ("name", "dc.description"),
    "dctermsKeywords": ("name", "dcterms.keywords"),
    "modifiedTime": ("property", "article:modified_time"),
    "publishedTime": ("property", "article:published_time"),
    "articleTag": ("property", "article:tag"),
    "articleSection": ("property", "article:section"),
}


def _meta_content(soup: BeautifulSoup, attr: str, value: str) -> str | None:
    tag = soup.find("meta", attrs={attr: value})
    if tag is None:
        return None
    content = tag.get("content")
    return content.strip() if isinstance(content, str) and content.strip() else None


def extract_metadata(soup: BeautifulSoup, url: str) -> dict[str, Any]:
    """
    Page metadata from a parsed document.

    Only keys found on the page are returned. og:locale:alternate may repeat
    and is returned as a list.
    """
    metadata: dict[str, Any] = {}

    if soup.title and soup.title.string:
        metadata["title"] = soup.title.string.strip()

    html_tag = soup.find("html")
    lang = html_tag.get("lang") if html_tag else None
    if lang:
        metadata["language"] = lang

    for key, (attr, value) in META_TAGS.items():
        content = _meta_content(soup, attr, value)
        if content is not None:
            metadata[key] = content

    alternates = [
        tag.get("content") for tag in soup.find_all("meta", attrs={"property": "og:locale:alternate"})
        if tag.get("content")
    ]
    if alternates:
        metadata["ogLocaleAlternate"] = alternates

    logger.debug("Extracted %d metadata fields from %s", len(metadata), url)
    return metadata
