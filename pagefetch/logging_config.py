"""
Logging setup for scripts and services embedding pagefetch.

scrape_single_url calls setup_logging on first use; services that create a
SingleUrlScraper themselves call it at startup, or configure logging their own
way. Default level is INFO; override with the LOG_LEVEL env var.
"""

import logging
import logging.config
import os

_CONFIGURED = False


def _normalize_level(level: str) -> str:
    lvl = (level or "").strip().upper()
    valid = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
    return lvl if lvl in valid else "INFO"


def setup_logging(level: str | None = None) -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return

    log_level = _normalize_level(level or os.getenv("LOG_LEVEL", "INFO"))

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s.%(msecs)03d | %(levelname)s | %(name)s | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"level": log_level, "handlers": ["default"]},
        "loggers": {
            # aiohttp access/internal logs are noisy at INFO
            "aiohttp": {"level": "WARNING"},
            "pdfminer": {"level": "WARNING"},
        },
    })
    _CONFIGURED = True
