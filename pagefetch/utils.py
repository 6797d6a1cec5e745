from collections.abc import Mapping

import aiohttp

from pagefetch.results import BackendResult

TIMEOUT_MESSAGE = "Request timed out"


def empty_result(error_message: str | None = None, status_code: int | None = None) -> BackendResult:
    """
    Convenience factory for a BackendResult with no content.
    Used for timeouts, transport errors and undecodable payloads so the rest
    of the pipeline can treat them like any other result.
    """
    return BackendResult(raw_content="", screenshot="", status_code=status_code, error_message=error_message)


def is_pdf_response(headers: Mapping[str, str]) -> bool:
    content_type = headers.get("Content-Type") or headers.get("content-type") or ""
    return "application/pdf" in content_type.lower()


def client_timeout(timeout_ms: int | float) -> aiohttp.ClientTimeout:
    return aiohttp.ClientTimeout(total=timeout_ms / 1000)


def error_text(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__
