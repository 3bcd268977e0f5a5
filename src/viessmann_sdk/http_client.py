"""
HTTP plumbing shared by token exchange and resource reads.

Maps the three failure points of a request onto the error taxonomy:
- requests.RequestException   -> TransportError
- non-2xx status              -> ApiError (body verbatim)
- undecodable 2xx body        -> DecodeError
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, Optional, TypeVar

import requests

from . import config as config_mod
from .errors import ApiError, DecodeError, TransportError
from .logging_utils import get_logger, sanitize_mapping, sanitize_text

T = TypeVar("T")

# Keep logged bodies short; the full body is still carried by ApiError.
_LOG_BODY_LIMIT = 800


@contextmanager
def session_scope(session: Optional[requests.Session]) -> Iterator[requests.Session]:
    """
    Yield the caller's session, or a fresh one that is closed afterwards.
    """
    if session is not None:
        yield session
        return
    with requests.Session() as owned:
        yield owned


def resolve_timeout(timeout_seconds: Optional[float]) -> float:
    return float(timeout_seconds) if timeout_seconds is not None else config_mod.get_timeout_seconds()


def resolve_ssl_verify(ssl_verify: Optional[bool]) -> bool:
    return bool(ssl_verify) if ssl_verify is not None else config_mod.get_ssl_verify()


def send(
    session: requests.Session,
    method: str,
    url: str,
    *,
    log: Optional[logging.LoggerAdapter] = None,
    **kwargs: Any,
) -> requests.Response:
    """
    Send one request and return the response, whatever its status.

    Raises TransportError when no response could be obtained.
    """
    log = log if log is not None else get_logger()
    log.debug(
        "%s request details (sanitized): %s",
        method,
        {
            "url": url,
            "headers": sanitize_mapping(kwargs.get("headers") or {}),
            "timeout_seconds": kwargs.get("timeout"),
            "ssl_verify": kwargs.get("verify"),
        },
    )

    start = time.perf_counter()
    try:
        resp = getattr(session, method.lower())(url, **kwargs)
    except requests.exceptions.RequestException as e:
        status_code = e.response.status_code if e.response is not None else None
        log.error("%s %s failed before a response was received: %s", method, url, type(e).__name__)
        raise TransportError(f"{method} {url} failed: {e}", status_code=status_code) from e
    elapsed_ms = int((time.perf_counter() - start) * 1000)

    log.debug(
        "%s response details: %s",
        method,
        {
            "url": url,
            "status_code": resp.status_code,
            "elapsed_ms": elapsed_ms,
            "content_type": resp.headers.get("Content-Type"),
        },
    )
    return resp


def raise_for_api_error(resp: requests.Response, *, url: str, log: Optional[logging.LoggerAdapter] = None) -> None:
    """Raise ApiError carrying the body text verbatim unless the status is 2xx."""
    if 200 <= resp.status_code < 300:
        return
    log = log if log is not None else get_logger()
    body = resp.text or ""
    log.warning(
        "%s returned HTTP %s. Body (truncated, sanitized): %r",
        url,
        resp.status_code,
        sanitize_text(body[:_LOG_BODY_LIMIT]),
    )
    raise ApiError(body, status_code=resp.status_code)


def decode_json(resp: requests.Response, decoder: Callable[[Any], T], *, url: str) -> T:
    """
    Parse a 2xx body as JSON and hand it to `decoder`.

    JSON syntax errors become DecodeError; decoders raise DecodeError themselves
    for shape errors.
    """
    try:
        payload = resp.json()
    except ValueError as e:
        raise DecodeError(f"{url} response was not valid JSON: {e}") from e
    return decoder(payload)


__all__ = [
    "decode_json",
    "raise_for_api_error",
    "resolve_ssl_verify",
    "resolve_timeout",
    "send",
    "session_scope",
]
