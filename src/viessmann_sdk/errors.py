"""
Error taxonomy shared by every Viessmann API operation.

Three concrete kinds escape the public API:
- TransportError: the request could not be sent or the response not received
- ApiError:       the server answered with a non-2xx status
- DecodeError:    a 2xx body could not be decoded into the expected record
"""

from __future__ import annotations

from typing import Optional


class ViessmannError(RuntimeError):
    """Base class for all errors raised by viessmann_sdk."""


class TransportError(ViessmannError):
    """Connection, TLS or timeout failure below the HTTP layer."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ApiError(ViessmannError):
    """
    Non-success HTTP response.

    The message is the raw response body, verbatim; the upstream error payload
    is not parsed.
    """

    def __init__(self, body: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(body)
        self.body = body
        self.status_code = status_code


class DecodeError(ViessmannError):
    """A success response whose body does not match the expected shape."""


__all__ = ["ApiError", "DecodeError", "TransportError", "ViessmannError"]
