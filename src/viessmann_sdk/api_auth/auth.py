"""
OAuth2 refresh-token exchange against the Viessmann identity provider.

POSTs a form-encoded `refresh_token` grant to the IAM token endpoint and
returns the decoded Token. No retries and no caching: the caller supplies the
refresh token on every call.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

from .. import config as config_mod
from ..http_client import (
    decode_json,
    raise_for_api_error,
    resolve_ssl_verify,
    resolve_timeout,
    send,
    session_scope,
)
from ..logging_utils import get_logger, sanitize_mapping
from ..models import Token

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def build_refresh_form(client_id: str, refresh_token: str) -> dict[str, str]:
    """Return the form fields of a refresh_token grant."""
    return {
        "grant_type": "refresh_token",
        "refresh_token": refresh_token,
        "client_id": client_id,
    }


def refresh_token(
    client_id: str,
    refresh_token: str,
    *,
    session: Optional[requests.Session] = None,
    timeout_seconds: Optional[float] = None,
    ssl_verify: Optional[bool] = None,
    log: Optional[logging.LoggerAdapter] = None,
) -> Token:
    """
    Exchange a refresh token for a new access token.

    Args:
        client_id: OAuth client id registered with Viessmann.
        refresh_token: Refresh token issued earlier by the identity provider.
        session: Optional requests session (a fresh one is used if None).
        timeout_seconds: HTTP timeout; defaults to VIESSMANN_TIMEOUT_SECONDS.
        ssl_verify: TLS verification; defaults to VIESSMANN_SSL_VERIFY.
        log: Optional logger.

    Returns:
        The decoded Token.

    Raises:
        TransportError: the request could not be sent or answered.
        ApiError: non-2xx response; message is the raw response body.
        DecodeError: 2xx response whose body is not a valid token payload.
    """
    log = log if log is not None else get_logger(__name__)
    url = config_mod.get_token_url()
    form = build_refresh_form(client_id, refresh_token)
    headers = {"Content-Type": FORM_CONTENT_TYPE}

    log.info("refreshing access token")
    log.debug("token request form (sanitized): %s", sanitize_mapping(form))

    with session_scope(session) as sess:
        resp = send(
            sess,
            "POST",
            url,
            log=log,
            data=form,
            headers=headers,
            timeout=resolve_timeout(timeout_seconds),
            verify=resolve_ssl_verify(ssl_verify),
        )
        raise_for_api_error(resp, url=url, log=log)
        token = decode_json(resp, Token.from_dict, url=url)

    log.info("access token acquired")
    log.debug(
        "token details: %s",
        {
            "expires_in": token.expires_in,
            "token_type": token.token_type,
            "refresh_token_rotated": token.refresh_token is not None,
        },
    )
    return token


__all__ = ["FORM_CONTENT_TYPE", "build_refresh_form", "refresh_token"]
