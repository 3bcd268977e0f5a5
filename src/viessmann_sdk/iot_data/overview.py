"""
Account overview: user info, then the devices of the first installation/gateway.

Selection rule: we auto-pick the first installation and the first gateway
returned by the list endpoints. Empty lists are an explicit ApiError rather
than an index failure. Any failing step aborts the flow unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Optional, TypeVar

import requests

from ..errors import ApiError
from ..http_client import session_scope
from ..logging_utils import get_logger
from ..models import Overview
from .resources import get_devices, get_gateways, get_installations, get_user_info

T = TypeVar("T")


def _require_first(items: Sequence[T], *, what: str, log: logging.LoggerAdapter) -> T:
    if not items:
        raise ApiError(f"No {what} found for this account.")
    if len(items) > 1:
        log.warning("account has %d %s; using the first one", len(items), what)
    return items[0]


def get_overview(
    access_token: str,
    *,
    session: Optional[requests.Session] = None,
    log: Optional[logging.LoggerAdapter] = None,
    **kwargs: Any,
) -> Overview:
    """
    Resolve the account's user info, first installation id, first gateway
    serial and that gateway's devices.

    One session is reused for all four requests (a fresh one if None).
    """
    log = log if log is not None else get_logger(__name__)
    with session_scope(session) as sess:
        opts = {"session": sess, "log": log, **kwargs}
        user = get_user_info(access_token, **opts)
        installation = _require_first(get_installations(access_token, **opts).data, what="installations", log=log)
        gateway = _require_first(get_gateways(access_token, **opts).data, what="gateways", log=log)
        devices = get_devices(access_token, installation.id, gateway.serial, **opts)

    log.debug(
        "overview resolved: %s",
        {
            "installation_id": installation.id,
            "gateway_serial": gateway.serial,
            "device_count": len(devices.data),
        },
    )
    return Overview(
        user=user,
        installation_id=installation.id,
        gateway_serial=gateway.serial,
        devices=devices,
    )
