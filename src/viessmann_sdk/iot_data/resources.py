"""
Bearer-authenticated reads against the Viessmann resource API.

Every operation is one GET through `api_get_json`, parameterized only by URL
and decoder. Path parameters are interpolated as given (str.format); callers
supply URL-safe identifiers. Only the first page of a list is consumed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Optional, TypeVar, Union

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
from ..logging_utils import get_logger
from ..models import Devices, Events, Feature, Features, Gateways, Installations, UserInfo

T = TypeVar("T")

JSON_CONTENT_TYPE = "application/json"

InstallationId = Union[int, str]


def api_get_json(
    url: str,
    access_token: str,
    decoder: Callable[[Any], T],
    *,
    session: Optional[requests.Session] = None,
    timeout_seconds: Optional[float] = None,
    ssl_verify: Optional[bool] = None,
    log: Optional[logging.LoggerAdapter] = None,
) -> T:
    """
    Shared GET helper.

    - Adds Content-Type: application/json and Authorization: Bearer
    - No query parameters, no body
    - Non-2xx -> ApiError, transport failure -> TransportError,
      undecodable body -> DecodeError
    """
    log = log if log is not None else get_logger(__name__)
    headers = {
        "Content-Type": JSON_CONTENT_TYPE,
        "Authorization": f"Bearer {access_token}",
    }
    log.info("fetching %s", url)
    with session_scope(session) as sess:
        resp = send(
            sess,
            "GET",
            url,
            log=log,
            headers=headers,
            timeout=resolve_timeout(timeout_seconds),
            verify=resolve_ssl_verify(ssl_verify),
        )
        raise_for_api_error(resp, url=url, log=log)
        return decode_json(resp, decoder, url=url)


def get_user_info(access_token: str, **kwargs: Any) -> UserInfo:
    """Fetch the account identity (/users/me)."""
    return api_get_json(config_mod.get_users_me_url(), access_token, UserInfo.from_dict, **kwargs)


def get_installations(access_token: str, **kwargs: Any) -> Installations:
    return api_get_json(config_mod.get_iot_installations_url(), access_token, Installations.from_dict, **kwargs)


def get_gateways(access_token: str, **kwargs: Any) -> Gateways:
    return api_get_json(config_mod.get_iot_gateways_url(), access_token, Gateways.from_dict, **kwargs)


def devices_url(installation_id: InstallationId, gateway_serial: str) -> str:
    return config_mod.get_iot_devices_url_tmpl().format(
        installation_id=installation_id, gateway_serial=gateway_serial
    )


def get_devices(
    access_token: str,
    installation_id: InstallationId,
    gateway_serial: str,
    **kwargs: Any,
) -> Devices:
    """List the devices attached to one gateway of one installation."""
    url = devices_url(installation_id, gateway_serial)
    return api_get_json(url, access_token, Devices.from_dict, **kwargs)


def get_gateway_features(
    access_token: str,
    installation_id: InstallationId,
    gateway_serial: str,
    **kwargs: Any,
) -> Features:
    url = config_mod.get_iot_gateway_features_url_tmpl().format(
        installation_id=installation_id, gateway_serial=gateway_serial
    )
    return api_get_json(url, access_token, Features.from_dict, **kwargs)


def get_device_features(
    access_token: str,
    installation_id: InstallationId,
    gateway_serial: str,
    device_id: str,
    **kwargs: Any,
) -> Features:
    """
    Fetch all features of one device.

    Returns the decoded `data` array; each Feature keeps its raw `properties`.
    """
    url = config_mod.get_iot_features_url_tmpl().format(
        installation_id=installation_id,
        gateway_serial=gateway_serial,
        device_id=device_id,
    )
    return api_get_json(url, access_token, Features.from_dict, **kwargs)


def get_device_feature(
    access_token: str,
    installation_id: InstallationId,
    gateway_serial: str,
    device_id: str,
    feature_name: str,
    **kwargs: Any,
) -> Feature:
    """
    Fetch a single device feature by name (e.g. "heating.boiler.temperature").

    Response shape: {"data": {...}}. An unknown feature surfaces as the API's
    404 ApiError.
    """
    url = config_mod.get_iot_single_feature_url_tmpl().format(
        installation_id=installation_id,
        gateway_serial=gateway_serial,
        device_id=device_id,
        feature_name=feature_name,
    )
    return api_get_json(url, access_token, Feature.from_envelope, **kwargs)


def get_events(access_token: str, **kwargs: Any) -> Events:
    return api_get_json(config_mod.get_iot_events_url(), access_token, Events.from_dict, **kwargs)


__all__ = [
    "JSON_CONTENT_TYPE",
    "api_get_json",
    "devices_url",
    "get_device_feature",
    "get_device_features",
    "get_devices",
    "get_events",
    "get_gateway_features",
    "get_gateways",
    "get_installations",
    "get_user_info",
]
