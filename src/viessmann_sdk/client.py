"""
Stateful convenience wrapper around the module-level operations.

Holds the OAuth client id and refresh token, the current access token (in
memory only) and one requests.Session reused for every call.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from .api_auth import auth as auth_mod
from .errors import ApiError
from .iot_data import overview as overview_mod
from .iot_data import resources
from .logging_utils import get_logger
from .models import Devices, Events, Feature, Features, Gateways, Installations, Overview, Token, UserInfo


class ViessmannClient:
    def __init__(
        self,
        client_id: str,
        refresh_token: str,
        *,
        access_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout_seconds: Optional[float] = None,
        ssl_verify: Optional[bool] = None,
        log: Optional[logging.LoggerAdapter] = None,
    ) -> None:
        self.client_id = client_id
        self.refresh_token = refresh_token
        self._access_token = access_token
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        self._timeout_seconds = timeout_seconds
        self._ssl_verify = ssl_verify
        self._log = log if log is not None else get_logger(__name__)

    def __enter__(self) -> "ViessmannClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self._session.close()

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    def _opts(self) -> dict[str, Any]:
        return {
            "session": self._session,
            "timeout_seconds": self._timeout_seconds,
            "ssl_verify": self._ssl_verify,
            "log": self._log,
        }

    def _require_token(self) -> str:
        if not self._access_token:
            raise ApiError("no access token; call refresh() first")
        return self._access_token

    def refresh(self) -> Token:
        """
        Exchange the stored refresh token for a new access token.

        Keeps the new access token in memory and adopts a rotated refresh
        token if the identity provider returned one.
        """
        token = auth_mod.refresh_token(self.client_id, self.refresh_token, **self._opts())
        self._access_token = token.access_token
        if token.refresh_token:
            self.refresh_token = token.refresh_token
        return token

    def user_info(self) -> UserInfo:
        return resources.get_user_info(self._require_token(), **self._opts())

    def installations(self) -> Installations:
        return resources.get_installations(self._require_token(), **self._opts())

    def gateways(self) -> Gateways:
        return resources.get_gateways(self._require_token(), **self._opts())

    def devices(self, installation_id: int, gateway_serial: str) -> Devices:
        return resources.get_devices(self._require_token(), installation_id, gateway_serial, **self._opts())

    def gateway_features(self, installation_id: int, gateway_serial: str) -> Features:
        return resources.get_gateway_features(self._require_token(), installation_id, gateway_serial, **self._opts())

    def device_features(self, installation_id: int, gateway_serial: str, device_id: str) -> Features:
        return resources.get_device_features(
            self._require_token(), installation_id, gateway_serial, device_id, **self._opts()
        )

    def device_feature(self, installation_id: int, gateway_serial: str, device_id: str, feature_name: str) -> Feature:
        return resources.get_device_feature(
            self._require_token(), installation_id, gateway_serial, device_id, feature_name, **self._opts()
        )

    def events(self) -> Events:
        return resources.get_events(self._require_token(), **self._opts())

    def overview(self) -> Overview:
        return overview_mod.get_overview(self._require_token(), **self._opts())

    def __repr__(self) -> str:
        return f"ViessmannClient(client_id={self.client_id!r}, has_access_token={bool(self._access_token)})"


__all__ = ["ViessmannClient"]
