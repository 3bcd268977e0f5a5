"""
Typed records for Viessmann API responses.

Every record is a frozen dataclass built only by its `from_dict` decoder.
Decoders are strict: a missing required key or a wrong JSON type raises
DecodeError; no defaults are substituted for required fields. Unknown keys
are ignored.

Some API keys are camelCase; decoders accept both the API key and the
snake_case field name:
    loginId   -> UserInfo.login_id
    isEnabled -> Feature.enabled
    isReady   -> Feature.ready
    eventType -> Event.event_type
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .errors import DecodeError

_MISSING = object()

_TYPE_NAMES = {str: "string", int: "integer", bool: "boolean", dict: "object"}


def _require_object(payload: Any, *, what: str) -> dict:
    if not isinstance(payload, dict):
        raise DecodeError(f"{what}: expected JSON object, got {type(payload).__name__}.")
    return payload


def _lookup(obj: dict, keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in obj:
            return obj[key]
    return _MISSING


def _is_type(value: Any, expected: type) -> bool:
    # JSON booleans decode to bool, which is an int subclass.
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, expected)


def _require_field(obj: dict, *keys: str, expected: type, what: str) -> Any:
    value = _lookup(obj, keys)
    if value is _MISSING:
        raise DecodeError(f"{what}: missing required key {keys[0]!r}.")
    if not _is_type(value, expected):
        raise DecodeError(
            f"{what}: key {keys[0]!r} must be {_TYPE_NAMES[expected]}, got {type(value).__name__}."
        )
    return value


def _optional_field(obj: dict, *keys: str, expected: type, what: str) -> Any:
    value = _lookup(obj, keys)
    if value is _MISSING or value is None:
        return None
    if not _is_type(value, expected):
        raise DecodeError(
            f"{what}: key {keys[0]!r} must be {_TYPE_NAMES[expected]}, got {type(value).__name__}."
        )
    return value


def _extract_data_list(payload: Any, *, what: str) -> list:
    """
    Unwrap the {"data": [...]} envelope used by every list endpoint.
    """
    obj = _require_object(payload, what=what)
    if "data" not in obj:
        raise DecodeError(f"{what}: missing 'data' envelope.")
    items = obj["data"]
    if not isinstance(items, list):
        raise DecodeError(f"{what}: 'data' must be a list, got {type(items).__name__}.")
    return items


@dataclass(frozen=True)
class Token:
    access_token: str
    expires_in: int
    refresh_token: Optional[str] = None
    token_type: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "Token":
        obj = _require_object(payload, what="token")
        return cls(
            access_token=_require_field(obj, "access_token", expected=str, what="token"),
            expires_in=_require_field(obj, "expires_in", expected=int, what="token"),
            refresh_token=_optional_field(obj, "refresh_token", expected=str, what="token"),
            token_type=_optional_field(obj, "token_type", expected=str, what="token"),
        )

    def __repr__(self) -> str:
        # Tokens are secrets; keep them out of reprs that may end up in logs.
        return f"Token(access_token=<redacted>, expires_in={self.expires_in}, token_type={self.token_type!r})"


@dataclass(frozen=True)
class UserInfo:
    login_id: str
    id: str

    @classmethod
    def from_dict(cls, payload: Any) -> "UserInfo":
        obj = _require_object(payload, what="user info")
        return cls(
            login_id=_require_field(obj, "loginId", "login_id", expected=str, what="user info"),
            id=_require_field(obj, "id", expected=str, what="user info"),
        )

    def to_dict(self) -> dict:
        return {"login_id": self.login_id, "id": self.id}


@dataclass(frozen=True)
class Installation:
    id: int

    @classmethod
    def from_dict(cls, payload: Any) -> "Installation":
        obj = _require_object(payload, what="installation")
        return cls(id=_require_field(obj, "id", expected=int, what="installation"))

    def to_dict(self) -> dict:
        return {"id": self.id}


@dataclass(frozen=True)
class Gateway:
    serial: str

    @classmethod
    def from_dict(cls, payload: Any) -> "Gateway":
        obj = _require_object(payload, what="gateway")
        return cls(serial=_require_field(obj, "serial", expected=str, what="gateway"))

    def to_dict(self) -> dict:
        return {"serial": self.serial}


@dataclass(frozen=True)
class Device:
    id: str

    @classmethod
    def from_dict(cls, payload: Any) -> "Device":
        obj = _require_object(payload, what="device")
        return cls(id=_require_field(obj, "id", expected=str, what="device"))

    def to_dict(self) -> dict:
        return {"id": self.id}


@dataclass(frozen=True)
class Feature:
    """
    A named capability or data point of a device or gateway.

    `properties` is passed through as returned by the API (empty when absent);
    its shape differs per feature (scalars, day/week/month arrays, ...).
    """

    feature: str
    enabled: bool
    ready: bool
    properties: dict = field(default_factory=dict, hash=False)

    @classmethod
    def from_dict(cls, payload: Any) -> "Feature":
        obj = _require_object(payload, what="feature")
        properties = _optional_field(obj, "properties", expected=dict, what="feature")
        return cls(
            feature=_require_field(obj, "feature", expected=str, what="feature"),
            enabled=_require_field(obj, "isEnabled", "enabled", expected=bool, what="feature"),
            ready=_require_field(obj, "isReady", "ready", expected=bool, what="feature"),
            properties=properties if properties is not None else {},
        )

    @classmethod
    def from_envelope(cls, payload: Any) -> "Feature":
        """Decode the single-feature response shape {"data": {...}}."""
        obj = _require_object(payload, what="feature response")
        if "data" not in obj:
            raise DecodeError("feature response: missing 'data' envelope.")
        return cls.from_dict(obj["data"])

    def to_dict(self) -> dict:
        return {
            "feature": self.feature,
            "enabled": self.enabled,
            "ready": self.ready,
            "properties": self.properties,
        }


@dataclass(frozen=True)
class Event:
    event_type: str

    @classmethod
    def from_dict(cls, payload: Any) -> "Event":
        obj = _require_object(payload, what="event")
        return cls(event_type=_require_field(obj, "eventType", "event_type", expected=str, what="event"))

    def to_dict(self) -> dict:
        return {"event_type": self.event_type}


@dataclass(frozen=True)
class Installations:
    data: tuple[Installation, ...]

    @classmethod
    def from_dict(cls, payload: Any) -> "Installations":
        items = _extract_data_list(payload, what="installations")
        return cls(data=tuple(Installation.from_dict(x) for x in items))

    def to_dict(self) -> dict:
        return {"data": [x.to_dict() for x in self.data]}


@dataclass(frozen=True)
class Gateways:
    data: tuple[Gateway, ...]

    @classmethod
    def from_dict(cls, payload: Any) -> "Gateways":
        items = _extract_data_list(payload, what="gateways")
        return cls(data=tuple(Gateway.from_dict(x) for x in items))

    def to_dict(self) -> dict:
        return {"data": [x.to_dict() for x in self.data]}


@dataclass(frozen=True)
class Devices:
    data: tuple[Device, ...]

    @classmethod
    def from_dict(cls, payload: Any) -> "Devices":
        items = _extract_data_list(payload, what="devices")
        return cls(data=tuple(Device.from_dict(x) for x in items))

    def to_dict(self) -> dict:
        return {"data": [x.to_dict() for x in self.data]}


@dataclass(frozen=True)
class Features:
    data: tuple[Feature, ...]

    @classmethod
    def from_dict(cls, payload: Any) -> "Features":
        items = _extract_data_list(payload, what="features")
        return cls(data=tuple(Feature.from_dict(x) for x in items))

    def get(self, name: str) -> Optional[Feature]:
        """
        Return the feature named `name`, or None if it is absent or disabled.
        """
        for f in self.data:
            if f.feature == name:
                return f if f.enabled else None
        return None

    def to_dict(self) -> dict:
        return {"data": [x.to_dict() for x in self.data]}


@dataclass(frozen=True)
class Events:
    data: tuple[Event, ...]

    @classmethod
    def from_dict(cls, payload: Any) -> "Events":
        items = _extract_data_list(payload, what="events")
        return cls(data=tuple(Event.from_dict(x) for x in items))

    def to_dict(self) -> dict:
        return {"data": [x.to_dict() for x in self.data]}


@dataclass(frozen=True)
class Overview:
    """Result of the user → installations → gateways → devices flow."""

    user: UserInfo
    installation_id: int
    gateway_serial: str
    devices: Devices

    def to_dict(self) -> dict:
        return {
            "user": self.user.to_dict(),
            "installation_id": self.installation_id,
            "gateway_serial": self.gateway_serial,
            "devices": self.devices.to_dict()["data"],
        }


__all__ = [
    "Device",
    "Devices",
    "Event",
    "Events",
    "Feature",
    "Features",
    "Gateway",
    "Gateways",
    "Installation",
    "Installations",
    "Overview",
    "Token",
    "UserInfo",
]
