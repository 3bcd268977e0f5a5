"""
Client for the Viessmann IoT cloud API.

OAuth2 refresh-token exchange plus typed reads of user info, installations,
gateways, devices, features and events.
"""

from .api_auth.auth import refresh_token
from .client import ViessmannClient
from .errors import ApiError, DecodeError, TransportError, ViessmannError
from .iot_data.overview import get_overview
from .iot_data.resources import (
    get_device_feature,
    get_device_features,
    get_devices,
    get_events,
    get_gateway_features,
    get_gateways,
    get_installations,
    get_user_info,
)
from .models import (
    Device,
    Devices,
    Event,
    Events,
    Feature,
    Features,
    Gateway,
    Gateways,
    Installation,
    Installations,
    Overview,
    Token,
    UserInfo,
)

__version__ = "0.1.0"

__all__: list[str] = [
    "ApiError",
    "DecodeError",
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
    "TransportError",
    "UserInfo",
    "ViessmannClient",
    "ViessmannError",
    "get_device_feature",
    "get_device_features",
    "get_devices",
    "get_events",
    "get_gateway_features",
    "get_gateways",
    "get_installations",
    "get_overview",
    "get_user_info",
    "refresh_token",
]
