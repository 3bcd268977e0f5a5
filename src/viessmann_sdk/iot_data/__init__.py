"""
IoT data retrieval module for the Viessmann API.

Provides user info, installations, gateways, devices, features and events
reads, plus the get_overview composition used by the CLI.
"""
from .overview import get_overview
from .resources import (
    get_device_feature,
    get_device_features,
    get_devices,
    get_events,
    get_gateway_features,
    get_gateways,
    get_installations,
    get_user_info,
)

__all__: list[str] = [
    "get_device_feature",
    "get_device_features",
    "get_devices",
    "get_events",
    "get_gateway_features",
    "get_gateways",
    "get_installations",
    "get_overview",
    "get_user_info",
]
