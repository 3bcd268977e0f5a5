"""
Viessmann API URL and environment configuration.

Loads .env and exposes base URLs and derived endpoint URLs. All URLs can be
overridden via environment variables for environment switching (e.g. staging/prod).

Environment variables:
  - VIESSMANN_IAM_BASE_URL     (optional, default: https://iam.viessmann.com/idp/v2)
  - VIESSMANN_API_BASE_URL     (optional, default: https://api.viessmann.com)
  - VIESSMANN_TIMEOUT_SECONDS  (optional, default: 30)
  - VIESSMANN_SSL_VERIFY       (optional, default: true)
  - VIESSMANN_LOG_LEVEL        (optional, default: INFO)
  - VIESSMANN_TOKEN            (read by the CLI; access token for resource reads)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

_DEFAULT_IAM_BASE = "https://iam.viessmann.com/idp/v2"
_DEFAULT_API_BASE = "https://api.viessmann.com"
_DEFAULT_TIMEOUT_SECONDS = 30.0

_FALSE_VALUES = {"0", "false", "no", "off"}


def _load_dotenv(log: Optional[logging.LoggerAdapter] = None) -> None:
    """
    Load a .env file into the process environment (if one exists).

    Search order:
    1. Current working directory (.env)
    2. The project root, two levels up from this file
       (src/viessmann_sdk/config.py → project root)

    Variables already set in the shell always win (override=False).
    """
    cwd_env = Path.cwd() / ".env"
    project_root_env = Path(__file__).resolve().parents[2] / ".env"

    env_file: Optional[Path] = None
    if cwd_env.is_file():
        env_file = cwd_env
    elif project_root_env.is_file():
        env_file = project_root_env

    if env_file is None:
        return

    loaded = load_dotenv(env_file, override=False)
    if log is not None:
        if loaded:
            log.debug("loaded .env from %s (shell vars take precedence)", env_file)
        else:
            log.debug(
                ".env found at %s but all variables were already set in the environment",
                env_file,
            )


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable, stripped; return default if unset or empty."""
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    return value or default


# Load .env on module import so the getters below see it.
_load_dotenv()


def get_iam_base_url() -> str:
    """Return IAM base URL (used for /token)."""
    return _get_env("VIESSMANN_IAM_BASE_URL", _DEFAULT_IAM_BASE) or _DEFAULT_IAM_BASE


def get_api_base_url() -> str:
    """Return API base URL (used for /users/... and /iot/...)."""
    return _get_env("VIESSMANN_API_BASE_URL", _DEFAULT_API_BASE) or _DEFAULT_API_BASE


def get_token_url() -> str:
    """Return full OAuth token endpoint URL."""
    return f"{get_iam_base_url().rstrip('/')}/token"


def get_timeout_seconds() -> float:
    """
    Return the per-request HTTP timeout in seconds.

    Raises ValueError if VIESSMANN_TIMEOUT_SECONDS is not a positive number.
    """
    raw = _get_env("VIESSMANN_TIMEOUT_SECONDS")
    if raw is None:
        return _DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"VIESSMANN_TIMEOUT_SECONDS must be a number, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"VIESSMANN_TIMEOUT_SECONDS must be positive, got {raw!r}")
    return value


def get_ssl_verify() -> bool:
    """Return whether TLS certificates are verified (VIESSMANN_SSL_VERIFY)."""
    raw = _get_env("VIESSMANN_SSL_VERIFY")
    if raw is None:
        return True
    return raw.lower() not in _FALSE_VALUES


def get_log_level() -> str:
    return _get_env("VIESSMANN_LOG_LEVEL", "INFO") or "INFO"


def get_access_token() -> Optional[str]:
    """Return the access token from VIESSMANN_TOKEN, or None if unset."""
    return _get_env("VIESSMANN_TOKEN")


def get_users_me_url() -> str:
    """Return /users/me endpoint URL."""
    return f"{get_api_base_url().rstrip('/')}/users/v1/users/me"


def get_iot_installations_url() -> str:
    """Return IoT installations list endpoint URL."""
    return f"{get_api_base_url().rstrip('/')}/iot/v1/equipment/installations"


def get_iot_gateways_url() -> str:
    """Return IoT gateways list endpoint URL."""
    return f"{get_api_base_url().rstrip('/')}/iot/v1/equipment/gateways"


def get_iot_events_url() -> str:
    """Return event history endpoint URL."""
    return f"{get_api_base_url().rstrip('/')}/iot/v1/events-history/events"


def get_iot_devices_url_tmpl() -> str:
    """
    Return IoT devices URL template with placeholders:
    {installation_id}, {gateway_serial}.
    """
    base = get_api_base_url().rstrip("/")
    return f"{base}/iot/v1/equipment/installations/{{installation_id}}/gateways/{{gateway_serial}}/devices"


def get_iot_gateway_features_url_tmpl() -> str:
    """
    Return gateway features URL template with placeholders:
    {installation_id}, {gateway_serial}.
    """
    base = get_api_base_url().rstrip("/")
    return f"{base}/iot/v1/features/installations/{{installation_id}}/gateways/{{gateway_serial}}/features"


def get_iot_features_url_tmpl() -> str:
    """
    Return device features URL template with placeholders:
    {installation_id}, {gateway_serial}, {device_id}.
    """
    base = get_api_base_url().rstrip("/")
    return f"{base}/iot/v1/features/installations/{{installation_id}}/gateways/{{gateway_serial}}/devices/{{device_id}}/features"


def get_iot_single_feature_url_tmpl() -> str:
    """
    Return single device feature URL template with placeholders:
    {installation_id}, {gateway_serial}, {device_id}, {feature_name}.
    Response shape: {"data": {...}}.
    """
    return get_iot_features_url_tmpl() + "/{feature_name}"
