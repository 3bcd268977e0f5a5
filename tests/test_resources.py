"""
Offline unit tests for `viessmann_sdk.iot_data.resources`.

We do not perform network calls: every GET is satisfied by a fake Session.get().
"""

from __future__ import annotations

import json
from unittest.mock import Mock

import pytest
import requests

import viessmann_sdk.iot_data.resources as resources_mod
from viessmann_sdk.errors import ApiError, DecodeError, TransportError
from viessmann_sdk.models import (
    Device,
    Devices,
    Event,
    Feature,
    Gateway,
    Installation,
    UserInfo,
)

API = "https://api.viessmann.com"


def _make_json_response(payload, *, status_code: int = 200, url: str = "https://example.invalid") -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    resp.headers["Content-Type"] = "application/json"
    resp._content = json.dumps(payload).encode("utf-8")  # noqa: SLF001 - test helper
    resp.encoding = "utf-8"
    resp.url = url
    return resp


def _make_text_response(text: str, *, status_code: int) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = text.encode("utf-8")  # noqa: SLF001 - test helper
    resp.encoding = "utf-8"
    return resp


def _session_returning(resp: requests.Response) -> Mock:
    session = Mock()
    session.get.return_value = resp
    return session


# Every read, with the arguments and the URL it must request.
READ_OPERATIONS = [
    pytest.param(resources_mod.get_user_info, (), f"{API}/users/v1/users/me", id="user_info"),
    pytest.param(resources_mod.get_installations, (), f"{API}/iot/v1/equipment/installations", id="installations"),
    pytest.param(resources_mod.get_gateways, (), f"{API}/iot/v1/equipment/gateways", id="gateways"),
    pytest.param(
        resources_mod.get_devices,
        (2219527, "7637415015415225"),
        f"{API}/iot/v1/equipment/installations/2219527/gateways/7637415015415225/devices",
        id="devices",
    ),
    pytest.param(
        resources_mod.get_gateway_features,
        (2219527, "7637415015415225"),
        f"{API}/iot/v1/features/installations/2219527/gateways/7637415015415225/features",
        id="gateway_features",
    ),
    pytest.param(
        resources_mod.get_device_features,
        (2219527, "7637415015415225", "0"),
        f"{API}/iot/v1/features/installations/2219527/gateways/7637415015415225/devices/0/features",
        id="device_features",
    ),
    pytest.param(
        resources_mod.get_device_feature,
        (2219527, "7637415015415225", "0", "heating.power.consumption.total"),
        f"{API}/iot/v1/features/installations/2219527/gateways/7637415015415225/devices/0/features/heating.power.consumption.total",
        id="device_feature",
    ),
    pytest.param(resources_mod.get_events, (), f"{API}/iot/v1/events-history/events", id="events"),
]


@pytest.mark.parametrize("operation, args, expected_url", READ_OPERATIONS)
def test_reads_request_expected_url_with_bearer_and_json_headers(operation, args, expected_url) -> None:
    session = _session_returning(_make_text_response("{}", status_code=401))

    with pytest.raises(ApiError):
        operation("test-token", *args, session=session)

    session.get.assert_called_once()
    call_args = session.get.call_args
    assert call_args[0][0] == expected_url
    assert call_args[1]["headers"] == {
        "Content-Type": "application/json",
        "Authorization": "Bearer test-token",
    }
    assert "params" not in call_args[1]
    assert "data" not in call_args[1]


@pytest.mark.parametrize("body", ["invalid_token", '"invalid_token"'])
@pytest.mark.parametrize("operation, args, expected_url", READ_OPERATIONS)
def test_401_yields_api_error_with_body_verbatim(operation, args, expected_url, body) -> None:
    session = _session_returning(_make_text_response(body, status_code=401))

    with pytest.raises(ApiError) as excinfo:
        operation("expired-token", *args, session=session)

    assert str(excinfo.value) == body
    assert excinfo.value.status_code == 401


@pytest.mark.parametrize("operation, args, expected_url", READ_OPERATIONS)
def test_malformed_json_yields_decode_error(operation, args, expected_url) -> None:
    session = _session_returning(_make_text_response('{"data": [', status_code=200))

    with pytest.raises(DecodeError):
        operation("test-token", *args, session=session)


@pytest.mark.parametrize("operation, args, expected_url", READ_OPERATIONS)
def test_transport_failure_yields_transport_error(operation, args, expected_url) -> None:
    session = Mock()
    session.get.side_effect = requests.exceptions.Timeout("read timed out")

    with pytest.raises(TransportError):
        operation("test-token", *args, session=session)


def test_get_user_info_resolves_login_id_alias() -> None:
    session = _session_returning(_make_json_response({"loginId": "user@example.com", "id": "3f2a"}))

    user = resources_mod.get_user_info("test-token", session=session)

    assert user == UserInfo(login_id="user@example.com", id="3f2a")


def test_get_installations_and_gateways_decode_lists() -> None:
    session = Mock()
    session.get.side_effect = [
        _make_json_response({"data": [{"id": 2219527}, {"id": 42}]}),
        _make_json_response({"data": [{"serial": "7637415015415225"}]}),
    ]

    installations = resources_mod.get_installations("test-token", session=session)
    gateways = resources_mod.get_gateways("test-token", session=session)

    assert installations.data == (Installation(2219527), Installation(42))
    assert gateways.data == (Gateway("7637415015415225"),)


def test_get_devices_builds_url_without_extra_escaping() -> None:
    session = _session_returning(_make_json_response({"data": [{"id": "0"}]}))

    devices = resources_mod.get_devices("test-token", 2219527, "7637415015415225", session=session)

    assert devices == Devices(data=(Device("0"),))
    assert session.get.call_args[0][0].endswith("/installations/2219527/gateways/7637415015415225/devices")


def test_get_device_features_keeps_properties() -> None:
    session = _session_returning(
        _make_json_response(
            {
                "data": [
                    {
                        "feature": "heating.boiler.sensors.temperature.main",
                        "isEnabled": True,
                        "isReady": True,
                        "properties": {"value": {"type": "number", "value": 58.0, "unit": "celsius"}},
                    },
                    {"feature": "heating.solar", "isEnabled": False, "isReady": True},
                ]
            }
        )
    )

    features = resources_mod.get_device_features("test-token", 2219527, "7637415015415225", "0", session=session)

    assert len(features.data) == 2
    main = features.get("heating.boiler.sensors.temperature.main")
    assert main is not None
    assert main.properties["value"]["value"] == 58.0
    assert features.get("heating.solar") is None


def test_get_device_feature_decodes_data_object() -> None:
    session = _session_returning(
        _make_json_response(
            {"data": {"feature": "heating.power.consumption.total", "isEnabled": True, "isReady": True}}
        )
    )

    feature = resources_mod.get_device_feature(
        "test-token", 2219527, "7637415015415225", "0", "heating.power.consumption.total", session=session
    )

    assert feature == Feature("heating.power.consumption.total", True, True)


def test_get_events_resolves_event_type_alias() -> None:
    session = _session_returning(_make_json_response({"data": [{"eventType": "device-error"}, {"eventType": "feature-changed"}]}))

    events = resources_mod.get_events("test-token", session=session)

    assert events.data == (Event("device-error"), Event("feature-changed"))


@pytest.mark.parametrize("operation, args, expected_url", READ_OPERATIONS[1:6])
def test_empty_data_is_not_an_error(operation, args, expected_url) -> None:
    session = _session_returning(_make_json_response({"data": []}))

    result = operation("test-token", *args, session=session)

    assert result.data == ()


def test_repeated_reads_are_equal() -> None:
    """Same token and parameters against unchanged responses give equal results."""
    payload = {"data": [{"feature": "heating.circuits.0", "isEnabled": True, "isReady": True, "properties": {}}]}
    session = Mock()
    session.get.side_effect = lambda *a, **kw: _make_json_response(payload)

    first = resources_mod.get_gateway_features("test-token", 2219527, "7637415015415225", session=session)
    second = resources_mod.get_gateway_features("test-token", 2219527, "7637415015415225", session=session)

    assert first == second
    assert session.get.call_args_list[0] == session.get.call_args_list[1]


def test_api_base_url_override(monkeypatch) -> None:
    monkeypatch.setenv("VIESSMANN_API_BASE_URL", "https://api.staging.invalid/")
    session = _session_returning(_make_json_response({"data": []}))

    resources_mod.get_gateways("test-token", session=session)

    assert session.get.call_args[0][0] == "https://api.staging.invalid/iot/v1/equipment/gateways"


def test_explicit_timeout_and_ssl_verify_are_passed_through() -> None:
    session = _session_returning(_make_json_response({"data": []}))

    resources_mod.get_installations("test-token", session=session, timeout_seconds=3, ssl_verify=False)

    assert session.get.call_args[1]["timeout"] == 3.0
    assert session.get.call_args[1]["verify"] is False


def test_default_timeout_is_30_seconds() -> None:
    session = _session_returning(_make_json_response({"data": []}))

    resources_mod.get_installations("test-token", session=session)

    assert session.get.call_args[1]["timeout"] == 30.0
    assert session.get.call_args[1]["verify"] is True
