#!/usr/bin/env python3
"""
viessmann-sdk command line interface.

Commands:
  info                                   account name and devices of the first
                                         installation/gateway
  refresh-token CLIENT_ID REFRESH_TOKEN  exchange a refresh token for a new
                                         access token
  features                               gateway or device features
  events                                 event history

Resource commands read the access token from VIESSMANN_TOKEN (or .env).

Exit codes: 0 success, 2 API/decode/config error, 3 transport error,
130 interrupted.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import uuid
from typing import Any, Optional

from . import config as config_mod
from .api_auth import auth as auth_mod
from .errors import TransportError, ViessmannError
from .iot_data import overview as overview_mod
from .iot_data import resources
from .logging_utils import configure_logging, sanitize_text


class CliError(RuntimeError):
    """Expected CLI failure with a user-facing message."""


def _emit_json(payload: Any, *, pretty: bool) -> None:
    if pretty:
        print(json.dumps(payload, indent=2, ensure_ascii=False, sort_keys=True))
    else:
        print(json.dumps(payload, ensure_ascii=False))


def _require_access_token() -> str:
    token = config_mod.get_access_token()
    if not token:
        raise CliError("VIESSMANN_TOKEN is not set. Run `refresh-token` and export the new access token.")
    return token


def _request_opts(args: argparse.Namespace, log: logging.LoggerAdapter) -> dict[str, Any]:
    return {
        "timeout_seconds": float(args.timeout_seconds) if args.timeout_seconds is not None else None,
        "ssl_verify": False if args.insecure_skip_ssl_verify else None,
        "log": log,
    }


def _cmd_info(args: argparse.Namespace, log: logging.LoggerAdapter) -> int:
    overview = overview_mod.get_overview(_require_access_token(), **_request_opts(args, log))
    if args.json:
        _emit_json(overview.to_dict(), pretty=args.pretty)
        return 0
    print(f"Account name {overview.user.login_id}\n")
    print(f"Devices ({len(overview.devices.data)})\n")
    for d in overview.devices.data:
        print(f"device {d.id}")
    return 0


def _cmd_refresh_token(args: argparse.Namespace, log: logging.LoggerAdapter) -> int:
    token = auth_mod.refresh_token(args.client_id, args.refresh_token, **_request_opts(args, log))
    print(f"Your new token {token.access_token}")
    if token.refresh_token:
        print(f"Your new refresh token {token.refresh_token}")
    print(f"Expires in {token.expires_in} seconds")
    return 0


def _cmd_features(args: argparse.Namespace, log: logging.LoggerAdapter) -> int:
    token = _require_access_token()
    opts = _request_opts(args, log)
    if args.device_id is None:
        features = resources.get_gateway_features(token, args.installation_id, args.gateway_serial, **opts)
    else:
        features = resources.get_device_features(
            token, args.installation_id, args.gateway_serial, args.device_id, **opts
        )
    if args.json:
        _emit_json(features.to_dict(), pretty=args.pretty)
        return 0
    for f in features.data:
        flags = ("enabled" if f.enabled else "disabled") + (", ready" if f.ready else "")
        print(f"{f.feature} ({flags})")
    return 0


def _cmd_events(args: argparse.Namespace, log: logging.LoggerAdapter) -> int:
    events = resources.get_events(_require_access_token(), **_request_opts(args, log))
    if args.json:
        _emit_json(events.to_dict(), pretty=args.pretty)
        return 0
    for e in events.data:
        print(e.event_type)
    return 0


def parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="viessmann-sdk",
        description="Viessmann IoT API client (token refresh, account info, features, events).",
    )
    p.add_argument("--timeout-seconds", default=None, help="HTTP timeout in seconds (default: 30).")
    p.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help='Logging verbosity (default: VIESSMANN_LOG_LEVEL or "INFO").',
    )
    p.add_argument(
        "--insecure-skip-ssl-verify",
        action="store_true",
        help="Disable TLS certificate verification (NOT recommended).",
    )
    p.add_argument("--json", action="store_true", help="Print results as JSON.")
    p.add_argument("--pretty", action="store_true", help="Pretty-print JSON output.")

    sub = p.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="Show account name and devices.")
    info.set_defaults(handler=_cmd_info)

    refresh = sub.add_parser("refresh-token", help="Exchange a refresh token for a new access token.")
    refresh.add_argument("client_id", help="OAuth client id.")
    refresh.add_argument("refresh_token", help="Refresh token.")
    refresh.set_defaults(handler=_cmd_refresh_token)

    features = sub.add_parser("features", help="List gateway features, or device features with --device-id.")
    features.add_argument("--installation-id", type=int, required=True, help="Installation id.")
    features.add_argument("--gateway-serial", required=True, help="Gateway serial.")
    features.add_argument("--device-id", default=None, help='Device id (e.g. "0").')
    features.set_defaults(handler=_cmd_features)

    events = sub.add_parser("events", help="List event history.")
    events.set_defaults(handler=_cmd_events)

    return p.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    log: Optional[logging.LoggerAdapter] = None
    try:
        run_id = uuid.uuid4().hex[:12]
        log = configure_logging(run_id=run_id, level=args.log_level or config_mod.get_log_level())
        log.debug("running command %s", args.command)
        return args.handler(args, log)
    except TransportError as e:
        logging.getLogger("viessmann_sdk").error("transport error: %s", sanitize_text(str(e)))
        print(f"Error: could not reach the Viessmann API. Details: {sanitize_text(str(e))}", file=sys.stderr)
        return 3
    except (CliError, ViessmannError, ValueError) as e:
        # Avoid accidentally printing secrets in error output.
        logging.getLogger("viessmann_sdk").error("CLI error: %s", sanitize_text(str(e)))
        print(f"Error: {sanitize_text(str(e))}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        logging.getLogger("viessmann_sdk").warning("interrupted by user")
        print("Interrupted.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
