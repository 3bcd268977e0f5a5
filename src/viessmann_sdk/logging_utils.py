"""
Logging setup and secret redaction helpers.

Every record carries a run_id so multi-step flows (refresh → user info →
installations → ...) can be correlated in one terminal or log aggregator.
Tokens must never reach a log line; use the sanitize helpers for anything
derived from requests or responses.
"""

from __future__ import annotations

import logging
import re

LOGGER_NAME = "viessmann_sdk"

_SENSITIVE_KEYS = {
    "access_token",
    "refresh_token",
    "id_token",
    "client_secret",
    "authorization",
}


class _RunIdFilter(logging.Filter):
    """
    Ensure every log record has a run_id attribute for formatting.
    """

    def __init__(self, run_id: str) -> None:
        super().__init__()
        self._run_id = run_id

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003 - logging uses `filter` name
        if not hasattr(record, "run_id"):
            record.run_id = self._run_id
        return True


def _coerce_log_level(level: str) -> int:
    level_upper = (level or "").strip().upper()
    if not level_upper:
        return logging.INFO
    return logging._nameToLevel.get(level_upper, logging.INFO)


def configure_logging(*, run_id: str, level: str) -> logging.LoggerAdapter:
    """
    Configure logging for CLI runs.

    - Uses root logger configuration only if nothing is configured yet.
    - Adds a run_id to all records so we can correlate multi-step flows.
    """
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=_coerce_log_level(level),
            format="%(asctime)s %(levelname)s [%(name)s] [run=%(run_id)s] %(message)s",
        )
    else:
        root.setLevel(_coerce_log_level(level))

    # Records from urllib3 and other libraries need run_id too.
    old_factory = logging.getLogRecordFactory()

    def record_factory(*args, **kwargs):  # type: ignore[no-untyped-def]
        record = old_factory(*args, **kwargs)
        if not hasattr(record, "run_id"):
            record.run_id = run_id
        return record

    logging.setLogRecordFactory(record_factory)

    for h in root.handlers:
        h.addFilter(_RunIdFilter(run_id))

    # run_id comes from the record factory; passing it again via `extra`
    # would raise KeyError ("Attempt to overwrite 'run_id' in LogRecord").
    return logging.LoggerAdapter(logging.getLogger(LOGGER_NAME), {})


def get_logger(name: str = LOGGER_NAME) -> logging.LoggerAdapter:
    """Return a LoggerAdapter for library code that was not handed one."""
    return logging.LoggerAdapter(logging.getLogger(name), {})


def redact_sensitive(value: object) -> str:
    """
    Redact a secret-bearing value fully (tokens, refresh tokens).

    Never keeps a prefix or suffix; partial token leaks are still leaks.
    """
    if value is None:
        return "<none>"
    s = str(value)
    if not s:
        return "<empty>"
    return "<redacted>"


def sanitize_mapping(d: dict) -> dict:
    """
    Return a shallow copy safe for logging (redacts sensitive keys).
    """
    safe: dict = {}
    for k, v in d.items():
        if str(k).lower() in _SENSITIVE_KEYS:
            safe[k] = redact_sensitive(v)
        else:
            safe[k] = v
    return safe


def sanitize_obj(obj: object) -> object:
    """
    Deep-sanitize JSON-like objects (dict/list/tuple) for safe logging.
    """
    if isinstance(obj, dict):
        out: dict = {}
        for k, v in obj.items():
            if str(k).lower() in _SENSITIVE_KEYS:
                out[k] = redact_sensitive(v)
            else:
                out[k] = sanitize_obj(v)
        return out
    if isinstance(obj, list):
        return [sanitize_obj(v) for v in obj]
    if isinstance(obj, tuple):
        return tuple(sanitize_obj(v) for v in obj)
    return obj


def sanitize_text(text: str) -> str:
    """
    Best-effort scrub of OAuth token fields and bearer values in free-form text.

    Over-redaction is acceptable; leaks are not.
    """
    if not text:
        return text
    scrubbed = text
    for key in ("access_token", "refresh_token", "id_token"):
        # JSON-ish: "access_token":"..."
        scrubbed = re.sub(rf'("{key}"\s*:\s*")[^"]+(")', r"\1<redacted>\2", scrubbed, flags=re.IGNORECASE)
        # Form/query-ish: access_token=...
        scrubbed = re.sub(rf"({key}=)[^&\s]+", r"\1<redacted>", scrubbed, flags=re.IGNORECASE)
    scrubbed = re.sub(r"(Bearer\s+)[^\s\"']+", r"\1<redacted>", scrubbed, flags=re.IGNORECASE)
    return scrubbed


__all__ = [
    "LOGGER_NAME",
    "configure_logging",
    "get_logger",
    "redact_sensitive",
    "sanitize_mapping",
    "sanitize_obj",
    "sanitize_text",
]
