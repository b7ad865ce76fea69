"""
Structured logging for the SDK: one JSON object per event on stderr.

Every event carries timestamp, level, logger and event_type. Context values are
made JSON friendly before rendering: addresses become their user-friendly form,
bytes become hex, enums their value. Credentials passed as context (jwt, api_key,
proof, authorization) are masked.

- LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default INFO)
- LOG_FORMAT: json | console (default json)

No trust_attestation imports here, so any module can import it without cycles.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from enum import Enum
from typing import Any

import structlog
from pytoniq_core import Address

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()

REDACTED_KEYS = frozenset({"jwt", "api_key", "proof", "authorization", "token"})
REDACTED = "***"


def _add_timestamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def _event_type(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog's positional 'event' becomes event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def _plain_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Address):
        return value.to_str()
    return value


def _render_values(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key, value in event_dict.items():
        if key.lower() in REDACTED_KEYS and value:
            event_dict[key] = REDACTED
        else:
            event_dict[key] = _plain_value(value)
    return event_dict


def configure_structlog() -> None:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _event_type,
        _render_values,
    ]
    if LOG_FORMAT == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty(), event_key="event_type"))
    else:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Module logger. Log a snake_case event with keyword context:

        logger = get_logger(__name__)
        logger.info("attestation_track_finished", user_address=addr, state="confirmed", attempts=3)
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_user(user_address: Any) -> structlog.BoundLogger:
    """Logger with user_address bound to every event (str or Address)."""
    return get_logger("trust_attestation").bind(user_address=_plain_value(user_address))
