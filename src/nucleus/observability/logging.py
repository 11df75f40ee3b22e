"""
nucleus.observability.logging

Structured logging configuration.

Responsibilities:
- Configure `structlog` for JSON (or console) logs on stderr.
- Flatten `NucleusError` values into their rendered text plus error code.
- Provide the discarding logger used as the library's default sink.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from nucleus.errors import NucleusError


def configure_logging(*, service_name: str, level: str, json: bool = True) -> None:
    """
    Opt-in configuration for applications embedding the library (and for the CLI).
    """

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _nucleus_context(service_name),
            structlog.processors.dict_tracebacks,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _nucleus_context(service_name: str):
    # error=<NucleusError> becomes error="<rendered tree>", error_code="TRANSPORT_ERROR".
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        for key, value in list(event_dict.items()):
            if isinstance(value, NucleusError):
                event_dict[key] = str(value)
                event_dict[f"{key}_code"] = value.code
        return event_dict

    return processor


def get_logger(name: str, **context: Any) -> Any:
    log = structlog.get_logger(name)
    return log.bind(**context) if context else log


def discard_logger() -> Any:
    # ReturnLogger hands the event back to the caller instead of writing it.
    return structlog.wrap_logger(
        structlog.ReturnLogger(), processors=[], wrapper_class=structlog.BoundLogger
    )


# --- Module Notes -----------------------------------------------------------
# A library must not print on its own: `discard_logger` is the default sink until the
# embedding application assigns `Settings.logger = get_logger(...)`.
