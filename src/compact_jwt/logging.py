"""Logging utilities for compact JWT issuance."""

from __future__ import annotations

import logging
from typing import Any, MutableMapping, cast

import structlog

DEFAULT_LOG_LEVEL = "INFO"
PACKAGE_LOGGER = "compact_jwt"

# Event keys that must never reach a log sink verbatim.
SENSITIVE_FIELDS = frozenset({"secret", "signature", "claims", "token", "password", "key"})

# Library default: stay silent until the application configures logging.
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def setup_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structlog for JSON output on stderr with contextvars support.

    Package loggers are backed by stdlib loggers under ``compact_jwt``; this
    attaches a stderr handler to that tree so tokens printed by the CLI stay
    alone on stdout.
    """
    log_level = _coerce_log_level(level)

    structlog.reset_defaults()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            mask_sensitive_fields,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # The CLI reconfigures per invocation, so loggers are not cached.
        cache_logger_on_first_use=False,
        wrapper_class=structlog.stdlib.BoundLogger,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers = [handler]
    package_logger.setLevel(log_level)
    package_logger.propagate = False

    logging.basicConfig(level=log_level, format="%(message)s")


def mask_sensitive_fields(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor replacing key material and claim payloads with ``***``."""
    for field in SENSITIVE_FIELDS.intersection(event_dict):
        event_dict[field] = "***"
    return event_dict


def _coerce_log_level(level: str) -> int:
    numeric = logging.getLevelName(level.upper())
    if isinstance(numeric, int):
        return numeric
    return logging.INFO


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger emitting through the stdlib logger ``name``.

    The stdlib logger decides whether a record is emitted, so nothing reaches
    stdout or stderr until :func:`setup_logging` (or the host application)
    configures the ``compact_jwt`` logger tree.
    """
    return cast(
        structlog.stdlib.BoundLogger,
        structlog.wrap_logger(
            logging.getLogger(name or PACKAGE_LOGGER),
            wrapper_class=structlog.stdlib.BoundLogger,
        ),
    )


def bind_context(**kwargs: Any) -> None:
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context(*keys: str) -> None:
    if keys:
        structlog.contextvars.unbind_contextvars(*keys)
    else:
        structlog.contextvars.clear_contextvars()
