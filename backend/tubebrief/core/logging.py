"""
Structured logging setup.

Every module obtains its logger with ``get_logger(__name__)`` and logs
snake_case events with keyword context:

    logger = get_logger(__name__)
    logger.info("channel_subscribed", user_id=user_id, channel_id="Fireship")

structlog sits on top of the standard library logging module, so log
records from third-party libraries (uvicorn, SQLAlchemy) share the same
handler and level.

Output Formats:
---------------
- json: one JSON object per line (production, log shippers)
- text: colourised key=value console output (local development)
"""

import logging
import sys
from typing import Any

import structlog

from tubebrief.core.config import settings

_CONFIGURED = False

# Keys whose values never reach the log output
SENSITIVE_KEYS = frozenset({
    "authorization",
    "destination",
    "password",
    "secret",
    "token",
})


def _censor_sensitive_data(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Redact sensitive values (tokens, notification destinations)."""
    for key in list(event_dict.keys()):
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = "***"
    return event_dict


def setup_logging(level: str | None = None, log_format: str | None = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Safe to call more than once; only the first call configures unless
    ``level`` or ``log_format`` is passed explicitly.

    Args:
        level: Log level name, defaults to settings.LOG_LEVEL
        log_format: "json" or "text", defaults to settings.LOG_FORMAT
    """
    global _CONFIGURED

    if _CONFIGURED and level is None and log_format is None:
        return

    level = level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _censor_sensitive_data,
    ]

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    # SQL echo is controlled by DB_ECHO, keep the engine logger quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _CONFIGURED = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to ``name``."""
    return structlog.get_logger(name)
