"""Logging configuration for the storefront domain.

The stdlib root logger owns the handlers: console, a rotating log file and a
rotating error-only file. structlog renders on top of it, JSON in
production/staging and a console view elsewhere. Every request binds its id,
method and path into the context, so all lines logged while serving it carry
them.

Credentials never reach a handler: `redact_sensitive` masks known secret
keys before rendering.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

from storefront import config

LEVEL_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

SENSITIVE_KEYS = frozenset(
    {"password", "password_hash", "token", "session_token", "code", "verification_code", "cookie"}
)
REDACTED = "[redacted]"

MAX_LOG_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5


def get_log_level() -> str:
    """`LOG_LEVEL` if set, otherwise a level that suits the environment."""
    return os.getenv("LOG_LEVEL", LEVEL_BY_ENVIRONMENT.get(config.environment(), "INFO")).upper()


def redact_sensitive(logger, method_name: str, event_dict: dict) -> dict:
    """structlog processor masking credential values, wherever they were bound."""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def _rotating_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(log_dir: str = "logs", log_file_prefix: str = "storefront") -> None:
    log_level = get_log_level()
    log_path = Path(os.getenv("LOG_DIR", log_dir))
    log_path.mkdir(parents=True, exist_ok=True)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [
        console_handler,
        _rotating_handler(log_path / f"{log_file_prefix}.log", log_level),
        _rotating_handler(log_path / f"{log_file_prefix}_error.log", logging.ERROR),
    ]

    # The request middleware logs every request already
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def _renderer():
    if config.environment() in ("production", "staging"):
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=4),
        )
    ]


def setup_structlog() -> None:
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        redact_sensitive,
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        *_renderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(log_dir: str = "logs", log_file_prefix: str = "storefront") -> None:
    setup_stdlib_logging(log_dir=log_dir, log_file_prefix=log_file_prefix)
    setup_structlog()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request(request_id: str, method: str, path: str) -> None:
    """Attach request details to every line logged until `clear_request`."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=method, path=path)


def clear_request() -> None:
    structlog.contextvars.clear_contextvars()
