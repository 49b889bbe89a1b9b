"""Logging configuration shared by every storefront context.

Call ``configure_logging()`` once at process start. Modules log through
``structlog.get_logger(__name__)`` with key-value context; credentials and
payment details are masked before anything is rendered.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

# Event keys whose values never reach a log line
SENSITIVE_KEYS = frozenset({"token", "password", "authorization", "payment_details", "card_number"})


def get_log_level() -> str:
    """Get log level based on environment."""
    env = (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("STOREFRONT_ENVIRONMENT") or "development").lower()

    level_map = {
        "production": "INFO",
        "staging": "INFO",
        "development": "DEBUG",
        "test": "WARNING",
    }

    return os.getenv("LOG_LEVEL", level_map.get(env, "INFO"))


def mask_sensitive(_logger: Any, _method: str, event_dict: dict) -> dict:
    """structlog processor: replace sensitive values, keeping the last four characters of long ones."""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        value = event_dict[key]
        if value is None:
            continue
        text = str(value)
        event_dict[key] = f"****{text[-4:]}" if len(text) > 8 and key in ("payment_details", "card_number") else "****"
    return event_dict


def setup_stdlib_logging(log_dir: Path | None = None) -> None:
    """Route stdlib logging to stderr, plus rotating files when ``log_dir`` is set."""
    log_level = get_log_level()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    # stdout belongs to the command line output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        for filename, level in (("storefront.log", log_level), ("storefront_error.log", logging.ERROR)):
            handler = logging.handlers.RotatingFileHandler(
                filename=log_dir / filename,
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            handler.setLevel(level)
            root_logger.addHandler(handler)

    logging.getLogger("urllib3").setLevel(logging.WARNING)


def setup_structlog(environment: str | None = None) -> None:
    """Configure structlog: JSON lines in production and staging, rich console output elsewhere."""
    env = (environment or os.getenv("STOREFRONT_ENVIRONMENT", "development")).lower()

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        mask_sensitive,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if env in ["production", "staging"]:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.RichTracebackFormatter(
                    show_locals=False,
                    max_frames=2,
                ),
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(environment: str | None = None, log_dir: Path | None = None) -> None:
    """Configure all logging for the application."""
    setup_stdlib_logging(log_dir)
    setup_structlog(environment)


def add_context(**kwargs: Any) -> None:
    """Add context variables that will be included in all subsequent log messages."""
    structlog.contextvars.bind_contextvars(**kwargs)
