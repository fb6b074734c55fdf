# neo4j_helper/core/logging_config.py
"""Configure neo4j_helper logging sinks and formatting.

This module configures:
- structlog on top of standard library logging.
- A console handler and an optional rotating file handler.
- Baseline log level overrides for the chatty driver loggers.

Notes:
    Importing the library never configures logging. Applications call
    [`setup_logging()`](logging_config.py) once at process startup.
"""

import logging as stdlib_logging
import logging.handlers
import os
from collections.abc import MutableMapping
from typing import Any

import structlog

from neo4j_helper import config


def filter_internal_keys(
    logger: Any, name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Remove internal structlog fields from event dict."""
    keys_to_remove = [k for k in event_dict.keys() if k.startswith("_")]
    for key in keys_to_remove:
        event_dict.pop(key, None)
    return event_dict


def simple_log_format_plain(
    logger: Any, name: str, event_dict: MutableMapping[str, Any]
) -> str:
    """Render an event as one human-readable line without markup."""
    level = event_dict.pop("level", "INFO")
    timestamp = event_dict.pop("timestamp", "")
    logger_name = event_dict.pop("logger", "")
    event = event_dict.pop("event", "")

    parts = []
    if timestamp:
        parts.append(f"{timestamp}")
    if logger_name:
        short_name = logger_name.split(".")[-1] if "." in logger_name else logger_name
        parts.append(f"[{short_name}]")
    parts.append(level.upper())
    parts.append(event if event else "")

    if event_dict:
        context_parts = []
        for key, value in event_dict.items():
            if key.startswith("_"):
                continue
            if isinstance(value, str) and len(value) > 120:
                value_str = f"{value[:117]}..."
            else:
                value_str = str(value)
            context_parts.append(f"{key}={value_str}")
        if context_parts:
            parts.append(f"({', '.join(context_parts)})")

    return " ".join(parts)


def build_formatter() -> structlog.stdlib.ProcessorFormatter:
    """Create the plain-text formatter shared by every handler."""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt=config.settings.LOG_DATE_FORMAT),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            filter_internal_keys,
            simple_log_format_plain,
        ],
    )


def setup_logging() -> None:
    """Set up logging handlers and formatting.

    Notes:
        This function replaces the root logger's handler list and is intended to
        be called once during application startup.
    """
    level = config.settings.LOG_LEVEL_STR.upper()
    if not isinstance(stdlib_logging.getLevelName(level), int):
        level = "INFO"

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt=config.settings.LOG_DATE_FORMAT),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = build_formatter()
    root_logger = stdlib_logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(level)

    stream_handler = stdlib_logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    log_file = config.settings.LOG_FILE
    if log_file:
        try:
            os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
            file_handler = stdlib_logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                mode="a",
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.error(
                f"Failed to configure file logging: {e}. Logging to console only.",
                exc_info=True,
            )

    stdlib_logging.getLogger("neo4j.notifications").setLevel(stdlib_logging.WARNING)
    stdlib_logging.getLogger("neo4j").setLevel(stdlib_logging.WARNING)

    structlog.get_logger(__name__).info("Logging setup complete", level=level, log_file=log_file)
