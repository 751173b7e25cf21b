"""
Centralized Logging Configuration.

All modules must use this logging setup. Do not create standalone loggers.
Logs always go to stderr so that stdout only carries command output
(tables, JSON or YAML).

Structured fields in every JSON log record:
    timestamp   - ISO 8601 UTC timestamp
    level       - Log level (debug, info, warning, error, critical)
    logger      - Module path (e.g., pivnet.api.client)
    event       - Log message
    func_name   - Function that emitted the log
    lineno      - Line number in source file
    source      - Origin context, set explicitly (cli, api)

Usage:
    from pivnet.core.logging import get_logger, setup_logging

    # Setup at CLI start (defaults from PIVNET_LOG_* settings)
    setup_logging()

    # Override settings if needed
    setup_logging(level="DEBUG", format_type="console")

    # Get logger in modules
    logger = get_logger(__name__)
    logger.info("Message", key="value")

    # Explicit source
    from pivnet.core.logging import log_with_source
    log_with_source(logger, "api", "debug", "API request", path="/products")
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

from pivnet.core.config import LOG_LEVELS, get_settings
from pivnet.core.exceptions import ConfigurationError

VALID_SOURCES = frozenset({
    "cli",
    "api",
    "internal",
    "unknown",
})
"""
Recognized log source values, for documentation and validation.
Source is always set explicitly by the caller. Never guessed from logger names.
"""

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 3


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    log_file: str | None = None,
) -> None:
    """
    Configure structured logging for the CLI.

    Defaults come from PIVNET_LOG_LEVEL, PIVNET_LOG_FORMAT and PIVNET_LOG_FILE.
    Parameters passed to this function override them.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        format_type: Console output format ('json' or 'console').
        log_file: Path of a rotating JSONL log file. Disabled when None.

    Raises:
        ConfigurationError: If the level is unknown or a PIVNET_* setting is invalid
    """
    settings = get_settings()

    effective_level = level if level is not None else settings.log_level
    effective_format = format_type if format_type is not None else settings.log_format
    effective_log_file = log_file if log_file is not None else settings.log_file

    level_name = effective_level.upper()
    if level_name not in LOG_LEVELS:
        raise ConfigurationError(
            f"Invalid log level '{effective_level}': expected one of {', '.join(LOG_LEVELS)}"
        )
    log_level = getattr(logging, level_name)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=shared_processors,
    )

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if effective_format == "console":
        console_formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
            foreign_pre_chain=shared_processors,
        )
    else:
        console_formatter = json_formatter

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if effective_log_file:
        log_path = Path(effective_log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            filename=str(log_path),
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(json_formatter)
        root_logger.addHandler(file_handler)

    # httpx/httpcore log every request at INFO/DEBUG; only surface them when verbose
    transport_level = logging.NOTSET if log_level <= logging.DEBUG else logging.WARNING
    logging.getLogger("httpx").setLevel(transport_level)
    logging.getLogger("httpcore").setLevel(transport_level)


def get_logger(name: str) -> Any:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name, typically __name__

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log a message with an explicit source.

    Args:
        logger: The logger instance
        source: Log source (cli, api, internal)
        level: Log level (debug, info, warning, error, critical)
        message: Log message
        **kwargs: Additional context fields

    Raises:
        AttributeError: If level is not a valid log level

    Example:
        log_with_source(logger, "api", "debug", "API response", status_code=200)
    """
    log_method = getattr(logger, level.lower())
    log_method(message, source=source, **kwargs)
