"""Diagnostic logging.

structlog renders through stdlib handlers so third-party loggers share the
same output. Logs go to stderr so they never mix with command output on
stdout, including before setup_logging() is called. The level comes from
``ANEMOS_EXT_LOG_LEVEL`` or the ``level`` argument.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

__all__ = ["configure_defaults", "setup_logging", "get_logger"]

_LOGGING_CONFIGURED = False

LOG_LEVEL_ENV = "ANEMOS_EXT_LOG_LEVEL"

_FOREIGN_PRE_CHAIN = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
]


def configure_defaults() -> None:
    """Route structlog through stdlib logging without installing handlers.

    Used until setup_logging() runs, e.g. when the package is embedded in
    another host. Records below the root level are dropped; the rest reach
    stderr through the host's handlers or ``logging.lastResort``.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def setup_logging(
    level: str = "WARNING",
    log_file: Path | None = None,
    console_output: bool = True,
) -> None:
    """Configure structlog and the stdlib root logger once per process.

    Args:
        level: Default level name, overridden by ANEMOS_EXT_LOG_LEVEL
        log_file: Optional JSON log file (rotated at 5 MB)
        console_output: Render human-readable logs to stderr
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    level_name = os.environ.get(LOG_LEVEL_ENV, level).upper()
    log_level = getattr(logging, level_name, logging.WARNING)

    handlers: list[logging.Handler] = []

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
        )
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.processors.JSONRenderer(),
                foreign_pre_chain=_FOREIGN_PRE_CHAIN,
            )
        )
        handlers.append(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.dev.ConsoleRenderer(colors=False),
                foreign_pre_chain=_FOREIGN_PRE_CHAIN,
            )
        )
        handlers.append(console_handler)

    if not handlers:
        handlers.append(logging.NullHandler())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=log_level, handlers=handlers, force=True)
    _LOGGING_CONFIGURED = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


if not structlog.is_configured():
    configure_defaults()
