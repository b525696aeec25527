"""
Logging setup for the hookwise namespace.

Library code only calls ``get_logger``; ``configure_logging`` is for the CLI
and applications embedding the receiver. JSON output is rendered by
structlog so every line is a valid JSON object, whatever the message holds.
"""

import logging
import sys

import structlog

LOGGER_NAME = "hookwise"

HUMAN_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
HUMAN_DATEFMT = "%Y-%m-%d %H:%M:%S"


def json_formatter() -> logging.Formatter:
    """Formatter emitting one JSON object per record (timestamp, level, name, message)."""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.format_exc_info,
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.EventRenamer("message"),
            structlog.processors.JSONRenderer(),
        ],
    )


def configure_logging(level: int | str = logging.INFO, json_format: bool = False) -> logging.Logger:
    """
    Configure the hookwise logger.

    Args:
        level: Logging level (e.g., logging.INFO, "DEBUG")
        json_format: Emit one JSON object per line instead of text

    Returns:
        The configured logger instance.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Re-configuring must not stack handlers
    if logger.handlers:
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        json_formatter() if json_format else logging.Formatter(HUMAN_FORMAT, datefmt=HUMAN_DATEFMT)
    )
    logger.addHandler(handler)

    # uvicorn installs its own root handlers
    logger.propagate = False

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a child logger of hookwise."""
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)
