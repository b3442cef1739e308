"""Centralized logging configuration for the curriculum engine."""

import logging
import sys
from logging.handlers import RotatingFileHandler

from ..core.config import settings
from .structured_logging import JSONFormatter


def setup_logging(
    name: str | None = None, log_level: str | None = None
) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting and handlers.

    Console output goes to stderr so the dashboard printed on stdout stays
    machine-readable.

    Args:
        name: Logger name (defaults to the package name)
        log_level: Log level (defaults to settings.LOG_LEVEL)

    Returns:
        Configured logger instance
    """
    logger_name = name or "curriculum_engine"
    level = (log_level or settings.LOG_LEVEL).upper()

    logger = logging.getLogger(logger_name)

    # Only configure if not already configured
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level, logging.INFO))
    logger.propagate = False

    detailed_formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    simple_formatter = logging.Formatter(fmt="%(levelname)s - %(name)s - %(message)s")

    if settings.LOG_FORMAT == "json":
        console_formatter: logging.Formatter = JSONFormatter(
            extra_fields={"service": settings.APP_NAME, "environment": settings.ENVIRONMENT}
        )
    elif settings.ENVIRONMENT == "production":
        console_formatter = simple_formatter
    else:
        console_formatter = detailed_formatter

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if settings.LOG_TO_FILE:
        settings.LOG_DIR.mkdir(parents=True, exist_ok=True)
        try:
            file_handler = RotatingFileHandler(
                settings.LOG_DIR / settings.LOG_FILE,
                maxBytes=settings.LOG_MAX_BYTES,
                backupCount=settings.LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
            file_handler.setFormatter(detailed_formatter)
            file_handler.setLevel(logging.DEBUG)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not create file handler: {e}")

    return logger

