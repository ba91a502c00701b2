"""
Logging Configuration

Centralized logging configuration for the debris tracker.

Library modules log through the standard logging module; refresh reports
are emitted as structured events through structlog, which is routed into
the same stdlib handlers.

Usage:
    from logging_config import get_logger, configure_logging

    configure_logging(logging.DEBUG)
    logger = get_logger(__name__)
    logger.info("Catalog loaded")
"""

import logging
import sys
from typing import Optional

import structlog

# Default logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the entire application.

    Parameters
    ----------
    level : int
        Logging level (e.g., logging.DEBUG, logging.INFO)
    log_file : str, optional
        Path to log file. If None, logs only to console.
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.KeyValueRenderer(key_order=["event", "logger"]),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Parameters
    ----------
    name : str
        Name of the logger (typically __name__)

    Returns
    -------
    logging.Logger
        Configured logger instance
    """
    return logging.getLogger(name)
