"""
VT-UOS Population Console - Logging Configuration
Operator-facing log output for the console and its record store
"""

import logging
import os
import sys
from datetime import datetime

from pythonjsonlogger import jsonlogger

from config.settings import get_settings

settings = get_settings()

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def _formatter() -> logging.Formatter:
    # Vault terminals read plain lines; production deployments ship JSON to the collector
    if settings.ENVIRONMENT == "production":
        return jsonlogger.JsonFormatter(fmt=JSON_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    return logging.Formatter(fmt=PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def log_file_path(name: str) -> str:
    """Daily log file for ``name`` under LOG_DIR, e.g. logs/vtuos_21021023.log."""
    return os.path.join(settings.LOG_DIR, f"{name}_{datetime.now().strftime('%Y%m%d')}.log")


def setup_logging(name: str = "vtuos") -> logging.Logger:
    """
    Attach console (and optionally file) handlers for the console process.

    Census and demographics tables are printed on stdout, so log records
    go to stderr. When LOG_DIR is set every record is also appended to a
    daily file. The root logger receives the same handlers, which lets
    ``get_logger(__name__)`` loggers in repositories and services reach
    both outputs without configuring anything themselves.

    Args:
        name: Logger name, also the log file prefix

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, settings.LOG_LEVEL))
    # Repeated setup (tests, re-entrant CLI calls) must not stack handlers
    logger.handlers = []
    logger.propagate = False

    formatter = _formatter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if settings.LOG_DIR:
        file_handler = logging.FileHandler(log_file_path(name))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(logger.level)
    root_logger.handlers = list(logger.handlers)

    return logger


def get_logger(module_name: str) -> logging.Logger:
    """Module logger; pass ``__name__``."""
    return logging.getLogger(module_name)
