"""
Service logger setup

Console logging for every EarnGage entrypoint, plus an optional file
handler. Module code keeps using ``logging.getLogger(__name__)``; this only
configures handlers once per named logger.
"""

import logging
import sys
from typing import Optional

from core.config import get_settings


def setup_service_logger(
    service_name: str,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure and return the logger for a service entrypoint.

    Args:
        service_name: Logger name, usually the service package name
        level: Log level name; defaults to LOG_LEVEL from settings
        log_file: Optional file path; defaults to LOG_FILE from settings

    Returns:
        Configured logger
    """
    logging_config = get_settings().logging
    level_name = (level or logging_config.log_level or "INFO").upper()
    log_file = log_file if log_file is not None else logging_config.log_file

    logger = logging.getLogger(service_name)
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    if not logger.handlers:
        formatter = logging.Formatter(logging_config.log_format)

        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        logger.addHandler(console)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    # Service modules log under their own package names
    for package in ("core", "earngage"):
        logging.getLogger(package).setLevel(logger.level)

    return logger


__all__ = ["setup_service_logger"]
