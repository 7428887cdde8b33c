"""
Service Logger Setup

Configures a named logger for a service or CLI process from LoggingConfig.

Usage:
    from core.logger import setup_service_logger
    logger = setup_service_logger("catalog_service")
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from core.config.logging_config import LoggingConfig


def setup_service_logger(
    service_name: str,
    level: Optional[str] = None,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Configure and return the logger for a service

    Handlers are attached once; calling this again for the same name only
    adjusts the level.

    Args:
        service_name: Logger name (usually the service package name)
        level: Log level override, defaults to LoggingConfig.log_level
        config: Logging configuration, loaded from the environment if omitted

    Returns:
        logging.Logger: Configured logger
    """
    config = config or LoggingConfig.from_env()
    log_level = getattr(logging, (level or config.log_level).upper(), logging.INFO)

    logger = logging.getLogger(service_name)
    logger.setLevel(log_level)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(config.log_format)

    if config.enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


__all__ = ["setup_service_logger"]
