#!/usr/bin/env python3
"""
Service logger setup

Configures a named logger from LoggingConfig: level, format, console and
optional file output. Safe to call more than once for the same service.
"""
import logging
import sys
from typing import Optional

from .config.logging_config import LoggingConfig


def setup_service_logger(
    service_name: str,
    level: Optional[str] = None,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Create or reconfigure the logger for a service.

    Args:
        service_name: Logger name, usually the service package name
        level: Overrides config.log_level when given
        config: Logging configuration (defaults to LoggingConfig.from_env())

    Returns:
        The configured logger
    """
    config = config or LoggingConfig.from_env()
    logger = logging.getLogger(service_name)
    logger.setLevel((level or config.log_level).upper())

    # Replace handlers installed by a previous call
    for handler in list(logger.handlers):
        if getattr(handler, "_service_handler", False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(config.log_format)

    if config.enable_console:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        console._service_handler = True
        logger.addHandler(console)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler._service_handler = True
        logger.addHandler(file_handler)

    return logger


__all__ = ["setup_service_logger"]
