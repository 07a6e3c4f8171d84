#!/usr/bin/env python3
"""Logging configuration consumed by core.logger.setup_service_logger"""
import os
from dataclasses import dataclass

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _bool(val: str) -> bool:
    return val.lower() == "true"


@dataclass
class LoggingConfig:
    """Level, format and handlers for a service logger"""
    log_level: str = "INFO"
    log_format: str = DEFAULT_LOG_FORMAT
    log_file: str = ""  # empty disables the file handler
    enable_console: bool = True

    service_name: str = "crowdfund_service"
    environment: str = "development"

    @classmethod
    def from_env(cls) -> 'LoggingConfig':
        """Load logging config from LOG_* environment variables"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        # DEBUG in development, INFO elsewhere
        default_level = "DEBUG" if env == "development" else "INFO"
        return cls(
            log_level=os.getenv("LOG_LEVEL", default_level),
            log_format=os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT),
            log_file=os.getenv("LOG_FILE", ""),
            enable_console=_bool(os.getenv("LOG_CONSOLE", "true")),
            service_name=os.getenv("SERVICE_NAME", "crowdfund_service"),
            environment=env,
        )
