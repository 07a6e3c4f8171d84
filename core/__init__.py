#!/usr/bin/env python3
"""
Core Module for the Crowdfund Escrow Engine

Shared infrastructure used by the services in this repository.

COMPONENTS:
    - config/: dataclass configuration loaded from the environment
    - logger.py: service logger setup

USAGE:
    from core.config import get_settings
    from core.logger import setup_service_logger

    settings = get_settings()
    logger = setup_service_logger(settings.service_name, config=settings.logging)
"""

__version__ = "1.0.0"
