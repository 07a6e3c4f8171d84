#!/usr/bin/env python3
"""Configuration for the crowdfund engine

Configuration hierarchy:
- crowdfund_config: Currency, events and service identity
- logging_config: Logging configuration

An env file is loaded before the settings are built. CROWDFUND_ENV_FILE
names it explicitly; otherwise it is picked from ENV. Variables already set
in the process environment win over the file.
"""
import os
from typing import Optional

from dotenv import load_dotenv

from .logging_config import LoggingConfig
from .crowdfund_config import CrowdfundConfig

ENV_FILES = {
    "development": ".env",
    "dev": ".env",
    "testing": ".env.test",
    "test": ".env.test",
    "staging": ".env.staging",
    "production": ".env.production",
}


def resolve_env_file(env: Optional[str] = None) -> str:
    """Env file for an environment name (defaults to ENV / ENVIRONMENT)"""
    explicit = os.getenv("CROWDFUND_ENV_FILE")
    if explicit:
        return explicit
    env = env or os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
    return ENV_FILES.get(env, ".env")


load_dotenv(resolve_env_file(), override=False)

settings = CrowdfundConfig.from_env()


def get_settings() -> CrowdfundConfig:
    """Get global settings instance"""
    return settings


def reload_settings() -> CrowdfundConfig:
    """Rebuild settings from the current environment"""
    global settings
    settings = CrowdfundConfig.from_env()
    return settings


__all__ = [
    'CrowdfundConfig',
    'LoggingConfig',
    'get_settings',
    'reload_settings',
    'resolve_env_file',
    'settings',
]
