#!/usr/bin/env python3
"""Crowdfund service configuration

Main configuration for the crowdfund escrow engine.
Combines the logging sub-config with currency and event settings.
"""
import os
from dataclasses import dataclass, field

from .logging_config import LoggingConfig


def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class CrowdfundConfig:
    """Crowdfund engine settings"""
    service_name: str = "crowdfund_service"
    environment: str = "development"

    # Currency: amounts are integers in 10**-currency_decimals units
    currency_symbol: str = "ETH"
    currency_decimals: int = 18

    # Events
    events_enabled: bool = True
    event_source: str = "crowdfund_service"

    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> 'CrowdfundConfig':
        """Load crowdfund config from environment variables"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        service_name = os.getenv("SERVICE_NAME", "crowdfund_service")
        return cls(
            service_name=service_name,
            environment=env,
            currency_symbol=os.getenv("CROWDFUND_CURRENCY_SYMBOL", "ETH"),
            currency_decimals=_int(os.getenv("CROWDFUND_CURRENCY_DECIMALS", "18"), 18),
            events_enabled=_bool(os.getenv("CROWDFUND_EVENTS_ENABLED", "true")),
            event_source=os.getenv("CROWDFUND_EVENT_SOURCE", service_name),
            logging=LoggingConfig.from_env(),
        )
