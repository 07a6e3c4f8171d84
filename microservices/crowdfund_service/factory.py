"""
Crowdfund Service Factory

Factory functions for creating engine instances with concrete dependencies.
This is the ONLY place that picks implementations for the injected protocols.

Usage:
    from .factory import create_request_factory
    requests = create_request_factory(config, value_transfer=ledger)
"""
import logging
from typing import Optional

from core.config import CrowdfundConfig, get_settings

from .clock import SystemClock
from .events.publishers import CrowdfundEventPublisher
from .protocols import (
    ClockProtocol,
    EventBusProtocol,
    RequestRegistryProtocol,
    ValueTransferProtocol,
)
from .request_factory import RequestFactory

logger = logging.getLogger(__name__)


def create_event_publisher(
    config: Optional[CrowdfundConfig] = None,
    event_bus: Optional[EventBusProtocol] = None,
    clock: Optional[ClockProtocol] = None,
) -> CrowdfundEventPublisher:
    """
    Create the event publisher, honouring config.events_enabled.

    Args:
        config: Crowdfund configuration (defaults to global settings)
        event_bus: Bus to publish on; None disables publishing
        clock: Time source for event timestamps

    Returns:
        Configured CrowdfundEventPublisher
    """
    config = config or get_settings()
    if event_bus is not None and not config.events_enabled:
        logger.info("Crowdfund events disabled by configuration")
        event_bus = None

    return CrowdfundEventPublisher(
        event_bus=event_bus,
        clock=clock,
        source=config.event_source,
    )


def create_request_factory(
    config: Optional[CrowdfundConfig] = None,
    value_transfer: Optional[ValueTransferProtocol] = None,
    clock: Optional[ClockProtocol] = None,
    event_bus: Optional[EventBusProtocol] = None,
    registry: Optional[RequestRegistryProtocol] = None,
) -> RequestFactory:
    """
    Create a RequestFactory with its collaborators.

    Args:
        config: Crowdfund configuration (defaults to global settings)
        value_transfer: Value-transfer primitive (defaults to InMemoryValueLedger)
        clock: Time source (defaults to SystemClock)
        event_bus: Event bus for publishing events (optional)
        registry: Request registry (defaults to InMemoryRequestRegistry)

    Returns:
        Configured RequestFactory instance
    """
    config = config or get_settings()
    clock = clock or SystemClock()

    if value_transfer is None:
        from .ledger import InMemoryValueLedger
        logger.info("No value-transfer primitive supplied, using in-memory ledger")
        value_transfer = InMemoryValueLedger()

    if registry is None:
        from .request_registry import InMemoryRequestRegistry
        registry = InMemoryRequestRegistry()

    return RequestFactory(
        value_transfer=value_transfer,
        clock=clock,
        registry=registry,
        event_publisher=create_event_publisher(config, event_bus, clock),
    )


__all__ = [
    "create_event_publisher",
    "create_request_factory",
]
