"""
Component Test Mocks

Shared mock implementations for component testing.
These mocks replace the engine's injected capabilities (clock, value transfer, event bus).
"""

from .clock_mock import MockClock
from .event_bus_mock import MockEventBus
from .ledger_mock import MockValueLedger

__all__ = [
    'MockClock',
    'MockEventBus',
    'MockValueLedger',
]
