"""
Unit Test Fixtures for Crowdfund Service

Provides a fixed clock and lightweight collaborators for unit testing.
"""

from datetime import datetime, timedelta

import pytest

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../.."))

from microservices.crowdfund_service.ledger import InMemoryValueLedger
from microservices.crowdfund_service.request_factory import RequestFactory

from tests.contracts.crowdfund.data_contract import EPOCH


class FixedClock:
    """Clock that returns a settable instant"""

    def __init__(self, now: datetime = EPOCH):
        self.current = now

    def now(self) -> datetime:
        return self.current

    def tick(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def value_ledger() -> InMemoryValueLedger:
    return InMemoryValueLedger()


@pytest.fixture
def request_factory(value_ledger, fixed_clock) -> RequestFactory:
    """RequestFactory without an event bus"""
    return RequestFactory(value_transfer=value_ledger, clock=fixed_clock)
