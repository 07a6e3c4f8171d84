"""
Component Test Layer Configuration

Structure:
    tests/component/
    ├── crowdfund/   Engine component tests
    └── mocks/       Mock implementations of the injected capabilities

Usage:
    pytest tests/component -v
"""
import os
import sys

import pytest

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from tests.component.mocks import (  # noqa: E402
    MockClock,
    MockEventBus,
    MockValueLedger,
)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests"
    )


# =============================================================================
# Capability Mocks
# =============================================================================

@pytest.fixture
def mock_clock() -> MockClock:
    """Controllable clock"""
    return MockClock()


@pytest.fixture
def mock_ledger() -> MockValueLedger:
    """Value ledger with failure injection and recipient hooks"""
    return MockValueLedger()


@pytest.fixture
def mock_event_bus() -> MockEventBus:
    """Mock event bus"""
    return MockEventBus()
