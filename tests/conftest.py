"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - component/: Component tests (engine with mocked capabilities)
    - unit/     : Unit tests (pure functions, models, config)
    - contracts/: Test data factories
"""
import os
import sys

import pytest

# Set testing environment BEFORE any project imports
os.environ.setdefault("ENV", "testing")

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from tests.contracts.crowdfund.data_contract import CrowdfundTestDataFactory  # noqa: E402


@pytest.fixture
def data_factory() -> CrowdfundTestDataFactory:
    """Provide crowdfund test data factory"""
    return CrowdfundTestDataFactory()
