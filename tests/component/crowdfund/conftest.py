"""
Component Test Fixtures for Crowdfund Service

Builds a RequestFactory wired to the mocked clock, ledger and event bus, and
a default request owned by `owner`: target 1 ether, deadline one hour out.
"""

import pytest
import pytest_asyncio

from microservices.crowdfund_service.events.publishers import CrowdfundEventPublisher
from microservices.crowdfund_service.request_factory import RequestFactory
from microservices.crowdfund_service.request_registry import InMemoryRequestRegistry

from tests.contracts.crowdfund.data_contract import ether


@pytest.fixture
def event_publisher(mock_event_bus, mock_clock) -> CrowdfundEventPublisher:
    return CrowdfundEventPublisher(event_bus=mock_event_bus, clock=mock_clock)


@pytest.fixture
def registry() -> InMemoryRequestRegistry:
    return InMemoryRequestRegistry()


@pytest.fixture
def request_factory(mock_ledger, mock_clock, registry, event_publisher) -> RequestFactory:
    """RequestFactory with mocked dependencies"""
    return RequestFactory(
        value_transfer=mock_ledger,
        clock=mock_clock,
        registry=registry,
        event_publisher=event_publisher,
    )


@pytest.fixture
def owner(data_factory) -> str:
    return data_factory.make_user_id()


@pytest.fixture
def contributor(data_factory) -> str:
    return data_factory.make_user_id()


@pytest.fixture
def other_contributor(data_factory) -> str:
    return data_factory.make_user_id()


@pytest_asyncio.fixture
async def funding_request(request_factory, mock_clock, owner, data_factory):
    """Request owned by `owner`, target 1 ether, expires in one hour"""
    params = data_factory.make_create_params(
        owner=owner,
        now=mock_clock.now(),
        required_amount=ether("1"),
    )
    return await request_factory.create_request(**params)
