"""
Crowdfund Request Factory - Business Logic Layer

Registry that validates creation parameters, instantiates Requests and keeps
their handles in creation order. It is the only way to create a Request.
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional, Union

from pydantic import ValidationError

from .clock import SystemClock
from .crowdfund_request import Request
from .events.publishers import CrowdfundEventPublisher
from .models import RequestCreateRequest
from .protocols import (
    ClockProtocol,
    InvalidParametersError,
    RequestNotFoundError,
    RequestRegistryProtocol,
    ValueTransferProtocol,
)
from .request_registry import InMemoryRequestRegistry

logger = logging.getLogger(__name__)


class RequestFactory:
    """
    Crowdfund request registry.

    Creation rules:
    - expires_at must be strictly later than the clock's current time
    - required_amount must be an integer greater than zero
    - title and description are text, empty allowed
    - the caller becomes the owner
    """

    def __init__(
        self,
        value_transfer: ValueTransferProtocol,
        clock: Optional[ClockProtocol] = None,
        registry: Optional[RequestRegistryProtocol] = None,
        event_publisher: Optional[CrowdfundEventPublisher] = None,
    ):
        """
        Initialize the factory with its collaborators.

        Args:
            value_transfer: Primitive used by every created request to pay out
            clock: Time source for deadline checks (defaults to SystemClock)
            registry: Storage for created requests (defaults to in-memory)
            event_publisher: Publisher shared with created requests (optional)
        """
        self.value_transfer = value_transfer
        self.clock = clock or SystemClock()
        self.registry = registry or InMemoryRequestRegistry()
        self.event_publisher = event_publisher or CrowdfundEventPublisher(clock=self.clock)

    async def create_request(
        self,
        owner: str,
        title: str,
        description: str,
        required_amount: int,
        expires_at: Union[datetime, int],
    ) -> Request:
        """
        Create a new crowdfunding request owned by the caller.

        Args:
            owner: Caller identity; the only identity allowed to withdraw
            title: Request title
            description: Request description
            required_amount: Target in base units, > 0
            expires_at: Deadline as a datetime or unix timestamp, must be in the future

        Returns:
            The created Request handle

        Raises:
            InvalidParametersError: If any parameter is invalid; nothing is created
        """
        try:
            params = RequestCreateRequest(
                owner=owner,
                title=title,
                description=description,
                required_amount=required_amount,
                expires_at=expires_at,
            )
        except ValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error.get("loc") else None
            logger.warning(f"Rejected request creation by {owner}: {field}: {error['msg']}")
            raise InvalidParametersError(
                f"Invalid {field}: {error['msg']}", field=field
            ) from e

        now = self.clock.now()
        if params.expires_at <= now:
            logger.warning(f"Rejected request creation by {owner}: expires_at not in the future")
            raise InvalidParametersError(
                f"expires_at must be in the future (now {now.isoformat()}, "
                f"got {params.expires_at.isoformat()})",
                field="expires_at",
            )

        address = f"req_{uuid.uuid4().hex[:16]}"
        request = Request._new(
            address=address,
            owner=params.owner,
            title=params.title,
            description=params.description,
            required_amount=params.required_amount,
            expires_at=params.expires_at,
            clock=self.clock,
            value_transfer=self.value_transfer,
            event_publisher=self.event_publisher,
        )
        await self.registry.add(request)

        logger.info(
            f"Created request {address} for {params.owner}: "
            f"target {params.required_amount}, expires {params.expires_at.isoformat()}"
        )
        await self.event_publisher.publish_request_created(
            request_address=address,
            owner=params.owner,
            title=params.title,
            required_amount=params.required_amount,
            expires_at=params.expires_at,
        )
        return request

    async def get_requests(self) -> List[Request]:
        """All created requests in creation order"""
        return await self.registry.list_requests()

    async def get_request(self, address: str) -> Request:
        """Resolve a request address to its handle"""
        request = await self.registry.get_request(address)
        if request is None:
            raise RequestNotFoundError(f"Request not found: {address}", address=address)
        return request


__all__ = ["RequestFactory"]
