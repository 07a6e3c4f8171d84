"""
Crowdfund Request Registry

In-memory implementation of RequestRegistryProtocol.
"""

import logging
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from .crowdfund_request import Request

logger = logging.getLogger(__name__)


class InMemoryRequestRegistry:
    """Append-only registry of requests, ordered by creation"""

    def __init__(self):
        self._requests: List["Request"] = []
        self._by_address: Dict[str, "Request"] = {}

    async def add(self, request: "Request") -> None:
        if request.address in self._by_address:
            raise ValueError(f"Request {request.address} is already registered")
        self._requests.append(request)
        self._by_address[request.address] = request
        logger.debug(f"Registered request {request.address} ({len(self._requests)} total)")

    async def get_request(self, address: str) -> Optional["Request"]:
        return self._by_address.get(address)

    async def list_requests(self) -> List["Request"]:
        return list(self._requests)

    async def count(self) -> int:
        return len(self._requests)


__all__ = ["InMemoryRequestRegistry"]
