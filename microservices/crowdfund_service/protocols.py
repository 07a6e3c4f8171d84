"""
Crowdfund Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, runtime_checkable

# Import only models (no I/O dependencies)
from .models import RequestState, TransferRecord

if TYPE_CHECKING:
    from .crowdfund_request import Request


# ============================================================================
# Custom Exceptions - defined here to avoid importing the engine
# ============================================================================

class CrowdfundServiceError(Exception):
    """Base exception for crowdfund service errors"""
    pass


class InvalidParametersError(CrowdfundServiceError):
    """Raised when request creation parameters are malformed"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidAmountError(CrowdfundServiceError):
    """Raised when a pledge value is missing or not positive"""

    def __init__(self, message: str, amount: Any = None):
        super().__init__(message)
        self.amount = amount


class InvalidRequestStateError(CrowdfundServiceError):
    """Raised when the request is in the wrong state for an operation"""

    def __init__(self, message: str, state: Optional[RequestState] = None):
        super().__init__(message)
        self.state = state


class FundingClosedError(InvalidRequestStateError):
    """Pledge attempted after expiry or after the target was met"""
    pass


class NotExpiredError(InvalidRequestStateError):
    """Refund attempted before the deadline passed"""
    pass


class LimitReachedError(InvalidRequestStateError):
    """Refund attempted on a campaign that met its target"""
    pass


class LimitNotReachedError(InvalidRequestStateError):
    """Withdrawal attempted before the target was met"""
    pass


class AlreadyDisbursedError(InvalidRequestStateError):
    """Value movement attempted after the owner withdrew"""
    pass


class NoContributionError(CrowdfundServiceError):
    """Refund attempted by a non-contributor or an already refunded one"""

    def __init__(self, message: str, contributor: Optional[str] = None):
        super().__init__(message)
        self.contributor = contributor


class NotOwnerError(CrowdfundServiceError):
    """Withdrawal attempted by someone other than the owner"""

    def __init__(self, message: str, caller: Optional[str] = None):
        super().__init__(message)
        self.caller = caller


class TransferFailedError(CrowdfundServiceError):
    """Value transfer primitive failed; the operation was rolled back"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class RequestNotFoundError(CrowdfundServiceError):
    """Raised when no request is registered under an address"""

    def __init__(self, message: str, address: Optional[str] = None):
        super().__init__(message)
        self.address = address


# ============================================================================
# Capability Protocols
# ============================================================================

@runtime_checkable
class ClockProtocol(Protocol):
    """Source of the current time for deadline checks"""

    def now(self) -> datetime:
        """Return the current timezone-aware UTC time"""
        ...


@runtime_checkable
class ValueTransferProtocol(Protocol):
    """
    Interface for the value-transfer primitive.

    Moves `amount` base units out of a request's escrow to `recipient`.
    May call back into the engine before returning.
    """

    async def transfer(
        self,
        source: str,
        recipient: str,
        amount: int,
        *,
        memo: Optional[str] = None,
    ) -> TransferRecord:
        """Transfer value and return the settled record"""
        ...


@runtime_checkable
class EventBusProtocol(Protocol):
    """Interface for Event Bus - no I/O imports"""

    async def publish(self, subject: str, data: Dict[str, Any]) -> None:
        """Publish a payload on a subject"""
        ...


# ============================================================================
# Repository Protocols
# ============================================================================

@runtime_checkable
class RequestRegistryProtocol(Protocol):
    """
    Interface for the request registry.

    Append-only; iteration order is creation order.
    """

    async def add(self, request: "Request") -> None:
        """Record a newly created request"""
        ...

    async def get_request(self, address: str) -> Optional["Request"]:
        """Get a request by address"""
        ...

    async def list_requests(self) -> List["Request"]:
        """All requests in creation order"""
        ...

    async def count(self) -> int:
        """Number of registered requests"""
        ...


# ============================================================================
# Exports
# ============================================================================

__all__ = [
    # Exceptions
    "CrowdfundServiceError",
    "InvalidParametersError",
    "InvalidAmountError",
    "InvalidRequestStateError",
    "FundingClosedError",
    "NotExpiredError",
    "LimitReachedError",
    "LimitNotReachedError",
    "AlreadyDisbursedError",
    "NoContributionError",
    "NotOwnerError",
    "TransferFailedError",
    "RequestNotFoundError",
    # Protocols
    "ClockProtocol",
    "ValueTransferProtocol",
    "EventBusProtocol",
    "RequestRegistryProtocol",
]
