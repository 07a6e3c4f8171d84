"""
Crowdfund Event Publishers

Publishes events to the configured event bus.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ..clock import SystemClock
from ..protocols import ClockProtocol, EventBusProtocol
from .models import (
    CrowdfundEventType,
    RequestCreatedEventData,
    DonationReceivedEventData,
    RefundIssuedEventData,
    FundsDisbursedEventData,
    TransferFailedEventData,
)

logger = logging.getLogger(__name__)


class CrowdfundEventPublisher:
    """Publisher for crowdfund service events"""

    def __init__(
        self,
        event_bus: Optional[EventBusProtocol] = None,
        clock: Optional[ClockProtocol] = None,
        source: str = "crowdfund_service",
    ):
        self.event_bus = event_bus
        self.clock = clock or SystemClock()
        self.source = source

    def _now(self) -> datetime:
        return self.clock.now()

    async def publish(
        self,
        event_type: CrowdfundEventType,
        data: Dict[str, Any],
    ) -> bool:
        """
        Publish an event to the bus.

        Args:
            event_type: The event type enum
            data: Event data payload

        Returns:
            True if published successfully, False otherwise
        """
        if not self.event_bus:
            logger.debug(f"Event bus not configured, skipping publish: {event_type.value}")
            return False

        try:
            event = {
                "event_type": event_type.value,
                "source": self.source,
                "timestamp": self._now().isoformat(),
                "data": data,
            }

            await self.event_bus.publish(event_type.value, event)
            logger.debug(f"Published event: {event_type.value}")
            return True

        except Exception as e:
            logger.error(f"Failed to publish event {event_type.value}: {e}")
            return False

    # ====================
    # Request Lifecycle Events
    # ====================

    async def publish_request_created(
        self,
        request_address: str,
        owner: str,
        title: str,
        required_amount: int,
        expires_at: datetime,
    ) -> bool:
        """Publish crowdfund.request.created event"""
        data = RequestCreatedEventData(
            request_address=request_address,
            owner=owner,
            title=title,
            required_amount=required_amount,
            expires_at=expires_at,
            timestamp=self._now(),
        )
        return await self.publish(CrowdfundEventType.REQUEST_CREATED, data.model_dump(mode="json"))

    # ====================
    # Value Movement Events
    # ====================

    async def publish_donation_received(
        self,
        request_address: str,
        contributor: str,
        amount: int,
        contributor_total: int,
        raised_amount: int,
        limit_reached: bool,
    ) -> bool:
        """Publish crowdfund.donation.received event"""
        data = DonationReceivedEventData(
            request_address=request_address,
            contributor=contributor,
            amount=amount,
            contributor_total=contributor_total,
            raised_amount=raised_amount,
            limit_reached=limit_reached,
            timestamp=self._now(),
        )
        return await self.publish(CrowdfundEventType.DONATION_RECEIVED, data.model_dump(mode="json"))

    async def publish_refund_issued(
        self,
        request_address: str,
        contributor: str,
        amount: int,
        raised_amount: int,
        transfer_id: str,
    ) -> bool:
        """Publish crowdfund.refund.issued event"""
        data = RefundIssuedEventData(
            request_address=request_address,
            contributor=contributor,
            amount=amount,
            raised_amount=raised_amount,
            transfer_id=transfer_id,
            timestamp=self._now(),
        )
        return await self.publish(CrowdfundEventType.REFUND_ISSUED, data.model_dump(mode="json"))

    async def publish_funds_disbursed(
        self,
        request_address: str,
        owner: str,
        amount: int,
        transfer_id: str,
    ) -> bool:
        """Publish crowdfund.funds.disbursed event"""
        data = FundsDisbursedEventData(
            request_address=request_address,
            owner=owner,
            amount=amount,
            transfer_id=transfer_id,
            timestamp=self._now(),
        )
        return await self.publish(CrowdfundEventType.FUNDS_DISBURSED, data.model_dump(mode="json"))

    async def publish_transfer_failed(
        self,
        request_address: str,
        recipient: str,
        amount: int,
        operation: str,
        error: str,
    ) -> bool:
        """Publish crowdfund.transfer.failed event"""
        data = TransferFailedEventData(
            request_address=request_address,
            recipient=recipient,
            amount=amount,
            operation=operation,
            error=error,
            timestamp=self._now(),
        )
        return await self.publish(CrowdfundEventType.TRANSFER_FAILED, data.model_dump(mode="json"))
