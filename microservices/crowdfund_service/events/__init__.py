"""
Crowdfund Service Events

Event models and publisher for crowdfund service.
"""

from .models import (
    CrowdfundEventType,
    CrowdfundStreamConfig,
    RequestCreatedEventData,
    DonationReceivedEventData,
    RefundIssuedEventData,
    FundsDisbursedEventData,
    TransferFailedEventData,
)
from .publishers import CrowdfundEventPublisher

__all__ = [
    # Event Types
    "CrowdfundEventType",
    "CrowdfundStreamConfig",
    # Event Data Models
    "RequestCreatedEventData",
    "DonationReceivedEventData",
    "RefundIssuedEventData",
    "FundsDisbursedEventData",
    "TransferFailedEventData",
    # Publisher
    "CrowdfundEventPublisher",
]
