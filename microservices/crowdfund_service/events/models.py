"""
Crowdfund Event Data Models

Event type definitions and data structures for crowdfund service events.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# Event Type Definitions
# =============================================================================


class CrowdfundEventType(str, Enum):
    """
    Events published by crowdfund_service.

    These are the authoritative event types for this service.
    Other services should reference these when subscribing.
    """
    # Request lifecycle events
    REQUEST_CREATED = "crowdfund.request.created"

    # Value movement events
    DONATION_RECEIVED = "crowdfund.donation.received"
    REFUND_ISSUED = "crowdfund.refund.issued"
    FUNDS_DISBURSED = "crowdfund.funds.disbursed"

    # Error events
    TRANSFER_FAILED = "crowdfund.transfer.failed"


class CrowdfundStreamConfig:
    """Stream configuration for crowdfund_service"""
    STREAM_NAME = "crowdfund-stream"
    SUBJECTS = ["crowdfund.>"]
    MAX_MESSAGES = 100000
    CONSUMER_PREFIX = "crowdfund"


# =============================================================================
# Event Data Models - Published Events
# =============================================================================


class RequestCreatedEventData(BaseModel):
    """crowdfund.request.created event data"""
    request_address: str = Field(..., description="Request address")
    owner: str = Field(..., description="Identity allowed to withdraw")
    title: str = Field(..., description="Request title")
    required_amount: int = Field(..., description="Target in base units")
    expires_at: datetime = Field(..., description="Pledge deadline")
    timestamp: Optional[datetime] = Field(None, description="Event timestamp")


class DonationReceivedEventData(BaseModel):
    """crowdfund.donation.received event data"""
    request_address: str = Field(..., description="Request address")
    contributor: str = Field(..., description="Pledging identity")
    amount: int = Field(..., description="Pledged base units")
    contributor_total: int = Field(..., description="Contributor balance after the pledge")
    raised_amount: int = Field(..., description="Request total after the pledge")
    limit_reached: bool = Field(..., description="Whether the pledge met the target")
    timestamp: Optional[datetime] = Field(None, description="Event timestamp")


class RefundIssuedEventData(BaseModel):
    """crowdfund.refund.issued event data"""
    request_address: str = Field(..., description="Request address")
    contributor: str = Field(..., description="Refunded identity")
    amount: int = Field(..., description="Refunded base units")
    raised_amount: int = Field(..., description="Request total after the refund")
    transfer_id: str = Field(..., description="Settled transfer reference")
    timestamp: Optional[datetime] = Field(None, description="Event timestamp")


class FundsDisbursedEventData(BaseModel):
    """crowdfund.funds.disbursed event data"""
    request_address: str = Field(..., description="Request address")
    owner: str = Field(..., description="Receiving owner")
    amount: int = Field(..., description="Disbursed base units")
    transfer_id: str = Field(..., description="Settled transfer reference")
    timestamp: Optional[datetime] = Field(None, description="Event timestamp")


class TransferFailedEventData(BaseModel):
    """crowdfund.transfer.failed event data"""
    request_address: str = Field(..., description="Request address")
    recipient: str = Field(..., description="Intended recipient")
    amount: int = Field(..., description="Base units that were not moved")
    operation: str = Field(..., description="refund or disbursement")
    error: str = Field(..., description="Failure reason")
    timestamp: Optional[datetime] = Field(None, description="Event timestamp")
