"""
Crowdfund Service Data Models

Defines data models for crowdfunding requests, their derived lifecycle
states and the value transfers they produce.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


class RequestState(str, Enum):
    """Derived lifecycle state of a crowdfunding request"""
    ACTIVE = "active"  # Accepting pledges
    FUNDED = "funded"  # Target met, awaiting owner withdrawal
    EXPIRED_UNFUNDED = "expired_unfunded"  # Deadline passed, awaiting refunds
    DISBURSED = "disbursed"  # Owner withdrew, no further value movement


class TransferKind(str, Enum):
    """Reason a value transfer left a request"""
    REFUND = "refund"
    DISBURSEMENT = "disbursement"


class BaseContract(BaseModel):
    """Base model for all crowdfund models"""

    model_config = ConfigDict(from_attributes=True)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _is_numeric_text(value: Any) -> bool:
    if not isinstance(value, (str, bytes)):
        return False
    try:
        float(value)
    except ValueError:
        return False
    return True


class RequestCreateRequest(BaseContract):
    """Create crowdfunding request parameters"""
    owner: str = Field(..., min_length=1, description="Identity of the creator")
    title: str = Field(..., description="Campaign title, may be empty")
    description: str = Field(..., description="Campaign description, may be empty")
    required_amount: StrictInt = Field(..., gt=0, description="Target in base units")
    expires_at: datetime = Field(..., description="Deadline; pledges after it are rejected")

    @field_validator("expires_at", mode="before")
    @classmethod
    def parse_unix_timestamp(cls, v):
        # Only ints are unix timestamps
        if isinstance(v, bool) or isinstance(v, (float, Decimal)) or _is_numeric_text(v):
            raise ValueError("expires_at must be a datetime or an integer unix timestamp")
        if isinstance(v, int):
            try:
                return datetime.fromtimestamp(v, tz=timezone.utc)
            except (OverflowError, OSError, ValueError) as e:
                raise ValueError("expires_at out of range") from e
        return v

    @field_validator("expires_at")
    @classmethod
    def normalize_timezone(cls, v: datetime) -> datetime:
        return _as_utc(v)


class RequestSummary(BaseContract):
    """Point-in-time snapshot of a request"""
    address: str
    owner: str
    title: str
    description: str
    required_amount: int
    raised_amount: int
    expires_at: datetime
    created_at: datetime
    funds_disbursed: bool
    state: RequestState
    has_expired: bool
    has_reached_limit: bool
    patron_count: int
    patrons: Dict[str, int] = Field(default_factory=dict)


class TransferRecord(BaseContract):
    """Outbound value transfer from a request's escrow"""
    transfer_id: str = Field(default_factory=lambda: f"txf_{uuid4().hex[:16]}")
    source: str = Field(..., description="Request address the value leaves")
    recipient: str
    amount: int = Field(..., ge=0)
    memo: Optional[str] = None
    kind: Optional[TransferKind] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: Dict[str, Any] = Field(default_factory=dict)


__all__ = [
    "RequestState",
    "TransferKind",
    "BaseContract",
    "RequestCreateRequest",
    "RequestSummary",
    "TransferRecord",
]
