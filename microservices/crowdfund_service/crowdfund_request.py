"""
Crowdfund Request - Business Logic

A single crowdfunding campaign: immutable terms, a contribution ledger and
the state machine deciding whether value goes back to contributors or out
to the owner.

Lifecycle state is never stored. It is derived on every call from the
clock, raised_amount and funds_disbursed:

    ACTIVE            not expired, target not met, not disbursed
    FUNDED            target met, not disbursed
    EXPIRED_UNFUNDED  expired, target not met, not disbursed
    DISBURSED         owner withdrew

Value-moving operations always commit the ledger change before calling the
transfer primitive, so a call that re-enters the request from inside the
transfer sees the committed state and is rejected.
"""

import asyncio
import contextvars
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Dict, FrozenSet, Optional

from .events.publishers import CrowdfundEventPublisher
from .models import RequestState, RequestSummary, TransferKind, TransferRecord
from .protocols import (
    AlreadyDisbursedError,
    ClockProtocol,
    FundingClosedError,
    InvalidAmountError,
    LimitNotReachedError,
    LimitReachedError,
    NoContributionError,
    NotExpiredError,
    NotOwnerError,
    TransferFailedError,
    ValueTransferProtocol,
)

logger = logging.getLogger(__name__)

_CREATION_TOKEN = object()

# Requests whose lock is held by the current context; inherited by child tasks
_held_requests: "contextvars.ContextVar[FrozenSet[Request]]" = contextvars.ContextVar(
    "crowdfund_held_requests", default=frozenset()
)


class Request:
    """Crowdfunding request with its own contribution ledger"""

    def __init__(
        self,
        *,
        address: str,
        owner: str,
        title: str,
        description: str,
        required_amount: int,
        expires_at: datetime,
        clock: ClockProtocol,
        value_transfer: ValueTransferProtocol,
        event_publisher: Optional[CrowdfundEventPublisher] = None,
        _token: object = None,
    ):
        if _token is not _CREATION_TOKEN:
            raise TypeError("Requests are created through RequestFactory.create_request()")

        self._address = address
        self._owner = owner
        self._title = title
        self._description = description
        self._required_amount = required_amount
        self._expires_at = expires_at
        self._created_at = clock.now()

        self._clock = clock
        self._value_transfer = value_transfer
        self._events = event_publisher or CrowdfundEventPublisher(clock=clock)

        self._raised_amount = 0
        self._patrons: Dict[str, int] = {}
        self._funds_disbursed = False

        self._lock = asyncio.Lock()

    @classmethod
    def _new(cls, **kwargs) -> "Request":
        return cls(_token=_CREATION_TOKEN, **kwargs)

    def __repr__(self) -> str:
        return (
            f"Request(address={self._address!r}, owner={self._owner!r}, "
            f"raised={self._raised_amount}/{self._required_amount}, "
            f"disbursed={self._funds_disbursed})"
        )

    # ====================
    # Immutable terms
    # ====================

    @property
    def address(self) -> str:
        return self._address

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str:
        return self._description

    @property
    def required_amount(self) -> int:
        return self._required_amount

    @property
    def expires_at(self) -> datetime:
        return self._expires_at

    @property
    def created_at(self) -> datetime:
        return self._created_at

    # ====================
    # Ledger views
    # ====================

    @property
    def raised_amount(self) -> int:
        return self._raised_amount

    @property
    def funds_disbursed(self) -> bool:
        return self._funds_disbursed

    @property
    def patrons(self) -> Dict[str, int]:
        """Copy of current non-refunded balances per contributor"""
        return dict(self._patrons)

    def patron_balance(self, identity: str) -> int:
        return self._patrons.get(identity, 0)

    # ====================
    # Derived state
    # ====================

    def has_reached_limit(self) -> bool:
        return self._raised_amount >= self._required_amount

    def has_expired(self) -> bool:
        return self._expired_at(self._clock.now())

    def _expired_at(self, now: datetime) -> bool:
        # A pledge at exactly expires_at is still on time
        return now > self._expires_at

    def state(self) -> RequestState:
        return self._state_at(self._clock.now())

    def _state_at(self, now: datetime) -> RequestState:
        if self._funds_disbursed:
            return RequestState.DISBURSED
        if self.has_reached_limit():
            return RequestState.FUNDED
        if self._expired_at(now):
            return RequestState.EXPIRED_UNFUNDED
        return RequestState.ACTIVE

    def summary(self) -> RequestSummary:
        """Snapshot of terms, ledger and derived state"""
        now = self._clock.now()
        return RequestSummary(
            address=self._address,
            owner=self._owner,
            title=self._title,
            description=self._description,
            required_amount=self._required_amount,
            raised_amount=self._raised_amount,
            expires_at=self._expires_at,
            created_at=self._created_at,
            funds_disbursed=self._funds_disbursed,
            state=self._state_at(now),
            has_expired=self._expired_at(now),
            has_reached_limit=self.has_reached_limit(),
            patron_count=len(self._patrons),
            patrons=dict(self._patrons),
        )

    # ====================
    # Serialization
    # ====================

    @asynccontextmanager
    async def _serialized(self) -> AsyncIterator[None]:
        """
        Run one mutating operation at a time.

        A nested call made while this request's lock is held by the calling
        context, including tasks spawned from it during a transfer, does not
        wait for the lock; it runs against the committed ledger.
        """
        held = _held_requests.get()
        if self in held:
            yield
            return

        async with self._lock:
            token = _held_requests.set(held | {self})
            try:
                yield
            finally:
                _held_requests.reset(token)

    def _reject_if_disbursed(self, operation: str) -> None:
        if self._funds_disbursed:
            logger.warning(f"Rejected {operation} on {self._address}: funds already disbursed")
            raise AlreadyDisbursedError(
                f"Request {self._address} has already been disbursed",
                state=RequestState.DISBURSED,
            )

    # ====================
    # Pledging
    # ====================

    async def donate(self, contributor: str, amount: int) -> None:
        """
        Pledge `amount` base units to this request.

        Raises:
            AlreadyDisbursedError: owner already withdrew
            FundingClosedError: deadline passed or target already met
            InvalidAmountError: amount is not a positive integer
        """
        if not contributor:
            raise ValueError("contributor is required")

        async with self._serialized():
            now = self._clock.now()
            self._reject_if_disbursed("donate")

            if self._expired_at(now) or self.has_reached_limit():
                state = self._state_at(now)
                logger.warning(f"Rejected pledge from {contributor} on {self._address}: {state.value}")
                raise FundingClosedError(
                    f"Request {self._address} is not accepting pledges ({state.value})",
                    state=state,
                )

            if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
                raise InvalidAmountError(
                    f"Pledge must be a positive integer amount, got {amount!r}",
                    amount=amount,
                )

            self._raised_amount += amount
            self._patrons[contributor] = self._patrons.get(contributor, 0) + amount

            contributor_total = self._patrons[contributor]
            raised_amount = self._raised_amount
            limit_reached = self.has_reached_limit()

        logger.info(
            f"Accepted pledge of {amount} from {contributor} on {self._address} "
            f"({raised_amount}/{self._required_amount})"
        )
        await self._events.publish_donation_received(
            request_address=self._address,
            contributor=contributor,
            amount=amount,
            contributor_total=contributor_total,
            raised_amount=raised_amount,
            limit_reached=limit_reached,
        )

    # ====================
    # Refunds
    # ====================

    async def refund(self, contributor: str) -> TransferRecord:
        """
        Return a contributor's whole pledge after the request expired unfunded.

        The contributor's entry is removed and raised_amount decremented
        before the transfer is attempted.

        Raises:
            AlreadyDisbursedError: owner already withdrew
            NotExpiredError: deadline has not passed
            LimitReachedError: target was met, refunds are closed
            NoContributionError: nothing pledged or already refunded
            TransferFailedError: transfer failed, ledger restored
        """
        failure: Optional[Exception] = None
        async with self._serialized():
            now = self._clock.now()
            self._reject_if_disbursed("refund")

            if not self._expired_at(now):
                logger.warning(f"Rejected refund for {contributor} on {self._address}: not expired")
                raise NotExpiredError(
                    f"Request {self._address} has not expired yet",
                    state=self._state_at(now),
                )

            if self.has_reached_limit():
                logger.warning(f"Rejected refund for {contributor} on {self._address}: target met")
                raise LimitReachedError(
                    f"Request {self._address} reached its target, refunds are closed",
                    state=self._state_at(now),
                )

            amount = self._patrons.get(contributor, 0)
            if amount <= 0:
                logger.warning(f"Rejected refund for {contributor} on {self._address}: no contribution")
                raise NoContributionError(
                    f"{contributor} has no contribution to refund on {self._address}",
                    contributor=contributor,
                )

            del self._patrons[contributor]
            self._raised_amount -= amount

            try:
                record = await self._value_transfer.transfer(
                    self._address,
                    contributor,
                    amount,
                    memo=f"refund:{self._address}",
                )
            except BaseException as e:
                self._patrons[contributor] = self._patrons.get(contributor, 0) + amount
                self._raised_amount += amount
                if not isinstance(e, Exception):
                    raise
                failure = e
            else:
                raised_amount = self._raised_amount

        if failure is not None:
            await self._transfer_failed(contributor, amount, TransferKind.REFUND, failure)
            raise TransferFailedError(
                f"Refund of {amount} to {contributor} failed: {failure}", cause=failure
            ) from failure

        record = record.model_copy(update={"kind": TransferKind.REFUND})
        logger.info(f"Refunded {amount} to {contributor} from {self._address}")
        await self._events.publish_refund_issued(
            request_address=self._address,
            contributor=contributor,
            amount=amount,
            raised_amount=raised_amount,
            transfer_id=record.transfer_id,
        )
        return record

    # ====================
    # Withdrawal
    # ====================

    async def get_money(self, caller: str) -> TransferRecord:
        """
        Transfer the whole raised amount to the owner, once.

        funds_disbursed is set before the transfer is attempted.

        Raises:
            NotOwnerError: caller is not the owner
            AlreadyDisbursedError: already withdrawn
            LimitNotReachedError: target not met
            TransferFailedError: transfer failed, flag restored
        """
        failure: Optional[Exception] = None
        async with self._serialized():
            now = self._clock.now()

            if caller != self._owner:
                logger.warning(f"Rejected withdrawal by {caller} on {self._address}: not owner")
                raise NotOwnerError(
                    f"Only the owner can withdraw from {self._address}",
                    caller=caller,
                )

            self._reject_if_disbursed("get_money")

            if not self.has_reached_limit():
                logger.warning(f"Rejected withdrawal on {self._address}: target not met")
                raise LimitNotReachedError(
                    f"Request {self._address} has raised {self._raised_amount} "
                    f"of {self._required_amount}",
                    state=self._state_at(now),
                )

            self._funds_disbursed = True
            amount = self._raised_amount

            try:
                record = await self._value_transfer.transfer(
                    self._address,
                    self._owner,
                    amount,
                    memo=f"disbursement:{self._address}",
                )
            except BaseException as e:
                self._funds_disbursed = False
                if not isinstance(e, Exception):
                    raise
                failure = e

        if failure is not None:
            await self._transfer_failed(self._owner, amount, TransferKind.DISBURSEMENT, failure)
            raise TransferFailedError(
                f"Disbursement of {amount} to {self._owner} failed: {failure}", cause=failure
            ) from failure

        record = record.model_copy(update={"kind": TransferKind.DISBURSEMENT})
        logger.info(f"Disbursed {amount} to owner {self._owner} from {self._address}")
        await self._events.publish_funds_disbursed(
            request_address=self._address,
            owner=self._owner,
            amount=amount,
            transfer_id=record.transfer_id,
        )
        return record

    async def _transfer_failed(
        self,
        recipient: str,
        amount: int,
        kind: TransferKind,
        error: Exception,
    ) -> None:
        logger.error(f"{kind.value} transfer of {amount} to {recipient} from {self._address} failed: {error}")
        await self._events.publish_transfer_failed(
            request_address=self._address,
            recipient=recipient,
            amount=amount,
            operation=kind.value,
            error=str(error),
        )


__all__ = ["Request"]
