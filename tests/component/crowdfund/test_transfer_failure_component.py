"""
Transfer Failure Component Tests

When the value-transfer primitive raises, the operation fails as a whole:
the ledger change made before the transfer is rolled back and the caller
gets TransferFailedError.

Usage:
    pytest tests/component/crowdfund/test_transfer_failure_component.py -v
"""

import asyncio

import pytest

from microservices.crowdfund_service.events import CrowdfundEventType
from microservices.crowdfund_service.protocols import TransferFailedError

from tests.contracts.crowdfund.data_contract import RequestState, ether


@pytest.mark.component
@pytest.mark.asyncio
class TestRefundTransferFailure:
    """Failed refund transfers leave the contribution in place"""

    async def test_failed_refund_restores_contribution(self, funding_request, contributor, mock_clock, mock_ledger):
        await funding_request.donate(contributor, ether("0.3"))
        mock_clock.advance(hours=2)
        error = RuntimeError("recipient rejected value")
        mock_ledger.fail_next(error)

        with pytest.raises(TransferFailedError) as exc_info:
            await funding_request.refund(contributor)

        assert exc_info.value.cause is error
        assert exc_info.value.__cause__ is error
        assert funding_request.patron_balance(contributor) == ether("0.3")
        assert funding_request.raised_amount == ether("0.3")
        assert mock_ledger.history == []

    async def test_refund_retry_after_failure(self, funding_request, contributor, mock_clock, mock_ledger):
        await funding_request.donate(contributor, ether("0.3"))
        mock_clock.advance(hours=2)
        mock_ledger.fail_next(RuntimeError("temporarily unavailable"))

        with pytest.raises(TransferFailedError):
            await funding_request.refund(contributor)
        record = await funding_request.refund(contributor)

        assert record.amount == ether("0.3")
        assert funding_request.raised_amount == 0
        assert mock_ledger.total_paid_out() == ether("0.3")

    async def test_failed_refund_publishes_failure_event(
        self, funding_request, contributor, mock_clock, mock_ledger, mock_event_bus
    ):
        await funding_request.donate(contributor, ether("0.3"))
        mock_clock.advance(hours=2)
        mock_ledger.fail_next(RuntimeError("recipient rejected value"))

        with pytest.raises(TransferFailedError):
            await funding_request.refund(contributor)

        mock_event_bus.assert_event_published(
            CrowdfundEventType.TRANSFER_FAILED.value,
            {
                "request_address": funding_request.address,
                "recipient": contributor,
                "amount": ether("0.3"),
                "operation": "refund",
            },
        )
        mock_event_bus.assert_no_events_published(CrowdfundEventType.REFUND_ISSUED.value)

    async def test_failure_event_published_after_lock_released(
        self, funding_request, contributor, mock_clock, mock_ledger, mock_event_bus, monkeypatch
    ):
        """A subscriber reacting to the failure event can retry the refund"""
        await funding_request.donate(contributor, ether("0.3"))
        mock_clock.advance(hours=2)
        mock_ledger.fail_next(RuntimeError("recipient rejected value"))
        retried = []
        publish = mock_event_bus.publish

        async def retry_on_failure(subject, data):
            await publish(subject, data)
            if subject == CrowdfundEventType.TRANSFER_FAILED.value:
                retried.append(await asyncio.wait_for(funding_request.refund(contributor), timeout=1))

        monkeypatch.setattr(mock_event_bus, "publish", retry_on_failure)

        with pytest.raises(TransferFailedError):
            await funding_request.refund(contributor)

        assert len(retried) == 1
        assert retried[0].amount == ether("0.3")
        assert funding_request.raised_amount == 0
        assert mock_ledger.total_paid_out() == ether("0.3")

    async def test_cancelled_refund_rolls_back(self, funding_request, contributor, mock_clock, mock_ledger):
        await funding_request.donate(contributor, ether("0.3"))
        mock_clock.advance(hours=2)
        mock_ledger.fail_next(asyncio.CancelledError())

        with pytest.raises(asyncio.CancelledError):
            await funding_request.refund(contributor)

        assert funding_request.patron_balance(contributor) == ether("0.3")
        assert funding_request.raised_amount == ether("0.3")


@pytest.mark.component
@pytest.mark.asyncio
class TestWithdrawalTransferFailure:
    """Failed disbursements leave the request funded"""

    async def test_failed_withdrawal_restores_flag(self, funding_request, owner, contributor, mock_ledger):
        await funding_request.donate(contributor, ether("1"))
        mock_ledger.fail_next(RuntimeError("owner account frozen"))

        with pytest.raises(TransferFailedError):
            await funding_request.get_money(owner)

        assert funding_request.funds_disbursed is False
        assert funding_request.state() == RequestState.FUNDED
        assert funding_request.raised_amount == ether("1")

    async def test_withdrawal_retry_after_failure(self, funding_request, owner, contributor, mock_ledger):
        await funding_request.donate(contributor, ether("1"))
        mock_ledger.fail_next(RuntimeError("owner account frozen"))

        with pytest.raises(TransferFailedError):
            await funding_request.get_money(owner)
        await funding_request.get_money(owner)

        assert funding_request.funds_disbursed is True
        assert mock_ledger.balance_of(owner) == ether("1")

    async def test_failed_withdrawal_publishes_failure_event(
        self, funding_request, owner, contributor, mock_ledger, mock_event_bus
    ):
        await funding_request.donate(contributor, ether("1"))
        mock_ledger.fail_next(RuntimeError("owner account frozen"))

        with pytest.raises(TransferFailedError):
            await funding_request.get_money(owner)

        payload = mock_event_bus.get_payloads(CrowdfundEventType.TRANSFER_FAILED.value)[0]
        assert payload["operation"] == "disbursement"
        assert payload["recipient"] == owner
        assert "owner account frozen" in payload["error"]

    async def test_failure_event_published_after_lock_released(
        self, funding_request, owner, contributor, mock_ledger, mock_event_bus, monkeypatch
    ):
        """A subscriber reacting to the failure event can retry the withdrawal"""
        await funding_request.donate(contributor, ether("1"))
        mock_ledger.fail_next(RuntimeError("owner account frozen"))
        retried = []
        publish = mock_event_bus.publish

        async def retry_on_failure(subject, data):
            await publish(subject, data)
            if subject == CrowdfundEventType.TRANSFER_FAILED.value:
                retried.append(await asyncio.wait_for(funding_request.get_money(owner), timeout=1))

        monkeypatch.setattr(mock_event_bus, "publish", retry_on_failure)

        with pytest.raises(TransferFailedError):
            await funding_request.get_money(owner)

        assert len(retried) == 1
        assert funding_request.funds_disbursed is True
        assert mock_ledger.balance_of(owner) == ether("1")

    async def test_cancelled_withdrawal_rolls_back(self, funding_request, owner, contributor, mock_ledger):
        await funding_request.donate(contributor, ether("1"))
        mock_ledger.fail_next(asyncio.CancelledError())

        with pytest.raises(asyncio.CancelledError):
            await funding_request.get_money(owner)

        assert funding_request.funds_disbursed is False
