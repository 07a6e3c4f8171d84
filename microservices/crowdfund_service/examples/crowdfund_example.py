"""
Crowdfund Engine Example

Walks through both outcomes of a crowdfunding request using the in-memory
ledger: a funded request paid out to its owner, and an expired one refunded
to its contributor.
"""

import asyncio
from datetime import datetime, timedelta, timezone

from core.config import get_settings
from core.logger import setup_service_logger
from microservices.crowdfund_service.factory import create_request_factory
from microservices.crowdfund_service.ledger import InMemoryValueLedger
from microservices.crowdfund_service.protocols import (
    AlreadyDisbursedError,
    FundingClosedError,
    NoContributionError,
)
from microservices.crowdfund_service.units import from_base_units, to_base_units


async def main():
    settings = get_settings()
    symbol = settings.currency_symbol
    decimals = settings.currency_decimals

    def fmt(amount: int) -> str:
        return f"{from_base_units(amount, decimals)} {symbol}"

    ledger = InMemoryValueLedger()
    requests = create_request_factory(settings, value_transfer=ledger)

    print("=" * 70)
    print("Crowdfund Engine Examples")
    print("=" * 70)

    # Example 1: Funded request
    print("\n1. Funding a request and withdrawing")
    print("-" * 70)
    request = await requests.create_request(
        owner="alice",
        title="Community garden",
        description="Seeds, soil and tools",
        required_amount=to_base_units("1", decimals),
        expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
    )
    print(f"✓ Created {request.address}, target {fmt(request.required_amount)}")

    await request.donate("bob", to_base_units("0.5", decimals))
    await request.donate("carol", to_base_units("1.5", decimals))
    print(f"✓ Raised {fmt(request.raised_amount)}, state: {request.state().value}")

    try:
        await request.donate("dave", to_base_units("0.1", decimals))
    except FundingClosedError as e:
        print(f"✓ Late pledge rejected: {e}")

    record = await request.get_money("alice")
    print(f"✓ Owner received {fmt(record.amount)} (transfer {record.transfer_id})")

    try:
        await request.get_money("alice")
    except AlreadyDisbursedError as e:
        print(f"✓ Second withdrawal rejected: {e}")

    # Example 2: Expired request
    print("\n2. Refunding an expired request")
    print("-" * 70)
    short = await requests.create_request(
        owner="erin",
        title="Weekend workshop",
        description="",
        required_amount=to_base_units("10", decimals),
        expires_at=datetime.now(timezone.utc) + timedelta(seconds=2),
    )
    await short.donate("frank", to_base_units("0.5", decimals))
    print(f"✓ Pledged {fmt(short.raised_amount)} to {short.address}, waiting for the deadline...")
    await asyncio.sleep(3)
    print(f"✓ State: {short.state().value}")

    record = await short.refund("frank")
    print(f"✓ Refunded {fmt(record.amount)} to frank, ledger balance {fmt(ledger.balance_of('frank'))}")

    try:
        await short.refund("frank")
    except NoContributionError as e:
        print(f"✓ Second refund rejected: {e}")

    # Example 3: Registry
    print("\n3. Listing requests")
    print("-" * 70)
    for handle in await requests.get_requests():
        summary = handle.summary()
        print(f"  • {summary.address}: {summary.title!r} {summary.state.value} "
              f"{fmt(summary.raised_amount)}/{fmt(summary.required_amount)}")

    print("\n" + "=" * 70)
    print("All examples completed successfully!")
    print("=" * 70)


if __name__ == "__main__":
    settings = get_settings()
    setup_service_logger("microservices.crowdfund_service", level="INFO", config=settings.logging)
    asyncio.run(main())
