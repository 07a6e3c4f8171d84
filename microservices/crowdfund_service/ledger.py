"""
In-Memory Value Ledger

Simulated value-transfer substrate implementing ValueTransferProtocol.
Tracks per-identity balances and the history of settled transfers.
"""

import logging
from typing import Dict, List, Optional

from .models import TransferRecord

logger = logging.getLogger(__name__)


class InMemoryValueLedger:
    """Balances and transfer history kept in process memory"""

    def __init__(self, initial_balances: Optional[Dict[str, int]] = None):
        self.balances: Dict[str, int] = dict(initial_balances or {})
        self.history: List[TransferRecord] = []

    def balance_of(self, identity: str) -> int:
        return self.balances.get(identity, 0)

    def credit(self, identity: str, amount: int) -> int:
        """Add funds to an identity, returns the new balance"""
        if amount < 0:
            raise ValueError("amount must be >= 0")
        self.balances[identity] = self.balance_of(identity) + amount
        return self.balances[identity]

    async def transfer(
        self,
        source: str,
        recipient: str,
        amount: int,
        *,
        memo: Optional[str] = None,
    ) -> TransferRecord:
        if amount < 0:
            raise ValueError("amount must be >= 0")

        self.balances[recipient] = self.balance_of(recipient) + amount
        record = TransferRecord(
            source=source,
            recipient=recipient,
            amount=amount,
            memo=memo,
        )
        self.history.append(record)
        logger.debug(f"Settled {amount} from {source} to {recipient}")
        return record

    def transfers_to(self, recipient: str) -> List[TransferRecord]:
        return [r for r in self.history if r.recipient == recipient]


__all__ = ["InMemoryValueLedger"]
