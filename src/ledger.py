from decimal import Decimal
from typing import Dict, NamedTuple, Optional

from models import Transaction, TransactionType


class LedgerEntry(NamedTuple):
    client_id: int
    amount: Decimal


class TransactionLedger:
    """
    Deposits and withdrawals that can still be disputed.
    Withdrawals are stored with a negative amount. An entry leaves the ledger
    while it is under dispute and only comes back if the dispute is resolved.
    """

    def __init__(self):
        self._entries: Dict[int, LedgerEntry] = {}

    def record(self, transaction: Transaction) -> None:
        """Store a deposit or withdrawal. Other kinds are ignored; a reused id overwrites."""
        if transaction.transaction_type == TransactionType.DEPOSIT:
            amount = transaction.amount
        elif transaction.transaction_type == TransactionType.WITHDRAWAL:
            amount = -transaction.amount
        else:
            return
        self._entries[transaction.transaction_id] = LedgerEntry(transaction.client_id, amount)

    def take(self, transaction_id: int) -> Optional[LedgerEntry]:
        """Remove and return the entry, or None if it is not disputable."""
        return self._entries.pop(transaction_id, None)

    def restore(self, transaction_id: int, client_id: int, amount: Decimal) -> None:
        """Put a previously taken entry back."""
        self._entries[transaction_id] = LedgerEntry(client_id, amount)

    def __contains__(self, transaction_id: int) -> bool:
        return transaction_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
