from dataclasses import dataclass
from decimal import Context, Decimal, DivisionByZero, InvalidOperation, Overflow
from enum import Enum
from typing import Optional

from errors import TransactionError

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1

# Largest accepted amount and most fractional digits. With at most 2**32
# transactions, every balance fits in AMOUNT_CONTEXT without rounding.
MAX_AMOUNT = Decimal(10) ** 15
MAX_AMOUNT_SCALE = 20
AMOUNT_CONTEXT = Context(prec=64, traps=[InvalidOperation, Overflow, DivisionByZero])


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def carries_amount(self) -> bool:
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass(frozen=True)
class ProcessingOutcome:
    """Result of feeding one transaction to its account."""

    transaction: Transaction
    error: Optional[TransactionError] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class ProcessingStats:
    """Counters for tracking processing statistics."""

    def __init__(self):
        self.processed = 0
        self.failed = 0
        self.skipped = 0

    def record_success(self):
        self.processed += 1

    def record_failure(self):
        self.failed += 1

    def record_skipped(self):
        self.skipped += 1
