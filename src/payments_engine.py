import csv
import logging
import sys
import time
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, Optional

from account import ClientAccount
from account_registry import AccountRegistry
from models import (
    Transaction,
    TransactionType,
    ProcessingStats,
    AMOUNT_CONTEXT,
    MAX_AMOUNT,
    MAX_AMOUNT_SCALE,
    MAX_CLIENT_ID,
    MAX_TRANSACTION_ID,
)
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)

AMOUNT_SCALE = Decimal(1).scaleb(-MAX_AMOUNT_SCALE)


class PaymentsEngine:
    """
    Single pass over a transaction CSV, one row at a time, in input order.
    Rejected transactions and malformed rows are logged and skipped; the run continues.
    """

    def __init__(self, registry: Optional[AccountRegistry] = None):
        self.registry = registry if registry is not None else AccountRegistry()
        self._processor = TransactionProcessor(self.registry)
        self.stats = ProcessingStats()

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process CSV file and return final account states."""
        with open(filepath, "r", newline="") as f:
            return self.process_stream(f)

    def process_stream(self, lines: Iterable[str]) -> Dict[int, ClientAccount]:
        """Process CSV text (header row first) and return final account states."""
        logger.info("Starting processing")
        started = time.perf_counter()

        reader = csv.DictReader(lines)
        for row in reader:
            transaction = self._parse_csv_row(row)
            if transaction is None:
                self.stats.record_skipped()
                continue

            outcome = self._processor.process_transaction(transaction)
            if outcome.succeeded:
                self.stats.record_success()
            else:
                self.stats.record_failure()

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("Processing complete")

        # Print final processing report to stderr
        print(
            f"Processed: {self.stats.processed}, "
            f"Failed: {self.stats.failed}, "
            f"Skipped: {self.stats.skipped}, "
            f"Elapsed: {elapsed_ms:.0f} ms",
            file=sys.stderr
        )

        return self.registry.get_all_accounts()

    def _parse_csv_row(self, row: Dict[str, str]) -> Optional[Transaction]:
        """Parse CSV row into Transaction. Missing trailing columns read as empty."""
        try:
            normalized = {k.strip(): (v or "").strip() for k, v in row.items() if k is not None}

            transaction_type = TransactionType(normalized["type"].lower())
            client_id = _parse_unsigned(normalized["client"], "client id", MAX_CLIENT_ID)
            transaction_id = _parse_unsigned(normalized["tx"], "tx id", MAX_TRANSACTION_ID)

            amount = None
            amount_str = normalized.get("amount", "")
            if transaction_type.carries_amount and amount_str:
                amount = _parse_amount(amount_str)

            return Transaction(
                transaction_type=transaction_type,
                client_id=client_id,
                transaction_id=transaction_id,
                amount=amount,
            )
        except (KeyError, ValueError, InvalidOperation) as e:
            logger.warning(f"Failed to parse row {row}: {e}")
            return None


def _parse_unsigned(value: str, name: str, maximum: int) -> int:
    """Plain ASCII digits only: no sign, no underscores."""
    if not (value.isascii() and value.isdigit()):
        raise ValueError(f"{name} {value!r} is not an unsigned integer")
    number = int(value)
    if number > maximum:
        raise ValueError(f"{name} {number} out of range")
    return number


def _parse_amount(value: str) -> Decimal:
    amount = Decimal(value)
    if not amount.is_finite():
        raise ValueError(f"amount {value} is not a finite number")
    if amount.copy_abs() > MAX_AMOUNT:
        raise ValueError(f"amount {value} exceeds {MAX_AMOUNT}")
    if amount != amount.quantize(AMOUNT_SCALE, context=AMOUNT_CONTEXT):
        raise ValueError(f"amount {value} has more than {MAX_AMOUNT_SCALE} decimal places")
    return amount
