import sys
import os
import logging
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from account_registry import AccountRegistry
from errors import AccountLocked, NoSufficientFunds, NotFoundTransaction, WrongAccount
from models import Transaction, TransactionType
from transaction_processor import TransactionProcessor


class TestTransactionProcessor:
    def setup_method(self):
        self.registry = AccountRegistry()
        self.processor = TransactionProcessor(self.registry)

    def test_deposit_creates_account(self):
        tx = Transaction(TransactionType.DEPOSIT, client_id=1, transaction_id=1, amount=Decimal("100"))
        outcome = self.processor.process_transaction(tx)

        assert outcome.succeeded
        assert outcome.transaction == tx
        assert len(self.registry) == 1
        account = self.registry.get_or_create_account(1)
        assert account.available == Decimal("100")
        assert account.total == Decimal("100")

    def test_insufficient_funds_returned_not_raised(self, caplog):
        deposit = Transaction(TransactionType.DEPOSIT, client_id=1, transaction_id=1, amount=Decimal("50"))
        self.processor.process_transaction(deposit)

        withdrawal = Transaction(TransactionType.WITHDRAWAL, client_id=1, transaction_id=2, amount=Decimal("100"))
        with caplog.at_level(logging.WARNING):
            outcome = self.processor.process_transaction(withdrawal)

        assert not outcome.succeeded
        assert isinstance(outcome.error, NoSufficientFunds)
        assert "no sufficient funds in client 1" in caplog.text
        assert self.registry.get_or_create_account(1).available == Decimal("50")

    def test_failed_first_transaction_still_creates_account(self):
        dispute = Transaction(TransactionType.DISPUTE, client_id=7, transaction_id=99)
        outcome = self.processor.process_transaction(dispute)

        assert isinstance(outcome.error, NotFoundTransaction)
        assert 7 in self.registry.get_all_accounts()
        assert self.registry.get_or_create_account(7).total == Decimal("0")

    def test_dispute_wrong_client(self):
        deposit = Transaction(TransactionType.DEPOSIT, client_id=1, transaction_id=1, amount=Decimal("100"))
        self.processor.process_transaction(deposit)

        dispute = Transaction(TransactionType.DISPUTE, client_id=2, transaction_id=1)
        outcome = self.processor.process_transaction(dispute)

        assert isinstance(outcome.error, WrongAccount)
        assert self.registry.get_or_create_account(1).held == Decimal("0")
        assert 1 in self.registry.ledger

    def test_ledger_shared_between_accounts(self):
        self.processor.process_transaction(Transaction(TransactionType.DEPOSIT, 1, 1, Decimal("1")))
        self.processor.process_transaction(Transaction(TransactionType.DEPOSIT, 2, 2, Decimal("2")))

        assert 1 in self.registry.ledger
        assert 2 in self.registry.ledger

        outcome = self.processor.process_transaction(Transaction(TransactionType.DISPUTE, 2, 2))
        assert outcome.succeeded
        assert 2 not in self.registry.ledger

    def test_locked_account_outcome(self):
        for tx in (
            Transaction(TransactionType.DEPOSIT, 1, 1, Decimal("100")),
            Transaction(TransactionType.DISPUTE, 1, 1),
            Transaction(TransactionType.CHARGEBACK, 1, 1),
        ):
            assert self.processor.process_transaction(tx).succeeded

        outcome = self.processor.process_transaction(Transaction(TransactionType.DEPOSIT, 1, 2, Decimal("50")))
        assert isinstance(outcome.error, AccountLocked)
        assert self.registry.get_or_create_account(1).locked is True
