from decimal import Decimal, localcontext
from typing import Dict

from errors import AccountLocked, InvalidTransaction, NoSufficientFunds, NotFoundTransaction, WrongAccount
from ledger import TransactionLedger
from models import Transaction, TransactionType, AMOUNT_CONTEXT


class ClientAccount:
    """
    Balance of one client and the transactions it currently has under dispute.

    Every handler checks everything it needs before touching a balance, so a
    TransactionError always leaves the account (and the ledger) as it was.
    """

    def __init__(self, client_id: int):
        self.client_id = client_id
        self.available = Decimal("0")
        self.held = Decimal("0")
        self.locked = False
        # tx id -> amount moved into held by the dispute
        self.disputed: Dict[int, Decimal] = {}

    @property
    def total(self) -> Decimal:
        return AMOUNT_CONTEXT.add(self.available, self.held)

    def __repr__(self) -> str:
        return (
            f"ClientAccount(client={self.client_id}, available={self.available}, "
            f"held={self.held}, total={self.total}, locked={self.locked})"
        )

    def credit(self, amount: Decimal) -> None:
        self.available += amount

    def debit(self, amount: Decimal) -> None:
        self.available -= amount

    def hold(self, amount: Decimal) -> None:
        self.available -= amount
        self.held += amount

    def release_hold(self, amount: Decimal) -> None:
        self.held -= amount
        self.available += amount

    def remove_held(self, amount: Decimal) -> None:
        self.held -= amount

    def process(self, transaction: Transaction, ledger: TransactionLedger) -> None:
        """
        Apply a single transaction.

        Raises:
            AccountLocked: the account was locked by an earlier chargeback
            WrongAccount: the transaction belongs to another client
            InvalidTransaction: deposit/withdrawal without a usable amount
            NoSufficientFunds: withdrawal larger than the available funds
            NotFoundTransaction: dispute/resolve/chargeback on an unknown tx
        """
        self._validate(transaction)

        with localcontext(AMOUNT_CONTEXT):
            match transaction.transaction_type:
                case TransactionType.DEPOSIT:
                    self._handle_deposit(transaction, ledger)
                case TransactionType.WITHDRAWAL:
                    self._handle_withdrawal(transaction, ledger)
                case TransactionType.DISPUTE:
                    self._handle_dispute(transaction, ledger)
                case TransactionType.RESOLVE:
                    self._handle_resolve(transaction, ledger)
                case TransactionType.CHARGEBACK:
                    self._handle_chargeback(transaction)

    def _validate(self, transaction: Transaction) -> None:
        if self.locked:
            raise AccountLocked(self.client_id)

        if transaction.client_id != self.client_id:
            raise WrongAccount(self.client_id, transaction.transaction_id, transaction.client_id)

        if transaction.transaction_type.carries_amount:
            if transaction.amount is None or transaction.amount < 0:
                raise InvalidTransaction(transaction)

    def _handle_deposit(self, transaction: Transaction, ledger: TransactionLedger) -> None:
        self.credit(transaction.amount)
        ledger.record(transaction)

    def _handle_withdrawal(self, transaction: Transaction, ledger: TransactionLedger) -> None:
        if self.available < transaction.amount or self.total < transaction.amount:
            raise NoSufficientFunds(self.client_id, self.available, transaction.amount)

        self.debit(transaction.amount)
        ledger.record(transaction)

    def _handle_dispute(self, transaction: Transaction, ledger: TransactionLedger) -> None:
        entry = ledger.take(transaction.transaction_id)

        if entry is None:
            raise NotFoundTransaction(self.client_id, transaction.transaction_id)

        if entry.client_id != self.client_id:
            ledger.restore(transaction.transaction_id, entry.client_id, entry.amount)
            raise WrongAccount(self.client_id, transaction.transaction_id, entry.client_id)

        # A disputed withdrawal has a negative amount: funds go back to available.
        self.disputed[transaction.transaction_id] = entry.amount
        self.hold(entry.amount)

    def _handle_resolve(self, transaction: Transaction, ledger: TransactionLedger) -> None:
        amount = self.disputed.pop(transaction.transaction_id, None)

        if amount is None:
            raise NotFoundTransaction(self.client_id, transaction.transaction_id)

        self.release_hold(amount)
        ledger.restore(transaction.transaction_id, self.client_id, amount)

    def _handle_chargeback(self, transaction: Transaction) -> None:
        amount = self.disputed.pop(transaction.transaction_id, None)

        if amount is None:
            raise NotFoundTransaction(self.client_id, transaction.transaction_id)

        # Never restored to the ledger, so the tx can't be disputed again.
        self.remove_held(amount)
        self.locked = True
