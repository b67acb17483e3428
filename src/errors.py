"""
Per-transaction failures.

None of these are fatal to a run: the account raises them, the transaction
processor catches them and hands them back as part of a ProcessingOutcome.
"""

from decimal import Decimal


class TransactionError(Exception):
    """Base class for a transaction an account refused to apply."""

    def __init__(self, client_id: int, message: str):
        super().__init__(message)
        self.client_id = client_id


class WrongAccount(TransactionError):
    def __init__(self, client_id: int, transaction_id: int, owner_id: int):
        super().__init__(
            client_id,
            f"tx {transaction_id} belongs to client {owner_id} but reached the account of client {client_id}",
        )
        self.transaction_id = transaction_id
        self.owner_id = owner_id


class NoSufficientFunds(TransactionError):
    def __init__(self, client_id: int, available: Decimal, withdrawal: Decimal):
        super().__init__(
            client_id,
            f"no sufficient funds in client {client_id}: current available {available}, tried to withdraw {withdrawal}",
        )
        self.available = available
        self.withdrawal = withdrawal


class AccountLocked(TransactionError):
    def __init__(self, client_id: int):
        super().__init__(client_id, f"can't process transaction for client {client_id}, the account is locked")


class NotFoundTransaction(TransactionError):
    def __init__(self, client_id: int, transaction_id: int):
        super().__init__(client_id, f"can't find tx {transaction_id} in client {client_id} account")
        self.transaction_id = transaction_id


class InvalidTransaction(TransactionError):
    def __init__(self, transaction):
        super().__init__(transaction.client_id, f"invalid transaction {transaction!r}, please check the record")
        self.transaction = transaction
