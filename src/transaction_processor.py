import logging

from account_registry import AccountRegistry
from errors import TransactionError
from models import Transaction, ProcessingOutcome

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Routes transactions to their client account.
    Failures never propagate: they are logged and returned in the ProcessingOutcome.
    """

    def __init__(self, registry: AccountRegistry):
        self._registry = registry

    def process_transaction(self, transaction: Transaction) -> ProcessingOutcome:
        account = self._registry.get_or_create_account(transaction.client_id)

        try:
            account.process(transaction, self._registry.ledger)
        except TransactionError as e:
            logger.warning(f"Rejected {transaction}: {e}")
            return ProcessingOutcome(transaction, error=e)

        return ProcessingOutcome(transaction)
