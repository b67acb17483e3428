from typing import Dict

from account import ClientAccount
from ledger import TransactionLedger


class AccountRegistry:
    """
    Client accounts keyed by client id, created on first use.
    Owns the transaction ledger shared by all accounts; it is handed to an
    account explicitly on every call instead of being stored on the account.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}
        self.ledger = TransactionLedger()

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create new one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id)
        return self._accounts[client_id]

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)

    def __len__(self) -> int:
        return len(self._accounts)
