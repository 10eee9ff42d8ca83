"""Load-modify-save orchestration behind the HTTP handlers."""
from __future__ import annotations

import logging
import threading
from decimal import Decimal

from ledger_api.models.account import Account
from ledger_api.models.transaction import Transaction
from ledger_api.services import ledger
from ledger_api.services.record_store import RecordStore, decode_records
from ledger_api.services.transaction_log import TransactionLog

logger = logging.getLogger(__name__)


class BankService:
    def __init__(
        self,
        store: RecordStore,
        accounts_collection: str = "accounts",
        transactions_collection: str = "transactions",
    ):
        self.store = store
        self.accounts_collection = accounts_collection
        self.transactions = TransactionLog(store, transactions_collection)
        # Serializes load-modify-save sequences so concurrent requests in this
        # process cannot overwrite each other's updates.
        self._lock = threading.RLock()

    def initialize(self) -> None:
        self.store.initialize([self.accounts_collection, self.transactions.collection])

    def _load_accounts(self) -> list[Account]:
        return decode_records(Account, self.store.load(self.accounts_collection), self.accounts_collection)

    def _save_accounts(self, accounts: list[Account]) -> None:
        self.store.save(self.accounts_collection, [a.to_record() for a in accounts])

    def _commit(self, accounts: list[Account], transaction: Transaction | None) -> None:
        # Two physical writes: accounts first, then the transaction log.
        self._save_accounts(accounts)
        if transaction is not None:
            self.transactions.append(transaction)

    def create_account(self, name, initial_deposit=0) -> Account:
        with self._lock:
            accounts = self._load_accounts()
            account, transaction = ledger.create_account(accounts, name, initial_deposit)
            self._commit(accounts, transaction)
        return account

    def deposit(self, account_id: str, amount) -> Decimal:
        with self._lock:
            accounts = self._load_accounts()
            balance, transaction = ledger.deposit(accounts, account_id, amount)
            self._commit(accounts, transaction)
        return balance

    def withdraw(self, account_id: str, amount) -> Decimal:
        with self._lock:
            accounts = self._load_accounts()
            balance, transaction = ledger.withdraw(accounts, account_id, amount)
            self._commit(accounts, transaction)
        return balance

    def get_balance(self, account_id: str) -> tuple[str, Decimal]:
        return ledger.get_balance(self._load_accounts(), account_id)

    def list_accounts(self) -> list[Account]:
        return ledger.list_accounts(self._load_accounts())

    def list_transactions(self, account_id: str) -> list[Transaction]:
        return self.transactions.list_for_account(account_id)
