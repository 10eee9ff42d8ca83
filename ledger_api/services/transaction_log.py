from __future__ import annotations

import logging

from ledger_api.models.transaction import Transaction
from ledger_api.services.record_store import RecordStore, decode_records

logger = logging.getLogger(__name__)


class TransactionLog:
    """Append-only transaction history kept as one persisted collection."""

    def __init__(self, store: RecordStore, collection: str = "transactions"):
        self.store = store
        self.collection = collection

    def list_all(self) -> list[Transaction]:
        return decode_records(Transaction, self.store.load(self.collection), self.collection)

    def append(self, transaction: Transaction) -> None:
        records = self.store.load(self.collection)
        records.append(transaction.to_record())
        self.store.save(self.collection, records)
        logger.debug("Transaction logged: id=%s account=%s kind=%s", transaction.id, transaction.account_id, transaction.kind.value)

    def list_for_account(self, account_id: str) -> list[Transaction]:
        return [t for t in self.list_all() if t.account_id == account_id]
