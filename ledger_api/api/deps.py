from ledger_api.core.config import settings
from ledger_api.services.bank import BankService
from ledger_api.services.record_store import JsonFileRecordStore

_bank_service: BankService | None = None


def get_bank_service() -> BankService:
    global _bank_service
    if _bank_service is None:
        store = JsonFileRecordStore(settings.DATA_DIR, indent=settings.STORE_JSON_INDENT)
        _bank_service = BankService(
            store,
            accounts_collection=settings.ACCOUNTS_COLLECTION,
            transactions_collection=settings.TRANSACTIONS_COLLECTION,
        )
    return _bank_service
