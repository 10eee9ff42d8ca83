import enum
from datetime import datetime

from pydantic import AliasChoices, ConfigDict, Field

from ledger_api.models.base import Amount, Record, new_id, utcnow


class TransactionKind(str, enum.Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class Transaction(Record):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(default_factory=new_id)
    # Files written by the original server used "userId".
    account_id: str = Field(
        validation_alias=AliasChoices("accountId", "userId", "account_id"),
        serialization_alias="accountId",
    )
    kind: TransactionKind = Field(
        validation_alias=AliasChoices("type", "kind"),
        serialization_alias="type",
    )
    amount: Amount
    timestamp: datetime = Field(default_factory=utcnow)
