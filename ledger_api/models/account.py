from datetime import datetime
from decimal import Decimal

from pydantic import AliasChoices, Field

from ledger_api.models.base import Amount, Record, new_id, utcnow


class Account(Record):
    id: str = Field(default_factory=new_id)
    name: str
    balance: Amount = Decimal("0")
    created_at: datetime = Field(
        default_factory=utcnow,
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
    )
