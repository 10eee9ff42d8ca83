from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ledger_api.models.account import Account
from ledger_api.models.base import Amount


# Request fields stay untyped so that missing or non-numeric values reach the
# ledger's own validation and come back as {"error": ...} with status 400.
class AccountCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Any = None
    initial_deposit: Any = Field(default=0, alias="initialDeposit")


class AmountRequest(BaseModel):
    amount: Any = None


class AccountCreateResponse(BaseModel):
    message: str
    user: Account


class BalanceChangeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    new_balance: Amount = Field(alias="newBalance")


class BalanceResponse(BaseModel):
    name: str
    balance: Amount


class ErrorResponse(BaseModel):
    error: str
