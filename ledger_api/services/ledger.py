"""Balance rules for accounts.

All functions operate on an in-memory list of accounts and leave persistence to
the caller. Mutating operations change at most one account in place and return
the transaction that records the change.
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ledger_api.core.exceptions import InsufficientFundsError, NotFoundError, ValidationError
from ledger_api.models.account import Account
from ledger_api.models.transaction import Transaction, TransactionKind

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")
# Amounts are persisted as JSON numbers (doubles). Capping balances at 15
# significant digits with two decimal places keeps every stored value exact.
MAX_AMOUNT = Decimal("1000000000000")
MAX_BALANCE = Decimal("9999999999999.99")


def _to_decimal(value) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        number = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    if not number.is_finite():
        return None
    return number


def parse_amount(value) -> Decimal:
    """Strict amount parsing for deposits and withdrawals."""
    number = _to_decimal(value)
    if number is None or number <= ZERO or number > MAX_AMOUNT:
        raise ValidationError("Valid amount is required")
    cents = number.quantize(CENT)
    if cents != number:
        raise ValidationError("Valid amount is required")
    return cents


def coerce_amount(value) -> Decimal:
    """Lenient parsing for the opening deposit: anything unusable becomes zero.

    Fractions of a cent are rounded half-up.
    """
    number = _to_decimal(value)
    if number is None or number < ZERO or number > MAX_AMOUNT:
        return ZERO
    return number.quantize(CENT, rounding=ROUND_HALF_UP)


def _check_balance_limit(balance: Decimal) -> None:
    if balance > MAX_BALANCE:
        raise ValidationError("Balance limit exceeded")


def find_account(accounts: list[Account], account_id: str) -> Account:
    for account in accounts:
        if account.id == account_id:
            return account
    raise NotFoundError("Account not found")


def create_account(
    accounts: list[Account],
    name,
    initial_deposit=0,
) -> tuple[Account, Transaction | None]:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Name is required")

    opening = coerce_amount(initial_deposit)
    existing_ids = {a.id for a in accounts}
    account = Account(name=name.strip(), balance=opening)
    while account.id in existing_ids:
        account = Account(name=account.name, balance=opening)
    accounts.append(account)

    transaction = None
    if opening > ZERO:
        transaction = Transaction(
            account_id=account.id,
            kind=TransactionKind.DEPOSIT,
            amount=opening,
            timestamp=account.created_at,
        )
    logger.info("Account created: id=%s opening_deposit=%s", account.id, opening)
    return account, transaction


def deposit(accounts: list[Account], account_id: str, amount) -> tuple[Decimal, Transaction]:
    value = parse_amount(amount)
    account = find_account(accounts, account_id)
    _check_balance_limit(account.balance + value)
    account.balance = account.balance + value
    logger.info("Deposit: account=%s amount=%s balance=%s", account.id, value, account.balance)
    return account.balance, Transaction(account_id=account.id, kind=TransactionKind.DEPOSIT, amount=value)


def withdraw(accounts: list[Account], account_id: str, amount) -> tuple[Decimal, Transaction]:
    value = parse_amount(amount)
    account = find_account(accounts, account_id)
    if value > account.balance:
        logger.info("Withdrawal rejected: account=%s amount=%s balance=%s", account.id, value, account.balance)
        raise InsufficientFundsError("Insufficient funds")
    account.balance = account.balance - value
    logger.info("Withdrawal: account=%s amount=%s balance=%s", account.id, value, account.balance)
    return account.balance, Transaction(account_id=account.id, kind=TransactionKind.WITHDRAWAL, amount=value)


def get_balance(accounts: list[Account], account_id: str) -> tuple[str, Decimal]:
    account = find_account(accounts, account_id)
    return account.name, account.balance


def list_accounts(accounts: list[Account]) -> list[Account]:
    return list(accounts)
