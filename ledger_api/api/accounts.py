import asyncio

from fastapi import APIRouter, Depends

from ledger_api.api.deps import get_bank_service
from ledger_api.core.logging_buffer import logging_buffer
from ledger_api.models.account import Account
from ledger_api.models.transaction import Transaction
from ledger_api.schemas.account import (
    AccountCreateRequest,
    AccountCreateResponse,
    AmountRequest,
    BalanceChangeResponse,
    BalanceResponse,
    ErrorResponse,
)
from ledger_api.services.bank import BankService
from ledger_api.services.ledger import parse_amount

router = APIRouter(
    prefix="/accounts",
    tags=["accounts"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)

# BankService does blocking file I/O; every call runs in a worker thread.


@router.post("", response_model=AccountCreateResponse)
async def create_account(
    req: AccountCreateRequest | None = None,
    bank: BankService = Depends(get_bank_service),
):
    req = req or AccountCreateRequest()
    account = await asyncio.to_thread(bank.create_account, req.name, req.initial_deposit)
    logging_buffer.record_ledger_event("create", account.id, account.balance, f"Account created for {account.name}")
    return AccountCreateResponse(message="Account created successfully", user=account)


@router.post("/{account_id}/deposit", response_model=BalanceChangeResponse)
async def deposit(
    account_id: str,
    req: AmountRequest | None = None,
    bank: BankService = Depends(get_bank_service),
):
    req = req or AmountRequest()
    balance = await asyncio.to_thread(bank.deposit, account_id, req.amount)
    logging_buffer.record_ledger_event("deposit", account_id, parse_amount(req.amount))
    return BalanceChangeResponse(message="Deposit successful", new_balance=balance)


@router.post("/{account_id}/withdraw", response_model=BalanceChangeResponse)
async def withdraw(
    account_id: str,
    req: AmountRequest | None = None,
    bank: BankService = Depends(get_bank_service),
):
    req = req or AmountRequest()
    balance = await asyncio.to_thread(bank.withdraw, account_id, req.amount)
    logging_buffer.record_ledger_event("withdrawal", account_id, parse_amount(req.amount))
    return BalanceChangeResponse(message="Withdrawal successful", new_balance=balance)


@router.get("/{account_id}/balance", response_model=BalanceResponse)
async def get_balance(account_id: str, bank: BankService = Depends(get_bank_service)):
    name, balance = await asyncio.to_thread(bank.get_balance, account_id)
    return BalanceResponse(name=name, balance=balance)


@router.get("", response_model=list[Account])
async def list_accounts(bank: BankService = Depends(get_bank_service)):
    return await asyncio.to_thread(bank.list_accounts)


@router.get("/{account_id}/transactions", response_model=list[Transaction])
async def list_transactions(account_id: str, bank: BankService = Depends(get_bank_service)):
    return await asyncio.to_thread(bank.list_transactions, account_id)
