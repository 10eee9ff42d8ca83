from fastapi import APIRouter

from ledger_api.api import accounts, system

api_router = APIRouter()
api_router.include_router(accounts.router)
api_router.include_router(system.router)
