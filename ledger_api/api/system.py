from fastapi import APIRouter, Query

from ledger_api.core.logging_buffer import logging_buffer

router = APIRouter(tags=["system"])


@router.get("/logs")
async def get_logs(
    log_type: str | None = Query(default=None),
    account_id: str | None = Query(default=None),
    operation: str | None = Query(default=None),
    limit: int = Query(default=200, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
):
    return logging_buffer.get_logs(
        log_type=log_type,
        account_id=account_id,
        operation=operation,
        limit=limit,
        offset=offset,
    )
