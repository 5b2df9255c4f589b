"""
Ledger API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from core.dependencies import get_store
from stats import aggregation

from . import schemas, service
from .store import LedgerStore

router = APIRouter()


@router.post("/buy", status_code=status.HTTP_201_CREATED)
async def buy(
    request: schemas.BuyRequest,
    store: LedgerStore = Depends(get_store),
) -> dict:
    await service.record_purchase(store, request)
    return {"ok": True}


@router.get("/transactions")
async def list_transactions(
    limit: int = Query(aggregation.DEFAULT_RECENT_LIMIT, ge=1),
    store: LedgerStore = Depends(get_store),
) -> dict:
    records = await service.recent_transactions(store, limit)
    return {"ok": True, "data": [r.to_dict() for r in records]}
