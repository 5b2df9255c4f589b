"""
Aggregate read endpoints: balances, leaderboard, totals.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from core.dependencies import get_store
from ledger.store import LedgerStore

from . import service
from .schemas import LeaderboardRange

router = APIRouter()


@router.get("/balances")
async def get_balances(store: LedgerStore = Depends(get_store)) -> dict:
    return {"ok": True, "data": await service.balances(store)}


@router.get("/leaderboard")
async def get_leaderboard(
    range_: LeaderboardRange = Query(LeaderboardRange.ALL, alias="range"),
    store: LedgerStore = Depends(get_store),
) -> dict:
    return {"ok": True, "data": await service.leaderboard(store, range_)}


@router.get("/stats")
async def get_stats(store: LedgerStore = Depends(get_store)) -> dict:
    return {"ok": True, "data": await service.stats(store)}
