"""
Ledger business logic: recording purchases and listing recent ones.
"""

from __future__ import annotations

import logging

from stats import aggregation

from . import schemas
from .models import PurchaseRecord, build_draft
from .store import LedgerStore

logger = logging.getLogger(__name__)


async def record_purchase(store: LedgerStore, payload: schemas.BuyRequest) -> PurchaseRecord:
    draft = build_draft(
        address=payload.address,
        tokens=payload.tokens,
        usd=payload.usd,
        network=payload.network,
    )
    record = await store.append(draft)
    logger.info(
        "purchase_recorded id=%s address=%s tokens=%s usd=%s network=%s",
        record.id,
        record.address,
        record.tokens,
        record.usd_amount,
        record.network.value,
    )
    return record


async def recent_transactions(store: LedgerStore, limit: int | None = None) -> list[PurchaseRecord]:
    """
    Newest purchases first, never more than `aggregation.MAX_RECENT_LIMIT`.
    """
    capped = aggregation.clamp_recent_limit(limit)
    records = await store.query_recent(capped)
    return aggregation.list_recent(records, capped)
