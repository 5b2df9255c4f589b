"""
FastAPI dependencies shared by feature routers.
"""

from __future__ import annotations

from fastapi import Request

from ledger.store import LedgerStore


def get_store(request: Request) -> LedgerStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Ledger store is not initialized. It is attached during app startup.")
    return store
