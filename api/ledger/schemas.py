"""
Ledger API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr


class BuyRequest(BaseModel):
    # Strict types: "10" is not a number here. Range and enum checks live in
    # `models.build_draft` so every store write goes through the same rules.
    address: StrictStr = Field(..., min_length=1, max_length=200)
    tokens: StrictInt | StrictFloat
    usd: StrictInt | StrictFloat
    network: StrictStr | None = None
