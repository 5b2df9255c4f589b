"""
Purchase records and input normalization.

Normalization happens here, at the store boundary, so every aggregation works
on already-normalized addresses.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from core.errors import ValidationError


class Network(str, Enum):
    ETH = "eth"
    BSC = "bsc"
    OTHER = "other"


DEFAULT_NETWORK = Network.ETH

# Per-purchase ceiling for tokens and usd. Keeps ledger-wide sums finite.
MAX_AMOUNT = 1e15


@dataclass(frozen=True)
class PurchaseDraft:
    """
    Validated purchase input, before the store assigns id and timestamp.
    """

    address: str
    tokens: float
    usd_amount: float
    network: Network = DEFAULT_NETWORK


@dataclass(frozen=True)
class PurchaseRecord:
    """
    One immutable ledger entry. Created only by `LedgerStore.append`.
    """

    id: int
    address: str
    tokens: float
    usd_amount: float
    network: Network
    recorded_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "address": self.address,
            "tokens": self.tokens,
            "usd": self.usd_amount,
            "network": self.network.value,
            "recorded_at": self.recorded_at.isoformat(),
        }


def normalize_address(address: str) -> str:
    return (address or "").strip().lower()


def _amount(name: str, value: Any) -> float:
    # bool is an int subclass; a JSON true is not a number here.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number.")
    try:
        amount = float(value)
    except OverflowError as exc:
        raise ValidationError(f"{name} must be a finite number.") from exc
    if not math.isfinite(amount):
        raise ValidationError(f"{name} must be a finite number.")
    if amount < 0:
        raise ValidationError(f"{name} must be >= 0.")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"{name} must be <= {MAX_AMOUNT:.0e}.")
    return amount


def _network(value: Any) -> Network:
    if value is None or value == "":
        return DEFAULT_NETWORK
    if isinstance(value, Network):
        return value
    try:
        return Network(str(value).strip().lower())
    except ValueError as exc:
        allowed = [n.value for n in Network]
        raise ValidationError(f"network must be one of {allowed}.") from exc


def build_draft(*, address: Any, tokens: Any, usd: Any, network: Any = None) -> PurchaseDraft:
    """
    Check purchase input against the record invariants and normalize it.
    """
    if not isinstance(address, str) or not normalize_address(address):
        raise ValidationError("address is required.")
    return PurchaseDraft(
        address=normalize_address(address),
        tokens=_amount("tokens", tokens),
        usd_amount=_amount("usd", usd),
        network=_network(network),
    )
