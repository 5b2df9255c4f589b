"""
Query parameter types for aggregate read endpoints.
"""

from __future__ import annotations

from enum import Enum


class LeaderboardRange(str, Enum):
    ALL = "all"
    DAILY = "daily"
