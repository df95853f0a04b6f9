"""Ledger statistics package."""

from voice_ledger.queries.stats import (
    category_ranking,
    daily_breakdown,
    daily_stats,
    in_month,
    monthly_stats,
    total_balance,
    wallet_balance,
)

__all__ = [
    "category_ranking",
    "daily_breakdown",
    "daily_stats",
    "in_month",
    "monthly_stats",
    "total_balance",
    "wallet_balance",
]
