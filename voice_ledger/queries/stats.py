"""
Ledger Statistics

DESIGN DECISION: Every figure here is DERIVED. Nothing is cached or
stored; each call recomputes from the transactions it is handed.

All functions are pure and work on in-memory lists, so the store can
read once and aggregate as often as it likes.
"""

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from voice_ledger.categories import describe_category
from voice_ledger.models.finance import (
    CategoryStats,
    DailyStats,
    MonthlyStats,
    Transaction,
    TransactionType,
    Wallet,
)


def in_month(transaction: Transaction, year: int, month: int) -> bool:
    return transaction.date.year == year and transaction.date.month == month


def wallet_balance(
    wallet: Optional[Wallet],
    transactions: Iterable[Transaction],
) -> int:
    """
    Live balance: baseline + income - expense for this wallet.

    An unknown wallet (None) has no balance to report; its orphaned
    transactions are ignored and 0 is returned.
    """
    if wallet is None:
        return 0
    return wallet.balance + sum(
        t.signed_amount for t in transactions if t.wallet_id == wallet.id
    )


def total_balance(
    wallets: Iterable[Wallet],
    transactions: Iterable[Transaction],
) -> int:
    """Sum of live balances. Transactions of deleted wallets do not count."""
    transactions = list(transactions)
    return sum(wallet_balance(wallet, transactions) for wallet in wallets)


def _totals(transactions: Iterable[Transaction]) -> tuple[int, int]:
    income = expense = 0
    for t in transactions:
        if t.type == TransactionType.INCOME:
            income += t.amount
        else:
            expense += t.amount
    return income, expense


def monthly_stats(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
) -> MonthlyStats:
    income, expense = _totals(t for t in transactions if in_month(t, year, month))
    return MonthlyStats(income=income, expense=expense)


def daily_stats(transactions: Iterable[Transaction], day: date) -> DailyStats:
    income, expense = _totals(t for t in transactions if t.date == day)
    return DailyStats(date=day, income=income, expense=expense)


def daily_breakdown(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
) -> dict[date, DailyStats]:
    """Per-day totals for one month, only for days that have transactions."""
    buckets: dict[date, list[Transaction]] = defaultdict(list)
    for t in transactions:
        if in_month(t, year, month):
            buckets[t.date].append(t)

    result = {}
    for day in sorted(buckets):
        income, expense = _totals(buckets[day])
        result[day] = DailyStats(date=day, income=income, expense=expense)
    return result


def category_ranking(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
) -> list[CategoryStats]:
    """
    Expense totals per category for one month, largest first.

    Percentages are shares of the month's total expense (0-100).
    Unknown category ids still rank, under the neutral fallback look.
    """
    totals: dict[str, int] = defaultdict(int)
    for t in transactions:
        if t.type == TransactionType.EXPENSE and in_month(t, year, month):
            totals[t.category_id] += t.amount

    month_expense = sum(totals.values())

    ranking = []
    for category_id, total in totals.items():
        name, icon, color = describe_category(category_id)
        ranking.append(CategoryStats(
            category_id=category_id,
            name=name,
            icon=icon,
            color=color,
            total=total,
            percentage=(total / month_expense) * 100 if month_expense > 0 else 0.0,
        ))

    # Stable sort: ties keep first-seen order
    ranking.sort(key=lambda row: row.total, reverse=True)
    return ranking
