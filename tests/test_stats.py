"""
Tests for derived ledger figures.

All functions are pure, so these tests build transactions in memory.
"""

from datetime import date

import pytest

from voice_ledger.models.finance import (
    ExpenseLevel,
    Transaction,
    TransactionType,
    Wallet,
)
from voice_ledger.queries import (
    category_ranking,
    daily_breakdown,
    daily_stats,
    monthly_stats,
    total_balance,
    wallet_balance,
)


def make_transaction(amount, transaction_type=TransactionType.EXPENSE,
                     category_id="food", day=date(2024, 3, 15), wallet_id="w1"):
    return Transaction(
        wallet_id=wallet_id,
        type=transaction_type,
        amount=amount,
        category_id=category_id,
        date=day,
    )


@pytest.fixture
def wallets():
    return [
        Wallet(id="w1", name="Ví chính", balance=1_000_000),
        Wallet(id="w2", name="Ngân hàng", balance=0),
    ]


class TestBalances:
    """Live balance = baseline + income - expense."""

    def test_wallet_balance(self, wallets):
        transactions = [
            make_transaction(200_000, TransactionType.INCOME, "salary"),
            make_transaction(50_000),
            make_transaction(30_000, wallet_id="w2"),
        ]
        assert wallet_balance(wallets[0], transactions) == 1_150_000
        assert wallet_balance(wallets[1], transactions) == -30_000

    def test_no_transactions_is_baseline(self, wallets):
        assert wallet_balance(wallets[0], []) == 1_000_000

    def test_unknown_wallet_is_zero(self):
        assert wallet_balance(None, [make_transaction(10_000)]) == 0

    def test_total_is_sum_of_wallets(self, wallets):
        transactions = [
            make_transaction(200_000, TransactionType.INCOME, "salary"),
            make_transaction(30_000, wallet_id="w2"),
        ]
        expected = sum(wallet_balance(w, transactions) for w in wallets)
        assert total_balance(wallets, transactions) == expected == 1_170_000

    def test_orphaned_transactions_do_not_count(self, wallets):
        transactions = [make_transaction(99_000, wallet_id="deleted")]
        assert total_balance(wallets, transactions) == 1_000_000


class TestMonthlyStats:
    """Month totals by calendar year and month."""

    def test_totals_and_balance(self):
        transactions = [
            make_transaction(15_000_000, TransactionType.INCOME, "salary"),
            make_transaction(30_000),
            make_transaction(100_000, category_id="transport"),
        ]
        stats = monthly_stats(transactions, 2024, 3)
        assert stats.income == 15_000_000
        assert stats.expense == 130_000
        assert stats.balance == 14_870_000

    def test_month_boundaries(self):
        """Last day of the month is in; first day of the next is out."""
        transactions = [
            make_transaction(1_000, day=date(2024, 1, 31)),
            make_transaction(2_000, day=date(2024, 2, 1)),
            make_transaction(4_000, day=date(2024, 2, 29)),
            make_transaction(8_000, day=date(2024, 3, 1)),
        ]
        assert monthly_stats(transactions, 2024, 2).expense == 6_000

    def test_thirty_first_counts(self):
        transactions = [make_transaction(5_000, day=date(2024, 12, 31))]
        assert monthly_stats(transactions, 2024, 12).expense == 5_000

    def test_same_month_other_year_excluded(self):
        transactions = [make_transaction(5_000, day=date(2023, 3, 15))]
        assert monthly_stats(transactions, 2024, 3).expense == 0

    def test_empty_month(self):
        stats = monthly_stats([], 2024, 3)
        assert (stats.income, stats.expense, stats.balance) == (0, 0, 0)

    def test_balance_is_serialized(self):
        dumped = monthly_stats([make_transaction(1_000)], 2024, 3).model_dump()
        assert dumped == {"income": 0, "expense": 1_000, "balance": -1_000}


class TestDailyStats:
    """Per-day totals and the calendar colour band."""

    def test_single_day(self):
        day = date(2024, 3, 15)
        transactions = [
            make_transaction(40_000, day=day),
            make_transaction(500_000, TransactionType.INCOME, "bonus", day=day),
            make_transaction(70_000, day=date(2024, 3, 16)),
        ]
        stats = daily_stats(transactions, day)
        assert stats.date == day
        assert stats.expense == 40_000
        assert stats.income == 500_000
        assert stats.balance == 460_000

    @pytest.mark.parametrize("expense,level", [
        (0, ExpenseLevel.NONE),
        (99_999, ExpenseLevel.LOW),
        (100_000, ExpenseLevel.MEDIUM),
        (499_999, ExpenseLevel.MEDIUM),
        (500_000, ExpenseLevel.HIGH),
    ])
    def test_expense_level(self, expense, level):
        transactions = [make_transaction(expense)] if expense else []
        assert daily_stats(transactions, date(2024, 3, 15)).expense_level == level

    def test_breakdown_only_days_with_activity(self):
        transactions = [
            make_transaction(10_000, day=date(2024, 3, 20)),
            make_transaction(20_000, day=date(2024, 3, 2)),
            make_transaction(5_000, day=date(2024, 3, 20)),
            make_transaction(7_000, day=date(2024, 4, 1)),
        ]
        breakdown = daily_breakdown(transactions, 2024, 3)
        assert list(breakdown) == [date(2024, 3, 2), date(2024, 3, 20)]
        assert breakdown[date(2024, 3, 20)].expense == 15_000


class TestCategoryRanking:
    """Expense ranking for one month."""

    def test_sorted_with_percentages(self):
        transactions = [
            make_transaction(25_000, category_id="food"),
            make_transaction(75_000, category_id="transport"),
            make_transaction(1_000_000, TransactionType.INCOME, "salary"),
        ]
        ranking = category_ranking(transactions, 2024, 3)
        assert [r.category_id for r in ranking] == ["transport", "food"]
        assert ranking[0].percentage == 75.0
        assert ranking[1].percentage == 25.0
        assert ranking[0].name == "Di chuyển"

    def test_percentages_sum_to_hundred(self):
        transactions = [
            make_transaction(10_000, category_id="food"),
            make_transaction(10_000, category_id="bills"),
            make_transaction(10_000, category_id="health"),
        ]
        ranking = category_ranking(transactions, 2024, 3)
        assert sum(r.percentage for r in ranking) == pytest.approx(100.0)

    def test_ties_keep_first_seen_order(self):
        transactions = [
            make_transaction(10_000, category_id="bills"),
            make_transaction(10_000, category_id="food"),
        ]
        ranking = category_ranking(transactions, 2024, 3)
        assert [r.category_id for r in ranking] == ["bills", "food"]

    def test_unknown_category_uses_neutral_look(self):
        ranking = category_ranking([make_transaction(10_000, category_id="gone")], 2024, 3)
        assert ranking[0].name == "Khác"
        assert ranking[0].icon == "help-outline"
        assert ranking[0].color == "#6B7280"

    def test_month_without_expense(self):
        transactions = [make_transaction(10_000, TransactionType.INCOME, "salary")]
        assert category_ranking(transactions, 2024, 3) == []
