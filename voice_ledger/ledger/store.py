"""
Ledger Store

Keeps wallets, transactions, goals and the monthly salary in a key-value
store, one JSON document per collection, and derives every figure from
them on demand.

DESIGN DECISION: Every mutation is read-all -> modify -> write-all.
Collections are small (one person's finances), so there is no partial
update, no cache and no locking. Two overlapping writes are not
serialized here; callers debounce.

The store trusts its callers. It does not check that wallet_id or
category_id exist, and it does not enforce the wallet cap. That is the
validation boundary's job (see voice_ledger.validation).
"""

import json
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from voice_ledger.audit import AuditLogger
from voice_ledger.models.finance import (
    CategoryStats,
    DailyStats,
    FinanceData,
    Goal,
    GoalDraft,
    MonthlyStats,
    Transaction,
    TransactionDraft,
    Wallet,
    WalletDraft,
)
from voice_ledger.queries import stats
from voice_ledger.services.storage import (
    CorruptRecordError,
    KeyValueStore,
    StorageError,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_WALLET_ID = "wallet_default"

# Fields the store assigns; updates may not overwrite them.
_SYSTEM_FIELDS = frozenset({"id", "created_at"})


def default_wallet() -> Wallet:
    """The wallet substituted on first run, when nothing is stored yet."""
    return Wallet(
        id=DEFAULT_WALLET_ID,
        name="Ví chính",
        balance=0,
        icon="💰",
        color="#10B981",
        is_default=True,
    )


class StorageKeys:
    """Namespaced keys of the persisted records."""

    def __init__(self, prefix: str = "@finance"):
        self.wallets = f"{prefix}_wallets"
        self.transactions = f"{prefix}_transactions"
        self.goals = f"{prefix}_goals"
        self.settings = f"{prefix}_settings"
        self.monthly_salary = f"{prefix}_monthly_salary"


class LedgerStore:
    """
    Persistent wallets, transactions and goals, plus their aggregates.

    All operations are coroutines; the only suspension points are the
    key-value store reads and writes.
    """

    def __init__(
        self,
        kv_store: KeyValueStore,
        audit_logger: Optional[AuditLogger] = None,
        key_prefix: str = "@finance",
    ):
        self._kv = kv_store
        self._audit_logger = audit_logger
        self.keys = StorageKeys(key_prefix)

    # =========================================================================
    # Document I/O
    # =========================================================================

    async def _read_list(self, key: str, model: type[ModelT]) -> Optional[list[ModelT]]:
        """Decode a stored collection; None if the key was never written."""
        raw = await self._kv.get_item(key)
        if raw is None:
            return None
        try:
            return TypeAdapter(list[model]).validate_json(raw)
        except ValidationError as e:
            raise CorruptRecordError(key, str(e)) from e

    async def _write(self, key: str, value: str) -> None:
        try:
            await self._kv.set_item(key, value)
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_storage_error(operation=f"write {key}", error_message=str(e))
            raise

    async def _write_list(self, key: str, items: list[BaseModel]) -> None:
        documents = [item.to_document() for item in items]
        await self._write(key, json.dumps(documents, ensure_ascii=False))

    @staticmethod
    def _merge(record: ModelT, updates: dict[str, Any]) -> ModelT:
        """Apply field updates and re-validate; system fields are kept."""
        allowed = {k: v for k, v in updates.items() if k not in _SYSTEM_FIELDS}
        return type(record).model_validate({**record.model_dump(), **allowed})

    # =========================================================================
    # Wallets
    # =========================================================================

    async def get_wallets(self) -> list[Wallet]:
        """
        All wallets.

        On first run (nothing stored) the default wallet is persisted and
        returned. An explicitly stored empty list stays empty.
        """
        wallets = await self._read_list(self.keys.wallets, Wallet)
        if wallets is None:
            wallets = [default_wallet()]
            await self.save_wallets(wallets)
        return wallets

    async def save_wallets(self, wallets: list[Wallet]) -> None:
        await self._write_list(self.keys.wallets, wallets)

    async def get_wallet(self, wallet_id: str) -> Optional[Wallet]:
        for wallet in await self.get_wallets():
            if wallet.id == wallet_id:
                return wallet
        return None

    async def add_wallet(self, draft: WalletDraft) -> Wallet:
        """Append a wallet. The wallet cap is NOT checked here."""
        wallets = await self.get_wallets()
        wallet = Wallet.from_draft(draft)
        wallets.append(wallet)
        await self.save_wallets(wallets)

        if self._audit_logger:
            self._audit_logger.log_wallet_added(wallet_id=wallet.id, name=wallet.name)
        return wallet

    async def update_wallet(self, wallet_id: str, **updates: Any) -> Optional[Wallet]:
        """Update fields of a wallet. No-op (returns None) if it does not exist."""
        wallets = await self.get_wallets()
        for index, wallet in enumerate(wallets):
            if wallet.id == wallet_id:
                wallets[index] = self._merge(wallet, updates)
                await self.save_wallets(wallets)
                if self._audit_logger:
                    self._audit_logger.log_wallet_updated(
                        wallet_id=wallet_id,
                        changed_fields=sorted(set(updates) - _SYSTEM_FIELDS),
                    )
                return wallets[index]
        return None

    async def delete_wallet(self, wallet_id: str) -> bool:
        """
        Remove the wallet record only.

        Transactions pointing at it are deliberately left in place; they
        keep counting in monthly/daily statistics and simply stop
        contributing to any wallet balance.
        """
        wallets = await self.get_wallets()
        remaining = [w for w in wallets if w.id != wallet_id]
        if len(remaining) == len(wallets):
            return False

        await self.save_wallets(remaining)

        if self._audit_logger:
            orphaned = len(await self.get_transactions_by_wallet(wallet_id))
            self._audit_logger.log_wallet_deleted(
                wallet_id=wallet_id,
                orphaned_transactions=orphaned,
            )
        return True

    # =========================================================================
    # Transactions
    # =========================================================================

    async def get_transactions(self) -> list[Transaction]:
        """
        All transactions in stored order.

        New entries are prepended, but the order is not guaranteed;
        sort explicitly when newest-first matters.
        """
        return await self._read_list(self.keys.transactions, Transaction) or []

    async def save_transactions(self, transactions: list[Transaction]) -> None:
        await self._write_list(self.keys.transactions, transactions)

    async def add_transaction(self, draft: TransactionDraft) -> Transaction:
        """Record a transaction with a fresh id and created_at."""
        transactions = await self.get_transactions()
        transaction = Transaction.from_draft(draft)
        transactions.insert(0, transaction)
        await self.save_transactions(transactions)

        if self._audit_logger:
            self._audit_logger.log_transaction_added(
                transaction_id=transaction.id,
                wallet_id=transaction.wallet_id,
                transaction_type=transaction.type.value,
                amount=transaction.amount,
                created_by=transaction.created_by.value,
            )
        return transaction

    async def update_transaction(self, transaction_id: str, **updates: Any) -> Optional[Transaction]:
        """Edit a transaction. No-op (returns None) if it does not exist."""
        transactions = await self.get_transactions()
        for index, transaction in enumerate(transactions):
            if transaction.id == transaction_id:
                transactions[index] = self._merge(transaction, updates)
                await self.save_transactions(transactions)
                if self._audit_logger:
                    self._audit_logger.log_transaction_updated(
                        transaction_id=transaction_id,
                        changed_fields=sorted(set(updates) - _SYSTEM_FIELDS),
                    )
                return transactions[index]
        return None

    async def delete_transaction(self, transaction_id: str) -> bool:
        """Remove a transaction. Absent ids are a no-op, not an error."""
        transactions = await self.get_transactions()
        remaining = [t for t in transactions if t.id != transaction_id]
        if len(remaining) == len(transactions):
            return False

        await self.save_transactions(remaining)

        if self._audit_logger:
            self._audit_logger.log_transaction_deleted(transaction_id=transaction_id)
        return True

    async def get_transactions_by_wallet(self, wallet_id: str) -> list[Transaction]:
        return [t for t in await self.get_transactions() if t.wallet_id == wallet_id]

    async def get_transactions_by_date(self, day: date) -> list[Transaction]:
        return [t for t in await self.get_transactions() if t.date == day]

    async def get_transactions_by_date_range(self, start: date, end: date) -> list[Transaction]:
        """Transactions dated within [start, end], both ends inclusive."""
        return [t for t in await self.get_transactions() if start <= t.date <= end]

    # =========================================================================
    # Goals
    # =========================================================================

    async def get_goals(self) -> list[Goal]:
        return await self._read_list(self.keys.goals, Goal) or []

    async def save_goals(self, goals: list[Goal]) -> None:
        await self._write_list(self.keys.goals, goals)

    async def add_goal(self, draft: GoalDraft) -> Goal:
        goals = await self.get_goals()
        goal = Goal.from_draft(draft)
        goals.append(goal)
        await self.save_goals(goals)

        if self._audit_logger:
            self._audit_logger.log_goal_added(goal_id=goal.id, name=goal.name)
        return goal

    # =========================================================================
    # Monthly salary
    # =========================================================================

    async def get_monthly_salary(self) -> int:
        """The stored salary figure, 0 if never set."""
        raw = await self._kv.get_item(self.keys.monthly_salary)
        if raw is None:
            return 0
        try:
            return int(Decimal(raw.strip()))
        except (InvalidOperation, ValueError) as e:
            raise CorruptRecordError(self.keys.monthly_salary, str(e)) from e

    async def set_monthly_salary(self, salary: int) -> None:
        if salary < 0:
            raise ValueError("Monthly salary cannot be negative")
        await self._write(self.keys.monthly_salary, str(int(salary)))

        if self._audit_logger:
            self._audit_logger.log_salary_updated(salary=salary)

    # =========================================================================
    # Aggregates - always recomputed
    # =========================================================================

    async def calculate_wallet_balance(self, wallet_id: str) -> int:
        """Baseline + income - expense. 0 for a wallet that no longer exists."""
        wallet = await self.get_wallet(wallet_id)
        return stats.wallet_balance(wallet, await self.get_transactions())

    async def calculate_total_balance(self) -> int:
        return stats.total_balance(await self.get_wallets(), await self.get_transactions())

    async def get_monthly_stats(self, year: int, month: int) -> MonthlyStats:
        return stats.monthly_stats(await self.get_transactions(), year, month)

    async def get_daily_stats(self, day: date) -> DailyStats:
        return stats.daily_stats(await self.get_transactions(), day)

    async def get_daily_breakdown(self, year: int, month: int) -> dict[date, DailyStats]:
        return stats.daily_breakdown(await self.get_transactions(), year, month)

    async def get_category_ranking(self, year: int, month: int) -> list[CategoryStats]:
        return stats.category_ranking(await self.get_transactions(), year, month)

    # =========================================================================
    # Whole data set
    # =========================================================================

    async def export_data(self) -> FinanceData:
        return FinanceData(
            wallets=await self.get_wallets(),
            transactions=await self.get_transactions(),
            goals=await self.get_goals(),
        )

    async def import_data(self, data: FinanceData) -> None:
        """Replace wallets, transactions and goals with the given data set."""
        await self.save_wallets(data.wallets)
        await self.save_transactions(data.transactions)
        await self.save_goals(data.goals)

        if self._audit_logger:
            self._audit_logger.log_data_imported(
                wallets=len(data.wallets),
                transactions=len(data.transactions),
                goals=len(data.goals),
            )

    async def clear_all(self) -> None:
        """
        Remove wallets, transactions, goals and settings.

        The monthly salary is kept. The next get_wallets() behaves like a
        first run and recreates the default wallet.
        """
        await self._kv.remove_items([
            self.keys.wallets,
            self.keys.transactions,
            self.keys.goals,
            self.keys.settings,
        ])

        if self._audit_logger:
            self._audit_logger.log_data_cleared()
