"""
Main Orchestrator for Voice Ledger

This module ties the components together and defines the flows the UI
layer calls:
1. Voice entry (transcript -> parse result -> user review -> save)
2. Manual entry and deletion of transactions
3. Wallet management (cap, last-wallet protection, balance adjustment)

DESIGN DECISION: The orchestrator is the input boundary.
- Nothing reaches the store without passing the validator
- A parse result is only saved when the caller asks for it
- Every step is audited
"""

from datetime import date
from typing import Optional
from uuid import UUID

from voice_ledger.audit import AuditLogger, create_correlation_id, set_debug_mode
from voice_ledger.categories import get_fallback_category
from voice_ledger.config import Settings, get_settings
from voice_ledger.ledger import LedgerStore
from voice_ledger.models.finance import (
    CreatedBy,
    Transaction,
    TransactionDraft,
    TransactionType,
    VoiceParseResult,
    Wallet,
    WalletDraft,
)
from voice_ledger.models.validation import ValidationIssue, ValidationResult
from voice_ledger.parsing import interpret
from voice_ledger.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
)
from voice_ledger.validation import (
    InvalidEntryError,
    LedgerValidator,
    WalletLimitReachedError,
)

NO_AMOUNT_MESSAGE = "Không nhận dạng được số tiền"
INTERPRETED_MESSAGE = "Đã nhận dạng giao dịch, vui lòng kiểm tra lại"
ADJUSTMENT_DESCRIPTION = "Điều chỉnh số dư"


def _missing_wallet(wallet_id: str) -> ValidationResult:
    return ValidationResult(
        subject="wallet",
        issues=[ValidationIssue(
            field="wallet_id",
            issue_type="unknown_reference",
            message=f"Wallet '{wallet_id}' does not exist",
            severity="error",
        )],
    )


class _EntryFlow:
    """Shared validate-then-record step."""

    def __init__(
        self,
        store: LedgerStore,
        validator: Optional[LedgerValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._validator = validator or LedgerValidator()
        self._audit_logger = audit_logger

    async def _record(
        self,
        draft: TransactionDraft,
        correlation_id: UUID,
    ) -> tuple[Transaction, ValidationResult]:
        wallets = await self._store.get_wallets()
        result = self._validator.validate_transaction(draft, wallets)

        if result.has_errors:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    subject=result.subject,
                    issues=[issue.model_dump() for issue in result.issues],
                    correlation_id=correlation_id,
                )
            raise InvalidEntryError(result)

        transaction = await self._store.add_transaction(draft)
        return transaction, result


class VoiceEntryFlow(_EntryFlow):
    """
    Orchestrates the voice entry flow.

    Flow:
    1. Interpret -> parse the transcript (pure, nothing saved)
    2. Review    -> UI shows the result; the user may change category/type
    3. Save      -> validate and record with created_by=voice
    """

    def interpret_transcript(
        self,
        transcript: str,
        today: Optional[date] = None,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Optional[VoiceParseResult], str]:
        """
        Returns:
            (result, message). result is None when no amount was found;
            the message is then the retry prompt to show.
        """
        correlation_id = correlation_id or create_correlation_id()
        result = interpret(transcript, today=today)

        if result is None:
            if self._audit_logger:
                self._audit_logger.log_transcript_rejected(
                    transcript=transcript,
                    correlation_id=correlation_id,
                )
            return None, NO_AMOUNT_MESSAGE

        if self._audit_logger:
            self._audit_logger.log_transcript_interpreted(
                transcript=transcript,
                transaction_type=result.type.value,
                amount=result.amount,
                category_id=result.category_id,
                correlation_id=correlation_id,
            )
        return result, INTERPRETED_MESSAGE

    async def save_result(
        self,
        result: VoiceParseResult,
        wallet_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Transaction, ValidationResult]:
        """
        Record a reviewed parse result.

        Without a wallet_id the first wallet is used.

        Raises:
            InvalidEntryError: if the result does not validate
        """
        correlation_id = correlation_id or create_correlation_id()

        if wallet_id is None:
            wallets = await self._store.get_wallets()
            if not wallets:
                raise InvalidEntryError(_missing_wallet("<none>"))
            wallet_id = wallets[0].id

        draft = TransactionDraft(
            wallet_id=wallet_id,
            type=result.type,
            amount=result.amount,
            category_id=result.category_id,
            description=result.description,
            date=result.date,
            created_by=CreatedBy.VOICE,
        )
        return await self._record(draft, correlation_id)


class TransactionFlow(_EntryFlow):
    """Manual entry and deletion of transactions."""

    async def add_manual(
        self,
        draft: TransactionDraft,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Transaction, ValidationResult]:
        """
        Raises:
            InvalidEntryError: if the draft does not validate
        """
        correlation_id = correlation_id or create_correlation_id()
        draft = draft.model_copy(update={"created_by": CreatedBy.MANUAL})
        return await self._record(draft, correlation_id)

    async def delete(self, transaction_id: str) -> bool:
        """No-op (False) if the transaction does not exist."""
        return await self._store.delete_transaction(transaction_id)


class WalletFlow:
    """
    Wallet management at the input boundary.

    The store itself has no wallet cap and will delete any wallet;
    those rules live here.
    """

    def __init__(
        self,
        store: LedgerStore,
        validator: Optional[LedgerValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._validator = validator or LedgerValidator()
        self._audit_logger = audit_logger

    async def add_wallet(
        self,
        draft: WalletDraft,
        correlation_id: Optional[UUID] = None,
    ) -> Wallet:
        """
        Raises:
            WalletLimitReachedError: once the configured cap is reached
        """
        correlation_id = correlation_id or create_correlation_id()
        wallets = await self._store.get_wallets()

        try:
            self._validator.check_can_add_wallet(wallets)
        except WalletLimitReachedError as e:
            if self._audit_logger:
                self._audit_logger.log_wallet_limit_reached(
                    limit=e.limit,
                    correlation_id=correlation_id,
                )
            raise

        return await self._store.add_wallet(draft)

    async def delete_wallet(
        self,
        wallet_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Delete a wallet, keeping its transactions.

        Raises:
            InvalidEntryError: when asked to delete the last wallet
        """
        correlation_id = correlation_id or create_correlation_id()
        wallets = await self._store.get_wallets()
        result = self._validator.validate_wallet_deletion(wallet_id, wallets)

        if result.has_errors:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    subject=result.subject,
                    issues=[issue.model_dump() for issue in result.issues],
                    correlation_id=correlation_id,
                )
            raise InvalidEntryError(result)

        return await self._store.delete_wallet(wallet_id)

    async def adjust_balance(
        self,
        wallet_id: str,
        target_balance: int,
        day: Optional[date] = None,
        correlation_id: Optional[UUID] = None,
    ) -> Optional[Transaction]:
        """
        Bring a wallet's live balance to target_balance.

        The difference is recorded as an adjustment transaction in the
        fallback category of the matching type. Returns None when the
        balance already matches.

        Raises:
            InvalidEntryError: if the wallet does not exist
        """
        correlation_id = correlation_id or create_correlation_id()

        if await self._store.get_wallet(wallet_id) is None:
            raise InvalidEntryError(_missing_wallet(wallet_id))

        current = await self._store.calculate_wallet_balance(wallet_id)
        difference = target_balance - current
        if difference == 0:
            return None

        transaction_type = (
            TransactionType.INCOME if difference > 0 else TransactionType.EXPENSE
        )
        transaction = await self._store.add_transaction(TransactionDraft(
            wallet_id=wallet_id,
            type=transaction_type,
            amount=abs(difference),
            category_id=get_fallback_category(transaction_type).id,
            description=ADJUSTMENT_DESCRIPTION,
            date=day or date.today(),
            created_by=CreatedBy.ADJUSTMENT,
        ))

        if self._audit_logger:
            self._audit_logger.log_balance_adjusted(
                wallet_id=wallet_id,
                previous_balance=current,
                target_balance=target_balance,
                transaction_id=transaction.id,
                correlation_id=correlation_id,
            )
        return transaction


def create_kv_store(settings: Settings) -> KeyValueStore:
    storage = settings.storage
    if storage.backend == "memory":
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(storage.data_dir)


def create_app_components(
    settings: Optional[Settings] = None,
    kv_store: Optional[KeyValueStore] = None,
) -> tuple[VoiceEntryFlow, TransactionFlow, WalletFlow, LedgerStore]:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use (defaults to get_settings())
        kv_store: Storage backend override, e.g. for tests

    Returns:
        (voice_entry_flow, transaction_flow, wallet_flow, store)
    """
    settings = settings or get_settings()
    set_debug_mode(settings.ledger.debug_mode)
    audit_logger = AuditLogger()

    store = LedgerStore(
        kv_store or create_kv_store(settings),
        audit_logger=audit_logger,
        key_prefix=settings.storage.key_prefix,
    )
    validator = LedgerValidator(settings.ledger)

    voice_flow = VoiceEntryFlow(store, validator, audit_logger)
    transaction_flow = TransactionFlow(store, validator, audit_logger)
    wallet_flow = WalletFlow(store, validator, audit_logger)

    return voice_flow, transaction_flow, wallet_flow, store
