"""
Expense Store

The farmer's local ledger, persisted as one JSON list, newest first.

DESIGN DECISION: Input is validated before anything is written. A
rejected form leaves both the in-memory list and storage untouched.
Entries that cannot be decoded on load are skipped one by one so a
single bad record does not hide the rest of the ledger.
"""

import json
from decimal import Decimal
from typing import Optional, Union

import structlog
from pydantic import ValidationError

from anthaathi.audit import AuditLogger
from anthaathi.config import get_settings
from anthaathi.models.expense import Expense, ExpenseCategory
from anthaathi.services.storage import KeyValueStorageInterface
from anthaathi.stores.base import ObservableStore
from anthaathi.validation import InputValidationError, InputValidator
from anthaathi.validation.validator import AmountInput


logger = structlog.get_logger(__name__)


class ExpenseStore(ObservableStore):
    """Ordered list of expenses with add, delete and totals."""

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        key: Optional[str] = None,
        validator: Optional[InputValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        super().__init__(
            storage,
            key or get_settings().storage.expenses_key,
            audit_logger,
        )
        self._validator = validator or InputValidator()
        self._expenses: list[Expense] = []

    @property
    def expenses(self) -> list[Expense]:
        """Current entries, newest first (a copy)."""
        return list(self._expenses)

    def _decode(self, raw: Optional[str]) -> list[Expense]:
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("expense_list_unreadable", key=self._key, error=str(e))
            return []
        if not isinstance(items, list):
            logger.warning("expense_list_not_a_list", key=self._key)
            return []

        expenses = []
        for index, item in enumerate(items):
            try:
                expenses.append(Expense.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    "expense_entry_skipped",
                    index=index,
                    error_count=e.error_count(),
                )
        return expenses

    def _encode(self, expenses: list[Expense]) -> str:
        return json.dumps(
            [expense.model_dump(mode="json") for expense in expenses],
            ensure_ascii=False,
        )

    async def load(self) -> list[Expense]:
        """Restore the ledger; nothing saved means an empty ledger."""
        self._expenses = self._decode(await self._read_raw())
        logger.debug("expenses_loaded", count=len(self._expenses))
        self._notify()
        return self.expenses

    async def add_expense(
        self,
        title: str,
        amount: AmountInput,
        category: Union[str, ExpenseCategory] = ExpenseCategory.SEEDS,
    ) -> Expense:
        """
        Record a new expense at the front of the list.

        Args:
            title: What the money was spent on
            amount: Amount in INR as typed or as a number
            category: One of the fixed expense categories

        Returns:
            The stored expense

        Raises:
            InputValidationError: If the form is incomplete or invalid
            StorageWriteError: If the ledger could not be saved
        """
        result = self._validator.validate_expense(title, amount, category)
        if result.has_errors:
            if self._audit_logger:
                await self._audit_logger.log_validation_failed(
                    result.form,
                    [issue.model_dump() for issue in result.issues],
                )
            raise InputValidationError(result)

        expense = Expense(
            title=title,
            amount=self._validator.parse_amount(amount),
            category=ExpenseCategory(category),
        )
        updated = [expense] + self._expenses

        await self._write_raw(self._encode(updated))
        self._expenses = updated

        if self._audit_logger:
            await self._audit_logger.log_expense_added(
                expense_id=expense.id,
                title=expense.title,
                amount=str(expense.amount),
                category=expense.category.value,
            )

        self._notify()
        return expense

    async def delete_expense(self, expense_id: str) -> bool:
        """
        Remove the entry with this id.

        Returns False (and writes nothing) if no entry matches.
        """
        remaining = [e for e in self._expenses if e.id != expense_id]
        found = len(remaining) != len(self._expenses)

        if found:
            await self._write_raw(self._encode(remaining))
            self._expenses = remaining

        if self._audit_logger:
            await self._audit_logger.log_expense_deleted(expense_id, found)

        if found:
            self._notify()
        return found

    def total(self) -> Decimal:
        """Sum of all amounts."""
        return sum((e.amount for e in self._expenses), Decimal("0"))

    def totals_by_category(self) -> dict[ExpenseCategory, Decimal]:
        """Sum per category, only for categories that have entries."""
        totals: dict[ExpenseCategory, Decimal] = {}
        for expense in self._expenses:
            totals[expense.category] = totals.get(expense.category, Decimal("0")) + expense.amount
        return totals
