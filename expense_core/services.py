"""Framework-agnostic business services for the expense tracker."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Dict, Iterable, List, Mapping, Optional, Union
from uuid import uuid4

from .exceptions import ConflictError, NotFoundError, ValidationError
from .models import Expense, ExpensePatch
from .validators import (
    REQUIRED_FIELDS_MESSAGE,
    is_missing,
    parse_amount,
    validate_date,
    validate_description,
    validate_required_str,
)

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = (
    "Food",
    "Transport",
    "Entertainment",
    "Utilities",
    "Healthcare",
    "Shopping",
)

# Listing filter value that means "no filter".
ALL_CATEGORIES = "All"


class CategoryRegistry:
    """Holds the known category names in insertion order."""

    def __init__(self, initial: Iterable[str] = DEFAULT_CATEGORIES) -> None:
        self._lock = threading.RLock()
        self._categories: List[str] = []
        for name in initial:
            self.create(name)

    def list(self) -> List[str]:
        with self._lock:
            return list(self._categories)

    def create(self, name: object) -> str:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Category name is required")
        trimmed = name.strip()
        with self._lock:
            if self._find(trimmed) is not None:
                raise ConflictError("Category already exists")
            self._categories.append(trimmed)
        logger.debug("Added category %r", trimmed)
        return trimmed

    def __len__(self) -> int:
        with self._lock:
            return len(self._categories)

    def _find(self, name: str) -> Optional[str]:
        canonical = name.lower()
        for category in self._categories:
            if category.lower() == canonical:
                return category
        return None


class ExpenseStore:
    """Owns the expense collection; records keep their insertion order."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._expenses: List[Expense] = []

    # Public API -----------------------------------------------------------
    def list(self, category: Optional[str] = None) -> List[Expense]:
        with self._lock:
            records = list(self._expenses)
        if not category or category == ALL_CATEGORIES:
            return records
        canonical = category.lower()
        return [expense for expense in records if expense.category.lower() == canonical]

    def get(self, expense_id: str) -> Expense:
        """Return an expense or raise if it does not exist."""
        with self._lock:
            return self._expenses[self._index_or_raise(expense_id)]

    def create(self, payload: Mapping[str, object]) -> Expense:
        amount = payload.get("amount")
        category = payload.get("category")
        date = payload.get("date")
        if is_missing(amount) or is_missing(category) or is_missing(date):
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        expense = Expense(
            id=str(uuid4()),
            amount=parse_amount(amount),
            category=validate_required_str(category, "category"),
            date=validate_date(date),
            description=validate_description(payload.get("description")),
        )
        with self._lock:
            self._expenses.append(expense)
        logger.debug("Created expense %s (%s %.2f)", expense.id, expense.category, expense.amount)
        return expense

    def update(
        self, expense_id: str, changes: Union[ExpensePatch, Mapping[str, object]]
    ) -> Expense:
        patch = changes if isinstance(changes, ExpensePatch) else ExpensePatch.from_payload(changes)
        with self._lock:
            index = self._index_or_raise(expense_id)
            fields = self._validate_patch(patch)
            updated = replace(self._expenses[index], **fields)
            self._expenses[index] = updated
        logger.debug("Updated expense %s fields=%s", expense_id, sorted(fields))
        return updated

    def delete(self, expense_id: str) -> Expense:
        with self._lock:
            removed = self._expenses.pop(self._index_or_raise(expense_id))
        logger.debug("Deleted expense %s", expense_id)
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._expenses)

    # Internal helpers -----------------------------------------------------
    def _index_or_raise(self, expense_id: str) -> int:
        for index, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return index
        raise NotFoundError("Expense not found")

    @staticmethod
    def _validate_patch(patch: ExpensePatch) -> Dict[str, object]:
        fields: Dict[str, object] = {}
        for name, value in patch.supplied().items():
            if name == "amount":
                if value is None or value == "":
                    raise ValidationError("amount cannot be empty")
                fields[name] = parse_amount(value)
            elif name == "category":
                fields[name] = validate_required_str(value, "category")
            elif name == "date":
                fields[name] = validate_date(value)
            else:
                fields[name] = validate_description(value)
        return fields
