"""Category-wise aggregation over the expense collection."""

from __future__ import annotations

from typing import Dict, Iterable

from .models import Expense, Summary
from .services import ExpenseStore

__all__ = ["SummaryService", "summarize"]


def summarize(expenses: Iterable[Expense]) -> Summary:
    """Group amounts by the exact category string and compute the grand total.

    Categories appear in the order they are first met while scanning
    ``expenses``. Grouping is case-sensitive, unlike the listing filter, so
    ``"Food"`` and ``"food"`` produce two rows. No rounding is applied.
    """
    totals: Dict[str, float] = {}
    grand_total = 0.0
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, 0.0) + expense.amount
        grand_total += expense.amount
    return Summary(totals=totals, grand_total=grand_total)


class SummaryService:
    """Derives summaries from the current store contents on every call."""

    def __init__(self, expense_store: ExpenseStore) -> None:
        self._expenses = expense_store

    def summarize(self) -> Summary:
        return summarize(self._expenses.list())
