"""Core business logic package for the expense tracker."""

from .aggregation import SummaryService, summarize
from .config import Settings
from .exceptions import ConflictError, NotFoundError, ValidationError
from .models import UNSET, CategoryTotal, Expense, ExpensePatch, Summary, percentage_of
from .services import DEFAULT_CATEGORIES, CategoryRegistry, ExpenseStore

__all__ = [
    "UNSET",
    "CategoryTotal",
    "Expense",
    "ExpensePatch",
    "Summary",
    "percentage_of",
    "summarize",
    "CategoryRegistry",
    "ExpenseStore",
    "SummaryService",
    "DEFAULT_CATEGORIES",
    "Settings",
    "ConflictError",
    "NotFoundError",
    "ValidationError",
]
