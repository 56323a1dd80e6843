"""Data models for the expense tracker domain."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Mapping

__all__ = [
    "UNSET",
    "CategoryTotal",
    "Expense",
    "ExpensePatch",
    "Summary",
    "percentage_of",
]


def percentage_of(total: float, grand_total: float) -> float:
    """Return total as a share of grand_total in percent, rounded half-up to one decimal."""
    if not grand_total:
        return 0.0
    share = Decimal(str(total / grand_total * 100))
    return float(share.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class _Unset(enum.Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


# Marks a patch field that was not supplied, as opposed to one supplied as None or "".
UNSET = _Unset.UNSET


@dataclass(frozen=True)
class Expense:
    id: str
    amount: float
    category: str
    date: str
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the expense to JSON-friendly natives."""
        return {
            "id": self.id,
            "amount": self.amount,
            "category": self.category,
            "date": self.date,
            "description": self.description,
        }


@dataclass(frozen=True)
class ExpensePatch:
    """Fields to change on an existing expense; anything left UNSET keeps its value."""

    amount: Any = UNSET
    category: Any = UNSET
    date: Any = UNSET
    description: Any = UNSET

    FIELDS = ("amount", "category", "date", "description")

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> "ExpensePatch":
        return cls(**{name: payload[name] for name in cls.FIELDS if name in payload})

    def supplied(self) -> Dict[str, object]:
        return {
            name: getattr(self, name)
            for name in self.FIELDS
            if getattr(self, name) is not UNSET
        }


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    total: float
    percentage: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "total": self.total,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class Summary:
    """Per-category totals in first-encounter order plus the grand total."""

    totals: Dict[str, float] = field(default_factory=dict)
    grand_total: float = 0.0

    def rows(self) -> List[CategoryTotal]:
        return [
            CategoryTotal(category, total, percentage_of(total, self.grand_total))
            for category, total in self.totals.items()
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": [row.to_dict() for row in self.rows()],
            "grandTotal": self.grand_total,
        }
