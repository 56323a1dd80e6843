"""Tests for category-wise summaries."""

import pytest

from expense_core.aggregation import SummaryService, summarize
from expense_core.models import Expense, Summary, percentage_of


def _expense(amount, category, idx=0):
    return Expense(id=f"e{idx}", amount=amount, category=category, date="2024-01-01")


def test_empty_collection_summarises_to_zero(store):
    summary = SummaryService(store).summarize()
    assert summary.totals == {}
    assert summary.grand_total == 0
    assert summary.rows() == []


def test_same_category_totals_are_added(store):
    store.create({"amount": 50, "category": "Food", "date": "2024-01-01"})
    store.create({"amount": 30, "category": "Food", "date": "2024-01-02"})
    summary = SummaryService(store).summarize()
    assert summary.totals == {"Food": 80}
    assert summary.grand_total == 80


def test_recategorised_expense_moves_its_total(store):
    food = store.create({"amount": 20, "category": "Food", "date": "2024-01-01"})
    store.create({"amount": 30, "category": "Transport", "date": "2024-01-01"})
    store.update(food.id, {"category": "Transport"})
    summary = SummaryService(store).summarize()
    assert summary.totals == {"Transport": 50}
    assert summary.grand_total == 50


def test_categories_appear_in_first_encounter_order():
    summary = summarize(
        [
            _expense(1, "Transport", 1),
            _expense(2, "Food", 2),
            _expense(3, "Transport", 3),
            _expense(4, "Shopping", 4),
        ]
    )
    assert list(summary.totals) == ["Transport", "Food", "Shopping"]


def test_grouping_is_case_sensitive():
    summary = summarize([_expense(10, "Food", 1), _expense(5, "food", 2)])
    assert summary.totals == {"Food": 10, "food": 5}
    assert summary.grand_total == 15


def test_category_totals_add_up_to_grand_total():
    expenses = [_expense(amount, cat, i) for i, (amount, cat) in enumerate(
        [(12.5, "Food"), (7.25, "Transport"), (100, "Utilities"), (0.25, "Food")]
    )]
    summary = summarize(expenses)
    assert sum(summary.totals.values()) == pytest.approx(summary.grand_total)
    assert summary.grand_total == pytest.approx(sum(e.amount for e in expenses))


def test_summary_is_recomputed_on_every_call(store):
    service = SummaryService(store)
    expense = store.create({"amount": 10, "category": "Food", "date": "2024-01-01"})
    assert service.summarize().grand_total == 10
    store.delete(expense.id)
    assert service.summarize() == Summary()


def test_rows_carry_percentages():
    summary = summarize([_expense(1, "Food", 1), _expense(2, "Transport", 2)])
    rows = summary.rows()
    assert [(r.category, r.total, r.percentage) for r in rows] == [
        ("Food", 1, 33.3),
        ("Transport", 2, 66.7),
    ]
    assert summary.to_dict() == {
        "data": [
            {"category": "Food", "total": 1, "percentage": 33.3},
            {"category": "Transport", "total": 2, "percentage": 66.7},
        ],
        "grandTotal": 3,
    }


@pytest.mark.parametrize(
    "total, grand_total, expected",
    [(50, 200, 25.0), (1, 8, 12.5), (1, 16, 6.3), (5, 0, 0.0), (0, 0, 0.0)],
)
def test_percentage_of(total, grand_total, expected):
    assert percentage_of(total, grand_total) == expected
