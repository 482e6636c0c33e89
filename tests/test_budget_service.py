"""Tests for BudgetService."""

from datetime import date
from decimal import Decimal

import pytest

from errors import NotFoundError, ValidationError
from models.budget import Budget
from services.budget_service import BudgetService, parse_limit
from tests.conftest import make_tx


@pytest.fixture
def service(budget_repo):
    return BudgetService(repo=budget_repo)


def test_set_budget_normalizes_category(service):
    budget = service.set_budget(1, "food", "5,000")
    assert budget.category == "Food"
    assert budget.monthly_limit == 5000.0
    assert budget.id is not None


def test_set_budget_twice_replaces_limit(service):
    service.set_budget(1, "Food", "1000")
    service.set_budget(1, "Food", "2000")
    budgets = service.list_budgets(1)
    assert len(budgets) == 1
    assert budgets[0].monthly_limit == 2000.0


@pytest.mark.parametrize("limit", ["0", "-100", "abc", "", "nan", "inf", "1e400", "0.001"])
def test_invalid_limit_rejected(service, budget_repo, limit):
    with pytest.raises(ValidationError):
        service.set_budget(1, "Food", limit)
    assert budget_repo.rows == []


def test_unknown_category_rejected(service):
    with pytest.raises(ValidationError):
        service.set_budget(1, "Crypto", "100")


def test_parse_limit_accepts_numbers():
    assert parse_limit(250) == 250.0


def test_delete_budget(service):
    service.set_budget(1, "Food", "1000")
    service.set_budget(1, "Rent", "9000")
    deleted = service.delete_budget(1, "food")
    assert deleted.category == "Food"
    assert [b.category for b in service.list_budgets(1)] == ["Rent"]


def test_delete_missing_budget_raises_not_found(service):
    with pytest.raises(NotFoundError, match="No budget set for Travel"):
        service.delete_budget(1, "Travel")


def test_progress_per_budget():
    txs = [
        make_tx(200, "expense", "Food", date(2024, 3, 2)),
        make_tx(950, "expense", "Rent", date(2024, 3, 1)),
    ]
    budgets = [Budget(1, "Food", Decimal("1000.00"), 1), Budget(1, "Rent", Decimal("1000.00"), 2)]
    progress = BudgetService.progress(txs, budgets, today=date(2024, 3, 10))
    assert [(p.category, p.percentage, p.status) for p in progress] == [
        ("Food", 20.0, "safe"),
        ("Rent", 95.0, "danger"),
    ]


def test_limit_is_kept_in_cents(service):
    budget = service.set_budget(1, "Food", "2500.5")
    assert budget.monthly_limit == Decimal("2500.50")
    assert isinstance(budget.monthly_limit, Decimal)
