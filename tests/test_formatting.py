"""Tests for chat reply rendering."""

from datetime import date
from decimal import Decimal

from models.budget import BudgetProgress
from models.filters import ViewFilters
from models.summary import Summary
from tests.conftest import make_tx
from utils.formatting import money, progress_bar, render_budgets, render_history, render_summary


def test_money_uses_rupee_symbol():
    assert money(Decimal("1234.5")) == "₹ 1,234.50"


def test_progress_bar_length_is_fixed():
    assert progress_bar(0) == "░" * 15
    assert progress_bar(100) == "█" * 15
    assert len(progress_bar(47.3)) == 15


def test_history_while_loading():
    assert "Loading" in render_history([], ViewFilters(), loading=True)


def test_history_empty_states_differ_with_filters():
    assert "/add" in render_history([], ViewFilters())
    assert "/clear" in render_history([], ViewFilters(search="zzz"))


def test_history_lists_rows():
    text = render_history([make_tx(80, title="Lunch", tx_id=3, tx_date=date(2024, 1, 5))], ViewFilters())
    assert "#3 | 2024-01-05 | Lunch | Food | -₹ 80.00" in text


def test_summary_without_expenses():
    assert "No expense data" in render_summary(Summary())


def test_budgets_render_status_and_remaining():
    progress = BudgetProgress(category="Food", limit=Decimal("1000.00"), spent=Decimal("950.00"), percentage=95.0, status="danger")
    text = render_budgets([progress])
    assert "🔴 Food" in text
    assert "95.0%" in text
    assert "Remaining: ₹ 50.00" in text
