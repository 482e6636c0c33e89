"""Repository tests against a fake psycopg2 connection."""

from datetime import date, datetime
from decimal import Decimal

import psycopg2
import pytest
from psycopg2.errors import UniqueViolation

from errors import NotFoundError, RemoteError, ValidationError
from models.budget import Budget
from repositories.budget_repo import BudgetRepository
from repositories.transaction_repo import TransactionRepository
from repositories.user_repo import UserRepository
from tests.conftest import make_tx

ROW = {
    "id": 4,
    "user_id": 1,
    "title": "Grocery Run",
    "amount": Decimal("250.00"),
    "category": "Food",
    "type": "expense",
    "date": date(2024, 1, 5),
    "created_at": datetime(2024, 1, 5, 9, 30),
}


def test_insert_assigns_id_and_commits(fake_db):
    conn = fake_db(rows=[{"id": 11, "created_at": datetime(2024, 1, 5)}])
    saved = TransactionRepository().insert(make_tx(250, title="Grocery Run"))
    assert saved.id == 11
    assert conn.commits == 1
    assert conn.released
    _, params = conn.executed[0]
    assert params == (1, "Grocery Run", 250, "Food", "expense", date(2024, 1, 5))


def test_insert_with_missing_field_never_touches_db(fake_db):
    conn = fake_db()
    with pytest.raises(ValidationError):
        TransactionRepository().insert(make_tx(250, title=""))
    assert conn.executed == []


def test_insert_failure_rolls_back_and_wraps(fake_db):
    conn = fake_db(error=psycopg2.OperationalError("connection lost"))
    with pytest.raises(RemoteError):
        TransactionRepository().insert(make_tx(250))
    assert conn.rollbacks == 1
    assert conn.released


def test_list_maps_rows(fake_db):
    fake_db(rows=[ROW])
    [t] = TransactionRepository().list_by_user(1)
    assert t.id == 4
    assert t.amount == Decimal("250.00")
    assert isinstance(t.amount, Decimal)
    assert t.date == date(2024, 1, 5)


def test_list_failure_is_remote_error(fake_db):
    conn = fake_db(error=psycopg2.OperationalError("down"))
    with pytest.raises(RemoteError):
        TransactionRepository().list_by_user(1)
    assert conn.released


def test_get_missing_returns_none(fake_db):
    fake_db(rows=[])
    assert TransactionRepository().get(99, 1) is None


def test_update_sends_only_given_columns(fake_db):
    conn = fake_db(rowcount=1)
    TransactionRepository().update(4, 1, {"amount": 300.0, "title": "Groceries"})
    _, params = conn.executed[0]
    assert params == ["Groceries", 300.0, 4, 1]
    assert conn.commits == 1


def test_update_no_match_is_not_found(fake_db):
    fake_db(rowcount=0)
    with pytest.raises(NotFoundError):
        TransactionRepository().update(4, 1, {"title": "x"})


def test_update_rejects_unknown_columns(fake_db):
    conn = fake_db()
    with pytest.raises(ValidationError):
        TransactionRepository().update(4, 1, {"user_id": 2})
    assert conn.executed == []


def test_delete_no_match_is_not_found(fake_db):
    fake_db(rowcount=0)
    with pytest.raises(NotFoundError):
        TransactionRepository().delete(4, 1)


def test_delete_scoped_to_user(fake_db):
    conn = fake_db(rowcount=1)
    TransactionRepository().delete(4, 1)
    assert conn.executed[0][1] == (4, 1)


def test_budget_upsert_returns_id(fake_db):
    fake_db(rows=[{"id": 3}])
    budget = BudgetRepository().upsert(Budget(user_id=1, category="Food", monthly_limit=Decimal("1000.00")))
    assert budget.id == 3


def test_budget_delete_no_match_is_not_found(fake_db):
    fake_db(rowcount=0)
    with pytest.raises(NotFoundError):
        BudgetRepository().delete(3, 1)


def test_user_duplicate_email_is_validation_error(fake_db):
    conn = fake_db(error=UniqueViolation("duplicate key"))
    with pytest.raises(ValidationError, match="already registered"):
        UserRepository().create("Alice", "alice@example.com", "hash")
    assert conn.rollbacks == 1


def test_user_lookup(fake_db):
    fake_db(rows=[{
        "id": 1, "name": "Alice", "email": "alice@example.com",
        "password_hash": "hash", "created_at": datetime(2024, 1, 1),
    }])
    user = UserRepository().get_by_email("alice@example.com")
    assert user.to_session().name == "Alice"


def test_create_tables_commits_schema(monkeypatch):
    import db.init_db as init_db
    from tests.conftest import FakeConnection

    conn = FakeConnection()
    monkeypatch.setattr(init_db, "get_connection", lambda: conn)
    monkeypatch.setattr(init_db, "release_connection", lambda c: setattr(c, "released", True))
    init_db.create_tables()
    query, _ = conn.executed[0]
    assert "CREATE TABLE IF NOT EXISTS budgets" in query
    assert "'Healthcare'" in query
    assert "amount <> 'NaN'" in query
    assert conn.commits == 1 and conn.released


def test_pool_opens_with_configured_size_and_dict_rows(monkeypatch):
    from unittest.mock import MagicMock

    from psycopg2 import extras

    import db.connection as connection
    from config import DB_POOL_MAX, DB_POOL_MIN

    opened = []
    monkeypatch.setattr(connection, "_pool", None)
    monkeypatch.setattr(
        connection.pool, "SimpleConnectionPool",
        lambda *args, **kwargs: opened.append((args, kwargs)) or MagicMock(),
    )
    connection.init_pool()
    connection.init_pool()

    [(args, kwargs)] = opened
    assert args[:2] == (DB_POOL_MIN, DB_POOL_MAX)
    assert kwargs["cursor_factory"] is extras.RealDictCursor

    connection.close_pool()
    with pytest.raises(RuntimeError):
        connection.get_connection()
