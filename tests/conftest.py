"""Shared fixtures: in-memory repositories and a fake psycopg2 connection."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from errors import NotFoundError, RemoteError
from models.budget import Budget
from models.transaction import Transaction
from models.user import User


class FakeTransactionRepository:
    """Stores transactions in a list. Set ``fail = True`` to simulate a down database."""

    def __init__(self):
        self.rows: list[Transaction] = []
        self.next_id = 1
        self.fail = False

    def _check(self):
        if self.fail:
            raise RemoteError("Failed to load transactions")

    def insert(self, transaction):
        self._check()
        transaction.id = self.next_id
        transaction.created_at = datetime(2024, 1, 1, 12, 0)
        self.next_id += 1
        self.rows.append(replace(transaction))
        return transaction

    def list_by_user(self, user_id):
        self._check()
        mine = [replace(t) for t in self.rows if t.user_id == user_id]
        return sorted(mine, key=lambda t: (t.date, t.id), reverse=True)

    def get(self, transaction_id, user_id):
        self._check()
        for t in self.rows:
            if t.id == transaction_id and t.user_id == user_id:
                return replace(t)
        return None

    def update(self, transaction_id, user_id, fields):
        self._check()
        for i, t in enumerate(self.rows):
            if t.id == transaction_id and t.user_id == user_id:
                self.rows[i] = replace(t, **fields)
                return
        raise NotFoundError(f"Transaction #{transaction_id} not found")

    def delete(self, transaction_id, user_id):
        self._check()
        before = len(self.rows)
        self.rows = [t for t in self.rows if not (t.id == transaction_id and t.user_id == user_id)]
        if len(self.rows) == before:
            raise NotFoundError(f"Transaction #{transaction_id} not found")


class FakeBudgetRepository:
    def __init__(self):
        self.rows: list[Budget] = []
        self.next_id = 1

    def upsert(self, budget):
        for existing in self.rows:
            if existing.user_id == budget.user_id and existing.category == budget.category:
                existing.monthly_limit = budget.monthly_limit
                budget.id = existing.id
                return budget
        budget.id = self.next_id
        self.next_id += 1
        self.rows.append(replace(budget))
        return budget

    def list_by_user(self, user_id):
        return sorted(
            (replace(b) for b in self.rows if b.user_id == user_id),
            key=lambda b: b.category,
        )

    def delete(self, budget_id, user_id):
        before = len(self.rows)
        self.rows = [b for b in self.rows if not (b.id == budget_id and b.user_id == user_id)]
        if len(self.rows) == before:
            raise NotFoundError(f"Budget #{budget_id} not found")


class FakeUserRepository:
    def __init__(self):
        self.users: dict[str, User] = {}

    def create(self, name, email, password_hash):
        user = User(name=name, email=email, password_hash=password_hash,
                    id=len(self.users) + 1, created_at=datetime(2024, 1, 1))
        self.users[email] = user
        return user

    def get_by_email(self, email):
        return self.users.get(email)


class FakeCursor:
    """Stands in for a RealDictCursor. Rows are plain dicts."""

    def __init__(self, conn):
        self.conn = conn
        self.rowcount = conn.rowcount

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, query, params=None):
        self.conn.executed.append((query, params))
        if self.conn.error is not None:
            raise self.conn.error

    def fetchone(self):
        return self.conn.rows[0] if self.conn.rows else None

    def fetchall(self):
        return list(self.conn.rows)


class FakeConnection:
    def __init__(self, rows=None, rowcount=1, error=None):
        self.rows = rows or []
        self.rowcount = rowcount
        self.error = error
        self.executed = []
        self.commits = 0
        self.rollbacks = 0
        self.released = False

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


@pytest.fixture
def fake_db(monkeypatch):
    """
    Route every repository's pool access to a FakeConnection.

    Returns a function that installs a new connection and returns it.
    """
    import repositories.budget_repo as budget_repo
    import repositories.transaction_repo as transaction_repo
    import repositories.user_repo as user_repo

    def install(**kwargs) -> FakeConnection:
        conn = FakeConnection(**kwargs)

        def release(c):
            c.released = True

        for module in (transaction_repo, budget_repo, user_repo):
            monkeypatch.setattr(module, "get_connection", lambda: conn)
            monkeypatch.setattr(module, "release_connection", release)
        return conn

    return install


@pytest.fixture
def tx_repo():
    return FakeTransactionRepository()


@pytest.fixture
def budget_repo():
    return FakeBudgetRepository()


@pytest.fixture
def user_repo():
    return FakeUserRepository()


def make_tx(amount, tx_type="expense", category="Food", tx_date=date(2024, 1, 5),
            title="Item", tx_id=None, user_id=1) -> Transaction:
    return Transaction(
        user_id=user_id, title=title, amount=Decimal(str(amount)), category=category,
        type=tx_type, date=tx_date, id=tx_id,
    )


def make_update():
    """A Telegram Update double with awaitable reply methods."""
    update = MagicMock()
    update.effective_user.id = 42
    update.message.reply_text = AsyncMock()
    update.message.delete = AsyncMock()
    update.effective_chat.send_message = AsyncMock()
    return update


def make_context(args=None, user_data=None):
    return SimpleNamespace(args=args or [], user_data={} if user_data is None else user_data)
