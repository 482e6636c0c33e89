"""
db/init_db.py
-------------
Schema for the users, expenses and budgets tables.

``create_tables()`` runs at bot startup and is idempotent. To prepare an
empty database by hand:
    python -m db.init_db
"""

import psycopg2

from config import CATEGORIES
from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

_CATEGORY_LIST = ", ".join(f"'{c}'" for c in CATEGORIES)

SCHEMA_SQL = f"""
-- Users table: registered accounts, password stored as a bcrypt hash
CREATE TABLE IF NOT EXISTS users (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(100) NOT NULL,
    email           VARCHAR(255) UNIQUE NOT NULL,
    password_hash   VARCHAR(100) NOT NULL,
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Expenses table: every income or expense transaction
CREATE TABLE IF NOT EXISTS expenses (
    id              SERIAL PRIMARY KEY,
    user_id         INT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    title           TEXT NOT NULL,
    amount          NUMERIC(12,2) NOT NULL CHECK (amount > 0 AND amount <> 'NaN'),
    category        VARCHAR(50) NOT NULL CHECK (category IN ({_CATEGORY_LIST})),
    type            VARCHAR(10) NOT NULL CHECK (type IN ('expense', 'income')),
    date            DATE NOT NULL DEFAULT CURRENT_DATE,
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Budgets table: one monthly limit per (user, category)
CREATE TABLE IF NOT EXISTS budgets (
    id              SERIAL PRIMARY KEY,
    user_id         INT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    category        VARCHAR(50) NOT NULL CHECK (category IN ({_CATEGORY_LIST})),
    monthly_limit   NUMERIC(12,2) NOT NULL CHECK (monthly_limit > 0 AND monthly_limit <> 'NaN'),
    UNIQUE(user_id, category)
);

-- History is always read per user, newest date first
CREATE INDEX IF NOT EXISTS idx_expenses_user_date ON expenses(user_id, date);
"""


def create_tables() -> None:
    """Create any missing table or index. Existing data is never touched."""
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
    except psycopg2.Error as e:
        conn.rollback()
        logger.error(f"Schema creation failed: {e}")
        raise
    finally:
        release_connection(conn)
    logger.info("Schema is up to date (users, expenses, budgets).")


if __name__ == "__main__":
    from db.connection import close_pool, init_pool

    init_pool()
    try:
        create_tables()
    finally:
        close_pool()
