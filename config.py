"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from decimal import Decimal
from dotenv import load_dotenv

load_dotenv()


# ── Telegram ──────────────────────────────────────────────
TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")
PERSISTENCE_FILE: str = os.getenv("PERSISTENCE_FILE", "expense_tracker.pickle")

# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "expense_tracker")
DB_USER: str = os.getenv("DB_USER", "tracker_user")
DB_PASS: str = os.getenv("DB_PASS", "")
DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "5"))

DATABASE_URL: str = (
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

# ── Sessions ──────────────────────────────────────────────
SESSION_SECRET: str = os.getenv("SESSION_SECRET", "change-me-in-production")
SESSION_ALGORITHM: str = "HS256"
MIN_PASSWORD_LENGTH: int = int(os.getenv("MIN_PASSWORD_LENGTH", "6"))

# ── Domain ────────────────────────────────────────────────
CATEGORIES: list[str] = [
    "Food",
    "Travel",
    "Rent",
    "Shopping",
    "Entertainment",
    "Healthcare",
    "Education",
    "Utilities",
    "Other",
]
TRANSACTION_TYPES: list[str] = ["expense", "income"]

# Amounts and limits are stored as NUMERIC(12,2)
MAX_AMOUNT: Decimal = Decimal("9999999999.99")

# Budget status thresholds, in percent of the monthly limit
BUDGET_WARNING_PCT: float = 70.0
BUDGET_DANGER_PCT: float = 90.0

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE: str = os.getenv("LOG_FILE", "")

# ── Currency ──────────────────────────────────────────────
CURRENCY_SYMBOL: str = "₹"
