"""
db/ - Storage Layer
===================
Connection pool for the PostgreSQL store and the idempotent schema for
users, transactions and budgets. Imports nothing from the layers above.
"""
