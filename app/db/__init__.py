"""Database package — holds the declarative Base that models and Alembic share.

Engines and sessions are owned by infrastructure/database.py.
"""
