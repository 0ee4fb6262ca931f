"""
Storage layer for users and customers.

Uses a single SQLite file with one shared connection per process.
"""

from customer_api.storage.customers import CustomerStore
from customer_api.storage.database import Database
from customer_api.storage.users import DuplicateEmailError, UserStore

__all__ = ["CustomerStore", "Database", "DuplicateEmailError", "UserStore"]
