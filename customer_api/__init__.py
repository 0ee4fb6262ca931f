"""
Customer API - credential management and customer resource access.

Registers and authenticates users with bcrypt-hashed passwords and
one-hour JWT bearer tokens, and exposes read/update/delete/list/search
over customer records stored in SQLite.

Example:
    >>> from customer_api import get_settings
    >>> settings = get_settings()
    >>> print(settings.database.path)
"""

from customer_api.config import get_settings

__all__ = ["get_settings"]
