"""
Resource store for customer records.

Security:
- Every caller-supplied value is a bound parameter, including the free-text
  search term (wrapped in % wildcards, never interpolated)

Semantics:
- update() writes all four mutable columns, NULL for omitted fields
- update()/delete() return the affected row count; 0 means not found
- search() relies on SQLite LIKE, which is case-insensitive for ASCII
"""

import logging
import sqlite3

import pydantic

from customer_api.errors import StorageError
from customer_api.models.customer import Customer, CustomerUpdate
from customer_api.storage.database import Database

logger = logging.getLogger(__name__)


def _to_customer(row: sqlite3.Row) -> Customer:
    try:
        return Customer(**dict(row))
    except pydantic.ValidationError as e:
        raise StorageError(f"Unreadable customer row: {e}") from e


class CustomerStore:
    """Customers table access."""

    def __init__(self, db: Database):
        self.db = db

    async def list_all(self) -> list[Customer]:
        """Return every customer row."""
        try:
            rows = self.db.connection.execute("SELECT * FROM customers").fetchall()
        except sqlite3.Error as e:
            raise StorageError(f"Customer list failed: {e}") from e

        return [_to_customer(row) for row in rows]

    async def get_by_id(self, customer_id: str) -> Customer | None:
        """
        Get customer by ID.

        Args:
            customer_id: Customer identifier (path parameter, bound as-is)

        Returns:
            Customer or None if not found
        """
        try:
            row = self.db.connection.execute(
                "SELECT * FROM customers WHERE id = ?", (customer_id,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Customer lookup failed: {e}") from e

        if row is None:
            return None

        return _to_customer(row)

    async def update(self, customer_id: str, update: CustomerUpdate) -> int:
        """
        Overwrite name, email, phone and company of a customer.

        Args:
            customer_id: Customer to update
            update: New values (None is written as NULL)

        Returns:
            int: Number of rows changed (0 if customer not found)
        """
        conn = self.db.connection
        try:
            cursor = conn.execute(
                """
                UPDATE customers
                SET name = ?, email = ?, phone = ?, company = ?
                WHERE id = ?
                """,
                (update.name, update.email, update.phone, update.company, customer_id),
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"Customer update failed: {e}") from e

        if cursor.rowcount > 0:
            logger.info(f"Updated customer: {customer_id}")
        return cursor.rowcount

    async def delete(self, customer_id: str) -> int:
        """
        Delete customer.

        Returns:
            int: Number of rows removed (0 if customer not found)
        """
        conn = self.db.connection
        try:
            cursor = conn.execute("DELETE FROM customers WHERE id = ?", (customer_id,))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"Customer delete failed: {e}") from e

        if cursor.rowcount > 0:
            logger.info(f"Deleted customer: {customer_id}")
        return cursor.rowcount

    async def search(self, query: str | None = None) -> list[Customer]:
        """
        Partial match on name or email.

        Args:
            query: Substring to look for; empty or None matches every row.
                % and _ are not escaped and act as LIKE wildcards.

        Returns:
            list[Customer]: Matching rows
        """
        pattern = f"%{query or ''}%"
        try:
            rows = self.db.connection.execute(
                """
                SELECT * FROM customers
                WHERE name LIKE ? OR email LIKE ?
                """,
                (pattern, pattern),
            ).fetchall()
        except sqlite3.Error as e:
            raise StorageError(f"Customer search failed: {e}") from e

        return [_to_customer(row) for row in rows]
