"""
Credential store: persistence of registered users.
"""

import logging
import sqlite3

from customer_api.errors import StorageError
from customer_api.models.user import User
from customer_api.storage.database import Database

logger = logging.getLogger(__name__)


class DuplicateEmailError(StorageError):
    """Insert rejected by the UNIQUE constraint on users.email."""

    pass


class UserStore:
    """Users table access. Email is matched exactly (case-sensitive)."""

    def __init__(self, db: Database):
        self.db = db

    async def get_by_email(self, email: str) -> User | None:
        """
        Get user by exact email match.

        Returns:
            User or None if not found

        Raises:
            StorageError: Query failed
        """
        try:
            row = self.db.connection.execute(
                "SELECT id, name, email, password_hash FROM users WHERE email = ?",
                (email,),
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"User lookup failed: {e}") from e

        if row is None:
            return None

        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
        )

    async def create(self, name: str, email: str, password_hash: str) -> User:
        """
        Insert a new user.

        Args:
            name: Display name
            email: Unique email
            password_hash: bcrypt hash of the password

        Returns:
            User: Created user

        Raises:
            DuplicateEmailError: Email already registered
            StorageError: Insert failed
        """
        conn = self.db.connection
        try:
            cursor = conn.execute(
                "INSERT INTO users (name, email, password_hash) VALUES (?, ?, ?)",
                (name, email, password_hash),
            )
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            if "UNIQUE constraint failed" in str(e):
                logger.warning("User creation failed: email already registered")
                raise DuplicateEmailError(email) from e
            raise StorageError(f"User insert failed: {e}") from e
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"User insert failed: {e}") from e

        logger.info(f"Created user id={cursor.lastrowid}")
        return User(id=cursor.lastrowid, name=name, email=email, password_hash=password_hash)
