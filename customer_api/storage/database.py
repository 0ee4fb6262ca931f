"""
SQLite persistence engine shared by the user and customer stores.

Security features:
- Prepared statements only (SQL injection protection)
- UNIQUE constraint on users.email backs the duplicate-user check

Concurrency:
- One connection per process, opened at startup and shared by all requests
- SQLite file locking is the only concurrency control (last writer wins)
"""

import logging
import sqlite3
from pathlib import Path

from customer_api.errors import StorageError

logger = logging.getLogger(__name__)


class Database:
    """
    Process-wide SQLite connection holder.

    Created once in the application lifespan and injected into the stores,
    so tests can point it at a temporary file.
    """

    def __init__(self, db_path: str = "./data/customer.db"):
        """
        Initialize database handle.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)

        # Connection is opened by initialize()
        self._conn: sqlite3.Connection | None = None
        self._initialized = False

    async def initialize(self) -> None:
        """
        Open the shared connection and create the schema.

        The customers table is only created if missing, so a pre-existing
        table keeps its shape. Idempotent - safe to call multiple times.

        Raises:
            StorageError: Database file cannot be opened or schema creation fails
        """
        if self._initialized:
            return

        logger.info(f"Initializing database at {self.db_path}")

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = self._get_connection()

            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    email TEXT NOT NULL UNIQUE,
                    password_hash TEXT NOT NULL
                )
            """
            )

            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS customers (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT,
                    email TEXT,
                    phone TEXT,
                    company TEXT
                )
            """
            )

            conn.execute("CREATE INDEX IF NOT EXISTS idx_users_email ON users(email)")

            conn.commit()
            logger.info("Database initialized successfully")
            self._initialized = True

        except (OSError, sqlite3.Error) as e:
            logger.error(f"Failed to initialize database: {e}")
            self.close()
            raise StorageError(f"Failed to initialize database: {e}") from e

    def _get_connection(self) -> sqlite3.Connection:
        """Get database connection (creates if needed)."""
        if self._conn is None:
            self._conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
        return self._conn

    @property
    def connection(self) -> sqlite3.Connection:
        """Shared connection; only valid after initialize()."""
        if not self._initialized or self._conn is None:
            raise StorageError("Database not initialized")
        return self._conn

    async def ping(self) -> bool:
        """
        Check database connectivity.

        Returns:
            bool: True if a trivial query succeeds
        """
        try:
            self.connection.execute("SELECT 1").fetchone()
            return True
        except (StorageError, sqlite3.Error) as e:
            logger.warning(f"Database ping failed: {e}")
            return False

    def close(self) -> None:
        """Close database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None
        self._initialized = False
