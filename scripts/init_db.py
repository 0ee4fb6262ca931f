#!/usr/bin/env python3
"""
Database initialization script.

Creates the SQLite database with the users and customers tables and
optionally seeds demo customers (customer rows are never created through
the API).

Usage:
    python scripts/init_db.py [--db-path PATH] [--seed-demo]

Options:
    --db-path PATH    Path to SQLite database file (default: ./data/customer.db)
    --seed-demo       Insert demo customers if the customers table is empty

This script is idempotent - safe to run multiple times.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from customer_api.errors import StorageError
from customer_api.storage.database import Database

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

DEMO_CUSTOMERS = [
    ("Alice Johnson", "alice@acme.example", "555-0101", "Acme Corp"),
    ("Bob Smith", "bob@globex.example", "555-0102", "Globex"),
    ("Carol White", "carol@initech.example", "555-0103", "Initech"),
    ("Dan Brown", "dan@umbrella.example", "555-0104", "Umbrella"),
]


async def init_database(db_path: str) -> Database | None:
    """
    Initialize database schema.

    Returns:
        Database: Initialized handle, or None if initialization failed
    """
    db = Database(db_path=db_path)
    try:
        await db.initialize()
    except StorageError as e:
        logger.error(f"Database initialization failed: {e}")
        return None

    conn = db.connection
    tables = {
        row[0]
        for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
    }
    missing = {"users", "customers"} - tables
    if missing:
        logger.error(f"Missing tables: {missing}")
        db.close()
        return None

    logger.info(f"✓ Found tables: {', '.join(sorted(tables))}")
    for table in ("users", "customers"):
        count = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
        logger.info(f"  {table}: {count} rows")

    return db


def seed_demo_customers(db: Database) -> int:
    """
    Insert demo customers when the customers table is empty.

    Returns:
        int: Number of rows inserted
    """
    conn = db.connection
    if conn.execute("SELECT COUNT(*) FROM customers").fetchone()[0] > 0:
        logger.warning("Customers table not empty - skipping demo seed")
        return 0

    conn.executemany(
        "INSERT INTO customers (name, email, phone, company) VALUES (?, ?, ?, ?)",
        DEMO_CUSTOMERS,
    )
    conn.commit()
    logger.info(f"✓ Seeded {len(DEMO_CUSTOMERS)} demo customers")
    return len(DEMO_CUSTOMERS)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Initialize customer database schema")
    parser.add_argument(
        "--db-path",
        default="./data/customer.db",
        help="Path to SQLite database file (default: ./data/customer.db)",
    )
    parser.add_argument(
        "--seed-demo",
        action="store_true",
        help="Insert demo customers for testing",
    )
    args = parser.parse_args()

    db = asyncio.run(init_database(args.db_path))
    if db is None:
        logger.error("❌ Database initialization failed")
        sys.exit(1)

    try:
        if args.seed_demo:
            seed_demo_customers(db)
    finally:
        db.close()

    logger.info("=== Database Ready ===")
    logger.info(f"Database path: {Path(args.db_path).absolute()}")


if __name__ == "__main__":
    main()
