"""
Pytest configuration and fixtures.

Provides shared fixtures for:
- Test settings (temporary SQLite file, fixed signing secret, cheap bcrypt)
- Initialized database with seeded customers
- FastAPI test client with lifespan
- Registered user and bearer token headers
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from customer_api.auth.passwords import PasswordHasher
from customer_api.auth.service import AuthService
from customer_api.auth.tokens import TokenService
from customer_api.config import (
    DatabaseConfig,
    JWTConfig,
    LoggingConfig,
    PasswordConfig,
    Settings,
)
from customer_api.main import create_app
from customer_api.storage.customers import CustomerStore
from customer_api.storage.database import Database
from customer_api.storage.users import UserStore

TEST_SECRET = "test-secret-key-for-signing-tokens-0123456789"

SEED_CUSTOMERS = [
    (1, "Alice Johnson", "alice@acme.example", "555-0101", "Acme Corp"),
    (2, "Bob Smith", "bob@globex.example", "555-0102", "Globex"),
    (3, "Carol White", "carol@initech.example", "555-0103", "Initech"),
]


def seed_customers(db: Database) -> None:
    """Insert the seed customers (rows are created out of band, never via the API)."""
    db.connection.executemany(
        "INSERT INTO customers (id, name, email, phone, company) VALUES (?, ?, ?, ?, ?)",
        SEED_CUSTOMERS,
    )
    db.connection.commit()


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Create test settings backed by a temporary database file."""
    return Settings(
        jwt=JWTConfig(secret=TEST_SECRET),
        password=PasswordConfig(bcrypt_rounds=4),  # Minimum cost keeps tests fast
        database=DatabaseConfig(path=str(tmp_path / "customer.db")),
        logging=LoggingConfig(json_output=False),
    )


@pytest.fixture
async def database(tmp_path) -> Database:
    """Initialized database with seed customers."""
    db = Database(db_path=str(tmp_path / "store.db"))
    await db.initialize()
    seed_customers(db)
    yield db
    db.close()


@pytest.fixture
def customer_store(database: Database) -> CustomerStore:
    return CustomerStore(database)


@pytest.fixture
def user_store(database: Database) -> UserStore:
    return UserStore(database)


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(secret=TEST_SECRET, expires_in=timedelta(hours=1))


@pytest.fixture
def auth_service(user_store: UserStore, token_service: TokenService) -> AuthService:
    return AuthService(users=user_store, hasher=PasswordHasher(rounds=4), tokens=token_service)


@pytest.fixture
def app_client(test_settings: Settings):
    """FastAPI test client with lifespan (database opened) and seed customers."""
    app = create_app(test_settings)

    with TestClient(app) as client:
        seed_customers(app.state.database)
        yield client


@pytest.fixture
def registered_user(app_client: TestClient) -> dict:
    """Register a user through the API and return its credentials and token."""
    user = {"name": "Ann", "email": "ann@x.com", "password": "secret1"}
    response = app_client.post("/register", json=user)
    assert response.status_code == 200
    return {**user, "token": response.json()["jwtToken"]}


@pytest.fixture
def auth_headers(registered_user: dict) -> dict:
    """Authorization header carrying a valid bearer token."""
    return {"Authorization": f"Bearer {registered_user['token']}"}
