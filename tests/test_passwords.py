"""
Tests for bcrypt password hashing.
"""

import pytest

from customer_api.auth.passwords import PasswordHasher


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


def test_hash_is_self_describing_bcrypt(hasher):
    password_hash = hasher.hash("secret1")

    assert password_hash.startswith("$2b$04$")
    assert "secret1" not in password_hash


def test_hash_is_salted(hasher):
    """Identical passwords produce different stored values."""
    assert hasher.hash("secret1") != hasher.hash("secret1")


def test_verify_matches_hashed_password(hasher):
    password_hash = hasher.hash("secret1")

    assert hasher.verify("secret1", password_hash) is True
    assert hasher.verify("secret2", password_hash) is False
    assert hasher.verify("Secret1", password_hash) is False


def test_verify_uses_cost_embedded_in_hash():
    """A hash made at one cost verifies with a hasher configured for another."""
    password_hash = PasswordHasher(rounds=5).hash("secret1")

    assert PasswordHasher(rounds=4).verify("secret1", password_hash) is True


def test_hash_rejects_password_over_72_bytes(hasher):
    with pytest.raises(ValueError):
        hasher.hash("x" * 73)


def test_verify_rejects_password_over_72_bytes(hasher):
    password_hash = hasher.hash("x" * 72)

    assert hasher.verify("x" * 73, password_hash) is False


@pytest.mark.asyncio
async def test_async_variants(hasher):
    password_hash = await hasher.hash_async("secret1")

    assert await hasher.verify_async("secret1", password_hash) is True
    assert await hasher.verify_async("wrong-pw", password_hash) is False
