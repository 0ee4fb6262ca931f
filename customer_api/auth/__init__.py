"""
Authentication for the Customer API.

Security:
- Passwords hashed with bcrypt (salted, adaptive cost)
- Stateless HS256 bearer tokens with a 1 hour lifetime
- Token check as a FastAPI dependency (require_token)
"""

from customer_api.auth.dependencies import (
    extract_bearer_token,
    get_auth_service,
    get_token_service,
    require_token,
)
from customer_api.auth.passwords import PasswordHasher
from customer_api.auth.service import AuthService
from customer_api.auth.tokens import TokenService

__all__ = [
    "AuthService",
    "PasswordHasher",
    "TokenService",
    "extract_bearer_token",
    "get_auth_service",
    "get_token_service",
    "require_token",
]
