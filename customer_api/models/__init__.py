"""
Data models for the Customer API.

Models:
- user: User identity, token claims, register/login bodies
- customer: Customer records and response envelopes
"""

from customer_api.models.customer import (
    Customer,
    CustomerListResponse,
    CustomerResponse,
    CustomerUpdate,
    MessageResponse,
)
from customer_api.models.user import (
    LoginRequest,
    RegisterRequest,
    TokenClaims,
    TokenResponse,
    User,
)

__all__ = [
    "Customer",
    "CustomerListResponse",
    "CustomerResponse",
    "CustomerUpdate",
    "MessageResponse",
    "LoginRequest",
    "RegisterRequest",
    "TokenClaims",
    "TokenResponse",
    "User",
]
