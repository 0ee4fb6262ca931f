"""
API routers for the Customer API.

Routers:
- auth: register, login, protected-route
- customers: customer CRUD and search
"""

from customer_api.routers.auth import router as auth_router
from customer_api.routers.customers import router as customers_router

__all__ = ["auth_router", "customers_router"]
