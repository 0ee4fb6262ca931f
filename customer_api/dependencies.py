"""
FastAPI dependencies exposing process-scoped storage.

Everything is built once in create_app()/lifespan and stored on app.state;
handlers receive it through Depends(), never through module globals.
"""

from fastapi import Request

from customer_api.storage.customers import CustomerStore
from customer_api.storage.database import Database


def get_database(request: Request) -> Database:
    """Shared database handle."""
    return request.app.state.database


def get_customer_store(request: Request) -> CustomerStore:
    """Customer resource store."""
    return request.app.state.customer_store
