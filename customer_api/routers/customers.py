"""
Customer resource endpoints.

Access:
- GET /customers and GET /search are public
- GET/PUT/DELETE /customers/{customer_id} require a bearer token

Any authenticated user may read or change any customer; tokens are a
capability gate, not an ownership check.
"""

from fastapi import APIRouter, Depends, Query

from customer_api.auth.dependencies import require_token
from customer_api.dependencies import get_customer_store
from customer_api.errors import InternalError, NotFoundError, StorageError
from customer_api.models.customer import (
    CustomerListResponse,
    CustomerResponse,
    CustomerUpdate,
    MessageResponse,
)
from customer_api.models.user import TokenClaims
from customer_api.observability.logging import get_logger
from customer_api.storage.customers import CustomerStore

logger = get_logger(__name__)

router = APIRouter(tags=["Customers"])

CUSTOMER_NOT_FOUND = "Customer not found"


@router.get("/customers", response_model=CustomerListResponse)
async def list_customers(
    store: CustomerStore = Depends(get_customer_store),
) -> CustomerListResponse:
    """List every customer."""
    try:
        customers = await store.list_all()
    except StorageError as e:
        logger.error("Customer list failed", error=str(e))
        raise InternalError("Error fetching customers") from e

    return CustomerListResponse(customers=customers)


@router.get("/customers/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: str,
    store: CustomerStore = Depends(get_customer_store),
    user: TokenClaims = Depends(require_token),
) -> CustomerResponse:
    """
    Get a single customer.

    Raises:
        404: Customer not found
        500: Storage failure
    """
    try:
        customer = await store.get_by_id(customer_id)
    except StorageError as e:
        logger.error("Customer lookup failed", customer_id=customer_id, error=str(e))
        raise InternalError("Error fetching customer") from e

    if customer is None:
        raise NotFoundError(CUSTOMER_NOT_FOUND)

    return CustomerResponse(customer=customer)


@router.put("/customers/{customer_id}", response_model=MessageResponse)
async def update_customer(
    customer_id: str,
    update_data: CustomerUpdate | None = None,
    store: CustomerStore = Depends(get_customer_store),
    user: TokenClaims = Depends(require_token),
) -> MessageResponse:
    """
    Replace name, email, phone and company of a customer.

    Omitted fields are stored as NULL (no partial update).

    Raises:
        404: Customer not found
        500: Storage failure
    """
    try:
        changed = await store.update(customer_id, update_data or CustomerUpdate())
    except StorageError as e:
        logger.error("Customer update failed", customer_id=customer_id, error=str(e))
        raise InternalError("Error updating customer") from e

    if changed == 0:
        raise NotFoundError(CUSTOMER_NOT_FOUND)

    return MessageResponse(message="Customer updated successfully")


@router.delete("/customers/{customer_id}", response_model=MessageResponse)
async def delete_customer(
    customer_id: str,
    store: CustomerStore = Depends(get_customer_store),
    user: TokenClaims = Depends(require_token),
) -> MessageResponse:
    """
    Delete a customer.

    Raises:
        404: Customer not found
        500: Storage failure
    """
    try:
        deleted = await store.delete(customer_id)
    except StorageError as e:
        logger.error("Customer delete failed", customer_id=customer_id, error=str(e))
        raise InternalError("Error deleting customer") from e

    if deleted == 0:
        raise NotFoundError(CUSTOMER_NOT_FOUND)

    return MessageResponse(message="Customer deleted successfully")


@router.get("/search", response_model=CustomerListResponse)
async def search_customers(
    query: str | None = Query(default=None, description="Substring of name or email"),
    store: CustomerStore = Depends(get_customer_store),
) -> CustomerListResponse:
    """
    Case-insensitive partial match on name or email.

    An empty or missing query returns every customer.
    """
    try:
        customers = await store.search(query)
    except StorageError as e:
        logger.error("Customer search failed", error=str(e))
        raise InternalError("Error searching customers") from e

    return CustomerListResponse(customers=customers)
