"""
Customer resource models.

Customer rows pre-exist in the database (or are seeded out of band); the API
only reads, updates, deletes, lists and searches them.
"""

from pydantic import BaseModel, ConfigDict, Field

# Any value an SQLite column can hand back (BLOBs excepted); columns are not
# type-checked, so a legacy table may store a phone number as INTEGER
ColumnValue = str | int | float | None


class Customer(BaseModel):
    """
    Customer record.

    Extra columns of a pre-existing customers table are passed through.
    """

    model_config = ConfigDict(extra="allow")

    id: int | str = Field(..., description="Unique customer identifier")
    name: ColumnValue = None
    email: ColumnValue = None
    phone: ColumnValue = None
    company: ColumnValue = None


class CustomerUpdate(BaseModel):
    """
    Schema for PUT /customers/{id}.

    All four fields are written unconditionally: an omitted field
    overwrites the stored value with NULL.
    """

    name: ColumnValue = None
    email: ColumnValue = None
    phone: ColumnValue = None
    company: ColumnValue = None


class CustomerListResponse(BaseModel):
    """Response for list and search endpoints."""

    success: bool = True
    customers: list[Customer]


class CustomerResponse(BaseModel):
    """Response for single customer lookup."""

    success: bool = True
    customer: Customer


class MessageResponse(BaseModel):
    """Response for mutations."""

    success: bool = True
    message: str
