"""
Order Domain Models

Order rows (denormalized with customer and product names for listings), the
request accepted by the transaction handler, and its result.

Author: TM3
Date: 2026-10-12
"""
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Order ids are plain digits, zero-padded to a fixed width ("0000001")
ORDER_ID_WIDTH = 7
DEFAULT_QUANTITY = 1
# orders.quantity is a 32-bit INTEGER column
MAX_QUANTITY = 2**31 - 1


def format_order_id(number: int) -> str:
    """Format a numeric order id with the fixed zero-padded width"""
    if number < 1:
        raise ValueError(f"Order number must be positive, got {number}")
    return str(number).zfill(ORDER_ID_WIDTH)


def normalize_quantity(quantity: Optional[int]) -> int:
    """Missing or non-positive quantities fall back to 1"""
    if quantity is None or quantity <= 0:
        return DEFAULT_QUANTITY
    return quantity


class Order(BaseModel):
    """
    Order domain model

    Fields:
        order_id: 7-digit zero-padded identifier
        customer_id: Reference to customer
        product_id: Reference to product
        quantity: Units ordered (positive)
        order_date: Calendar date the order was placed

        # Related data (optional, from JOINs)
        customer_name: Customer name (from JOIN)
        product_name: Product name (from JOIN)
    """

    order_id: str = Field(..., description="Order ID")
    customer_id: str = Field(..., description="Customer ID")
    product_id: str = Field(..., description="Product ID")
    quantity: int = Field(DEFAULT_QUANTITY, description="Quantity ordered", ge=1)
    order_date: date = Field(..., description="Order date")

    # Related data (from JOINs - optional)
    customer_name: Optional[str] = Field(None, description="Customer name (from JOIN)")
    product_name: Optional[str] = Field(None, description="Product name (from JOIN)")

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("order_date", mode="before")
    @classmethod
    def _timestamp_to_date(cls, value):
        # Some deployments store order_date as a timestamp
        if isinstance(value, datetime):
            return value.date()
        return value

    def to_dict(self) -> dict:
        """Serialize with the wire field names; OrderDate is YYYY-MM-DD"""
        return {
            "OrderID": self.order_id,
            "CustomerID": self.customer_id,
            "ProductID": self.product_id,
            "Quantity": self.quantity,
            "OrderDate": self.order_date.isoformat(),
            "CustomerName": self.customer_name,
            "ProductName": self.product_name,
        }


class OrderRequest(BaseModel):
    """Validated input for the transaction handler"""

    customer_id: str = Field(..., min_length=1)
    product_id: str = Field(..., min_length=1)
    quantity: Optional[int] = Field(None, le=MAX_QUANTITY)

    model_config = ConfigDict(str_strip_whitespace=True, coerce_numbers_to_str=True)

    @property
    def effective_quantity(self) -> int:
        return normalize_quantity(self.quantity)


class QueryFilter(BaseModel):
    """
    Validated filters for the list handlers

    Numbers are accepted and read as ids ("customerId": 1 -> "1"); any other
    non-string value is rejected before the store is queried.
    """

    customer_id: Optional[str] = Field(None, min_length=1)
    product_id: Optional[str] = Field(None, min_length=1)

    model_config = ConfigDict(str_strip_whitespace=True, coerce_numbers_to_str=True, frozen=True)


class OrderTransactionResult(BaseModel):
    """
    Outcome of a transactOrder call

    success=False is a business outcome (customer or product not found),
    not a system fault; faults are raised as TransactionError instead.
    """

    success: bool
    message: str
    order_id: Optional[str] = None
    not_found: Optional[str] = None  # "Customer" / "Product" when success is False

    def to_dict(self) -> dict:
        data = {"success": self.success, "message": self.message}
        if self.order_id is not None:
            data["orderId"] = self.order_id
        return data
