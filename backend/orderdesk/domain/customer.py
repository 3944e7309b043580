"""
Customer Domain Model

Customers are created out-of-band (seed data) and are read-only for the API.

Author: TM3
Date: 2026-10-12
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Customer(BaseModel):
    """
    Customer domain model

    Fields:
        customer_id: Stable external identifier (e.g. "00001")
        name: Customer name
        email: Contact email
        phone: Contact phone (optional)
        address: Postal address (optional)
    """

    customer_id: str = Field(..., description="Customer ID")
    name: str = Field(..., description="Customer name")
    email: str = Field(..., description="Customer email")
    phone: Optional[str] = Field(None, description="Customer phone")
    address: Optional[str] = Field(None, description="Customer address")

    model_config = ConfigDict(from_attributes=True, frozen=True)

    def to_dict(self) -> dict:
        """Serialize with the wire field names (CustomerID, Name, ...)"""
        return {
            "CustomerID": self.customer_id,
            "Name": self.name,
            "Email": self.email,
            "Phone": self.phone,
            "Address": self.address,
        }
