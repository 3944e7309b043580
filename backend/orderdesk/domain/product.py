"""
Product Domain Model

Represents a catalog product. Prices are kept as Decimal internally and
serialized as JSON numbers.

Author: TM3
Date: 2026-10-12
"""
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """
    Product domain model

    Fields:
        product_id: Stable external identifier (e.g. "00001")
        name: Product name
        description: Product description
        price: Unit price, never negative
        category: Product category (optional)
    """

    product_id: str = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    description: str = Field("", description="Product description")
    price: Decimal = Field(..., description="Unit price", ge=0)
    category: Optional[str] = Field(None, description="Product category")

    model_config = ConfigDict(from_attributes=True, frozen=True)

    def to_dict(self) -> dict:
        """Serialize with the wire field names; Price is a float"""
        return {
            "ProductID": self.product_id,
            "Name": self.name,
            "Description": self.description,
            "Price": float(self.price),
            "Category": self.category,
        }
