"""
Products table
"""
from sqlalchemy import CheckConstraint, Column, DECIMAL, String, Text

from orderdesk.core.database import Base


class Product(Base):
    """
    Product catalog (read-only for the API)
    """
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
    )

    product_id = Column(String(10), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(DECIMAL(10, 2), nullable=False)
    category = Column(String(100))

    def __repr__(self):
        return f"<Product {self.product_id}: {self.name}>"
