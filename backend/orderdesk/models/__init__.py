"""
Modelos de base de datos

SQLAlchemy declarative models for the three tables the API works on.
They are used to create the schema; request handlers query with psycopg2.
"""
from .customer import Customer
from .product import Product
from .order import Order

__all__ = [
    "Customer",
    "Product",
    "Order",
]
