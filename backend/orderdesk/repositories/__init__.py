"""
Repository Layer - Data Access

This layer handles all database queries and returns domain models.
Repositories abstract away SQL details from the handlers.

Author: TM3
Date: 2026-10-12
"""
from orderdesk.repositories.customer_repository import CustomerRepository
from orderdesk.repositories.product_repository import ProductRepository
from orderdesk.repositories.order_repository import OrderRepository

__all__ = [
    'CustomerRepository',
    'ProductRepository',
    'OrderRepository',
]
