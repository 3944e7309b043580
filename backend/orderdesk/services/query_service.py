"""
Query Service
Read-only lookups for customers, products and orders

Every store failure is logged with its context and re-raised as a
RetrievalError carrying the original DataAccessError as __cause__.

Author: TM3
Date: 2026-10-13
"""
import logging
from typing import List, Optional

from orderdesk.core.config import DatabaseConfig
from orderdesk.core.exceptions import DataAccessError, RetrievalError
from orderdesk.domain.customer import Customer
from orderdesk.domain.order import Order
from orderdesk.domain.product import Product
from orderdesk.repositories.customer_repository import CustomerRepository
from orderdesk.repositories.order_repository import OrderRepository
from orderdesk.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)

DEFAULT_QUERY_LIMIT = 100


class QueryService:
    """
    Service for the three list operations

    No side effects; each call acquires and releases its own connection.
    """

    def __init__(self, config: DatabaseConfig, limit: int = DEFAULT_QUERY_LIMIT):
        self.limit = limit
        self.customer_repo = CustomerRepository(config)
        self.product_repo = ProductRepository(config)
        self.order_repo = OrderRepository(config)

    def list_customers(self, customer_id: Optional[str] = None) -> List[Customer]:
        """
        List customers, or the single customer matching customer_id

        Returns an empty list when the filter matches nothing.
        """
        logger.info(f"Listing customers (CustomerID={customer_id})")
        try:
            customers = self.customer_repo.find_all(customer_id=customer_id, limit=self.limit)
        except DataAccessError as e:
            logger.error(f"Error getting customers (CustomerID={customer_id}): {e}")
            raise RetrievalError("customers", cause=e) from e

        logger.info(f"Found {len(customers)} customers")
        return customers

    def list_products(self, product_id: Optional[str] = None) -> List[Product]:
        """List products, or the single product matching product_id"""
        logger.info(f"Listing products (ProductID={product_id})")
        try:
            products = self.product_repo.find_all(product_id=product_id, limit=self.limit)
        except DataAccessError as e:
            logger.error(f"Error getting products (ProductID={product_id}): {e}")
            raise RetrievalError("products", cause=e) from e

        logger.info(f"Found {len(products)} products")
        return products

    def list_orders(
        self,
        customer_id: Optional[str] = None,
        product_id: Optional[str] = None
    ) -> List[Order]:
        """
        List orders joined with customer and product names

        Both filters are ANDed when given. Most recent orders first.
        """
        logger.info(f"Listing orders (CustomerID={customer_id}, ProductID={product_id})")
        try:
            orders = self.order_repo.find_all(
                customer_id=customer_id,
                product_id=product_id,
                limit=self.limit
            )
        except DataAccessError as e:
            logger.error(f"Error getting orders (CustomerID={customer_id}, ProductID={product_id}): {e}")
            raise RetrievalError("orders", cause=e) from e

        logger.info(f"Found {len(orders)} orders")
        return orders
