"""
Product Repository - Data Access Layer for Products

Handles all database queries for products and returns Product domain models.

Author: TM3
Date: 2026-10-12
"""
from decimal import Decimal
from typing import List, Optional

from orderdesk.core.config import DatabaseConfig
from orderdesk.core.database import execute, execute_statement
from orderdesk.domain.product import Product


class ProductRepository:
    """
    Repository for Product data access

    All SQL queries for products are centralized here.
    Returns Product domain models, not raw dictionaries.
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config

    @staticmethod
    def _map_row_to_product(row: dict) -> Product:
        """
        Helper method to map database row to Product domain model.

        price comes back as Decimal from NUMERIC columns; text or float values
        (other drivers, views) are normalized through str() to avoid binary
        float artifacts.
        """
        price = row['price']
        if not isinstance(price, Decimal):
            price = Decimal(str(price))

        return Product(
            product_id=row['product_id'],
            name=row['name'],
            description=row.get('description') or "",
            price=price,
            category=row.get('category'),
        )

    def find_all(self, product_id: Optional[str] = None, limit: int = 100) -> List[Product]:
        """
        Find products, optionally filtered by ID

        Args:
            product_id: Return only this product (at most one row)
            limit: Maximum results to return

        Returns:
            List of products (empty when nothing matches)
        """
        conditions = []
        params: list = []

        if product_id:
            conditions.append("product_id = %s")
            params.append(product_id)

        where_clause = " AND ".join(conditions) if conditions else "1=1"

        rows = execute(self.config, f"""
            SELECT product_id, name, description, price, category
            FROM products
            WHERE {where_clause}
            ORDER BY product_id
            LIMIT %s
        """, params + [limit])

        return [self._map_row_to_product(row) for row in rows]

    @staticmethod
    def exists(cursor, product_id: str) -> bool:
        """Check whether a product exists, inside an open unit of work"""
        rows = execute_statement(
            cursor,
            "SELECT product_id FROM products WHERE product_id = %s",
            (product_id,),
        )
        return len(rows) > 0
