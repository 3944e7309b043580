"""
Order Repository - Data Access Layer for Orders

Handles all database queries for orders and returns Order domain models.
Read queries open their own connection; the write path methods take the
cursor of the caller's unit of work so that lock, id allocation and insert
share one transaction.

Author: TM3
Date: 2026-10-12
"""
from typing import List, Optional

from orderdesk.core.config import DatabaseConfig
from orderdesk.core.database import execute, execute_statement
from orderdesk.domain.order import Order, format_order_id


class OrderRepository:
    """
    Repository for Order data access

    All SQL queries for orders are centralized here.
    Returns Order domain models with customer and product names joined in.
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config

    @staticmethod
    def _map_row_to_order(row: dict) -> Order:
        return Order(
            order_id=row['order_id'],
            customer_id=row['customer_id'],
            product_id=row['product_id'],
            quantity=int(row['quantity']),
            order_date=row['order_date'],
            customer_name=row.get('customer_name'),
            product_name=row.get('product_name'),
        )

    def find_all(
        self,
        customer_id: Optional[str] = None,
        product_id: Optional[str] = None,
        limit: int = 100
    ) -> List[Order]:
        """
        Find orders with filters, most recent first

        Args:
            customer_id: Filter by customer
            product_id: Filter by product (ANDed with customer_id)
            limit: Maximum results to return

        Returns:
            List of orders with customer_name and product_name
        """
        conditions = []
        params: list = []

        if customer_id:
            conditions.append("o.customer_id = %s")
            params.append(customer_id)

        if product_id:
            conditions.append("o.product_id = %s")
            params.append(product_id)

        where_clause = " AND ".join(conditions) if conditions else "1=1"

        rows = execute(self.config, f"""
            SELECT
                o.order_id, o.customer_id, o.product_id,
                o.quantity, o.order_date,
                c.name as customer_name,
                p.name as product_name
            FROM orders o
            JOIN customers c ON o.customer_id = c.customer_id
            JOIN products p ON o.product_id = p.product_id
            WHERE {where_clause}
            ORDER BY o.order_date DESC, o.order_id DESC
            LIMIT %s
        """, params + [limit])

        return [self._map_row_to_order(row) for row in rows]

    # ------------------------------------------------------------------
    # Write path (runs inside the caller's unit of work)
    # ------------------------------------------------------------------

    @staticmethod
    def lock_for_id_allocation(cursor) -> None:
        """
        Serialize order id allocation until the transaction ends

        SHARE ROW EXCLUSIVE conflicts with itself and with the ROW EXCLUSIVE
        lock taken by INSERT, so no other transaction can allocate or insert
        an order between our max() read and our insert. Plain SELECTs are
        not blocked.
        """
        execute_statement(cursor, "LOCK TABLE orders IN SHARE ROW EXCLUSIVE MODE")

    @staticmethod
    def next_order_id(cursor) -> str:
        """
        Compute max(numeric order id) + 1, zero-padded

        Ids that are not purely numeric are ignored.
        """
        rows = execute_statement(cursor, """
            SELECT COALESCE(MAX(CAST(order_id AS BIGINT)), 0) AS max_id
            FROM orders
            WHERE order_id ~ '^[0-9]+$'
        """)
        max_id = rows[0]['max_id'] if rows else 0
        return format_order_id(int(max_id or 0) + 1)

    @classmethod
    def insert(
        cls,
        cursor,
        order_id: str,
        customer_id: str,
        product_id: str,
        quantity: int
    ) -> Order:
        """Insert an order dated today and return it"""
        rows = execute_statement(cursor, """
            INSERT INTO orders (order_id, customer_id, product_id, quantity, order_date)
            VALUES (%s, %s, %s, %s, CURRENT_DATE)
            RETURNING order_id, customer_id, product_id, quantity, order_date
        """, (order_id, customer_id, product_id, quantity))
        return cls._map_row_to_order(rows[0])
