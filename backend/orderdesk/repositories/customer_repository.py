"""
Customer Repository - Data Access Layer for Customers

Handles all database queries for customers and returns Customer domain models.

Author: TM3
Date: 2026-10-12
"""
from typing import List, Optional

from orderdesk.core.config import DatabaseConfig
from orderdesk.core.database import execute, execute_statement
from orderdesk.domain.customer import Customer


class CustomerRepository:
    """
    Repository for Customer data access

    All SQL queries for customers are centralized here.
    Returns Customer domain models, not raw dictionaries.
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config

    @staticmethod
    def _map_row_to_customer(row: dict) -> Customer:
        return Customer(
            customer_id=row['customer_id'],
            name=row['name'],
            email=row['email'],
            phone=row.get('phone'),
            address=row.get('address'),
        )

    def find_all(self, customer_id: Optional[str] = None, limit: int = 100) -> List[Customer]:
        """
        Find customers, optionally filtered by ID

        Args:
            customer_id: Return only this customer (at most one row)
            limit: Maximum results to return

        Returns:
            List of customers (empty when nothing matches)
        """
        conditions = []
        params: list = []

        if customer_id:
            conditions.append("customer_id = %s")
            params.append(customer_id)

        where_clause = " AND ".join(conditions) if conditions else "1=1"

        rows = execute(self.config, f"""
            SELECT customer_id, name, email, phone, address
            FROM customers
            WHERE {where_clause}
            ORDER BY customer_id
            LIMIT %s
        """, params + [limit])

        return [self._map_row_to_customer(row) for row in rows]

    @staticmethod
    def exists(cursor, customer_id: str) -> bool:
        """Check whether a customer exists, inside an open unit of work"""
        rows = execute_statement(
            cursor,
            "SELECT customer_id FROM customers WHERE customer_id = %s",
            (customer_id,),
        )
        return len(rows) > 0
