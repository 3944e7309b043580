"""
Order Transaction Service
Records a purchase as a single all-or-nothing unit of work

Steps (one transaction):
1. Verify the customer exists
2. Verify the product exists
3. Lock order id allocation and compute max(id) + 1
4. Insert the order dated today
5. Commit

Any exception inside the unit of work rolls the whole transaction back, so
a partially written order is never visible. "Not found" is a business
outcome reported in the result; store failures raise TransactionError.

Author: TM3
Date: 2026-10-13
"""
import logging
from typing import Optional

from orderdesk.core.config import DatabaseConfig
from orderdesk.core.database import unit_of_work
from orderdesk.core.exceptions import DataAccessError, NotFoundError, TransactionError
from orderdesk.domain.order import OrderTransactionResult, normalize_quantity
from orderdesk.repositories.customer_repository import CustomerRepository
from orderdesk.repositories.order_repository import OrderRepository
from orderdesk.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class OrderTransactionService:
    """Service for creating orders"""

    def __init__(self, config: DatabaseConfig):
        self.config = config

    def transact_order(
        self,
        customer_id: str,
        product_id: str,
        quantity: Optional[int] = None
    ) -> OrderTransactionResult:
        """
        Create an order for an existing customer and product

        Args:
            customer_id: Customer placing the order
            product_id: Product being ordered
            quantity: Units; missing or non-positive values become 1

        Returns:
            OrderTransactionResult (success=False when customer/product is missing)

        Raises:
            TransactionError: store failure; the transaction was rolled back
        """
        quantity = normalize_quantity(quantity)

        try:
            with unit_of_work(self.config) as cursor:
                if not CustomerRepository.exists(cursor, customer_id):
                    raise NotFoundError("Customer", customer_id)

                if not ProductRepository.exists(cursor, product_id):
                    raise NotFoundError("Product", product_id)

                OrderRepository.lock_for_id_allocation(cursor)
                order_id = OrderRepository.next_order_id(cursor)

                order = OrderRepository.insert(
                    cursor,
                    order_id=order_id,
                    customer_id=customer_id,
                    product_id=product_id,
                    quantity=quantity
                )

        except NotFoundError as e:
            logger.info(f"Order not created: {e.message}")
            return OrderTransactionResult(success=False, message=e.message, not_found=e.entity)

        except DataAccessError as e:
            logger.error(
                f"Error creating order (CustomerID={customer_id}, ProductID={product_id}), "
                f"transaction rolled back: {e}"
            )
            raise TransactionError(cause=e) from e

        logger.info(f"Order {order.order_id} created successfully "
                    f"(CustomerID={customer_id}, ProductID={product_id}, Quantity={quantity})")
        return OrderTransactionResult(
            success=True,
            message=f"Order {order.order_id} created successfully",
            order_id=order.order_id
        )
