"""
Orders table
"""
from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Integer, String
from sqlalchemy.sql import func

from orderdesk.core.database import Base


class Order(Base):
    """
    One row per purchase: a quantity of one product for one customer

    order_id is a 7-digit zero-padded string allocated by the transaction
    handler; the primary key is the last line of defence against duplicates.
    """
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_orders_quantity_positive"),
    )

    order_id = Column(String(10), primary_key=True)

    # Relaciones
    customer_id = Column(String(10), ForeignKey("customers.customer_id"), nullable=False, index=True)
    product_id = Column(String(10), ForeignKey("products.product_id"), nullable=False, index=True)

    quantity = Column(Integer, nullable=False, default=1, server_default="1")
    order_date = Column(Date, nullable=False, server_default=func.current_date(), index=True)

    def __repr__(self):
        return f"<Order {self.order_id}: {self.customer_id} x{self.quantity} {self.product_id}>"
