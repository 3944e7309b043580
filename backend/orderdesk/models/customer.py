"""
Customers table
"""
from sqlalchemy import Column, String, Text

from orderdesk.core.database import Base


class Customer(Base):
    """
    Customers are seeded out-of-band and are read-only for the API
    """
    __tablename__ = "customers"

    customer_id = Column(String(10), primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50))
    address = Column(Text)

    def __repr__(self):
        return f"<Customer {self.customer_id}: {self.name}>"
