"""
Domain Layer - Business Entities

Pydantic models for customers, products and orders, plus the response
envelope. Each entity serializes itself with the wire field names through
to_dict().

Author: TM3
Date: 2026-10-12
"""
from orderdesk.domain.customer import Customer
from orderdesk.domain.product import Product
from orderdesk.domain.order import (
    MAX_QUANTITY,
    ORDER_ID_WIDTH,
    Order,
    OrderRequest,
    OrderTransactionResult,
    QueryFilter,
    format_order_id,
    normalize_quantity,
)
from orderdesk.domain.envelope import ResponseEnvelope

__all__ = [
    'Customer',
    'Product',
    'Order',
    'OrderRequest',
    'OrderTransactionResult',
    'QueryFilter',
    'ResponseEnvelope',
    'MAX_QUANTITY',
    'ORDER_ID_WIDTH',
    'format_order_id',
    'normalize_quantity',
]
