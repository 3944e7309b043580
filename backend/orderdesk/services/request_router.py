"""
Request Router
Maps an operation name plus parameters onto a handler and wraps the
outcome in the response envelope

Operations: GetCustomers, GetProducts, GetOrders, TransactOrder.

Parameters are accepted under their wire names (CustomerID), camelCase
(customerId) or snake_case (customer_id). Empty strings count as absent;
numbers are read as ids and any other non-string value is a 400.
dispatch() never raises: every failure becomes an envelope with an HTTP
status code.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from orderdesk.core.config import DatabaseConfig
from orderdesk.core.exceptions import (
    OrderDeskError,
    RetrievalError,
    TransactionError,
    ValidationError,
)
from orderdesk.domain.envelope import ResponseEnvelope
from orderdesk.domain.order import OrderRequest, QueryFilter
from orderdesk.services.order_transaction_service import OrderTransactionService
from orderdesk.services.query_service import DEFAULT_QUERY_LIMIT, QueryService

logger = logging.getLogger(__name__)

GET_CUSTOMERS = "GetCustomers"
GET_PRODUCTS = "GetProducts"
GET_ORDERS = "GetOrders"
TRANSACT_ORDER = "TransactOrder"

OPERATIONS = (GET_CUSTOMERS, GET_PRODUCTS, GET_ORDERS, TRANSACT_ORDER)

PARAM_ALIASES = {
    "CustomerID": ("CustomerID", "customerId", "customer_id"),
    "ProductID": ("ProductID", "productId", "product_id"),
    "Quantity": ("Quantity", "quantity"),
}


@dataclass(frozen=True)
class RouterResponse:
    status_code: int
    body: Dict[str, Any]


def get_param(params: Mapping[str, Any], name: str) -> Any:
    """Look a parameter up under any of its aliases"""
    for alias in PARAM_ALIASES.get(name, (name,)):
        value = params.get(alias)
        if isinstance(value, str):
            value = value.strip()
        if value not in (None, ""):
            return value
    return None


class RequestRouter:
    """Dispatches operations to QueryService / OrderTransactionService"""

    def __init__(self, query_service: QueryService, transaction_service: OrderTransactionService):
        self.query_service = query_service
        self.transaction_service = transaction_service
        self._handlers: Dict[str, Callable[[Mapping[str, Any]], RouterResponse]] = {
            GET_CUSTOMERS: self._get_customers,
            GET_PRODUCTS: self._get_products,
            GET_ORDERS: self._get_orders,
            TRANSACT_ORDER: self._transact_order,
        }

    @classmethod
    def from_config(cls, config: DatabaseConfig, query_limit: int = DEFAULT_QUERY_LIMIT) -> "RequestRouter":
        return cls(QueryService(config, limit=query_limit), OrderTransactionService(config))

    def dispatch(self, operation: Optional[str], params: Optional[Mapping[str, Any]] = None) -> RouterResponse:
        """
        Run an operation and build its envelope

        Status codes: 200 reads, 201 order created, 400 bad request,
        404 referenced customer/product missing, 500 store failure.
        """
        params = params or {}

        if not operation:
            return self._error(400, "Missing action parameter")

        handler = self._handlers.get(operation) if isinstance(operation, str) else None
        if handler is None:
            logger.warning(f"Unsupported action requested: {operation!r}")
            return self._error(400, f"Unsupported action: {operation}")

        logger.info(f"Dispatching {operation}")
        try:
            return handler(params)
        except ValidationError as e:
            logger.info(f"Rejected {operation}: {e.message}")
            return self._error(400, e.message)
        except (RetrievalError, TransactionError) as e:
            cause = e.__cause__ or e.cause
            return self._error(500, e.message, error=str(cause) if cause else None)
        except OrderDeskError as e:
            logger.error(f"Error processing {operation}: {e}")
            return self._error(500, e.message)
        except Exception as e:
            logger.exception(f"Unexpected error processing {operation}")
            return self._error(500, "Internal server error", error=str(e))

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _get_customers(self, params: Mapping[str, Any]) -> RouterResponse:
        filters = self._parse_filters(params)
        customers = self.query_service.list_customers(filters.customer_id)
        return self._ok([customer.to_dict() for customer in customers])

    def _get_products(self, params: Mapping[str, Any]) -> RouterResponse:
        filters = self._parse_filters(params)
        products = self.query_service.list_products(filters.product_id)
        return self._ok([product.to_dict() for product in products])

    def _get_orders(self, params: Mapping[str, Any]) -> RouterResponse:
        filters = self._parse_filters(params)
        orders = self.query_service.list_orders(
            customer_id=filters.customer_id,
            product_id=filters.product_id,
        )
        return self._ok([order.to_dict() for order in orders])

    def _transact_order(self, params: Mapping[str, Any]) -> RouterResponse:
        request = self._parse_order_request(params)

        result = self.transaction_service.transact_order(
            request.customer_id,
            request.product_id,
            request.effective_quantity,
        )

        if result.success:
            return RouterResponse(201, result.to_dict())
        return RouterResponse(404, result.to_dict())

    # ------------------------------------------------------------------
    # Parameter parsing
    # ------------------------------------------------------------------

    @staticmethod
    def _invalid(error: PydanticValidationError) -> ValidationError:
        fields = ", ".join(str(err["loc"][0]) for err in error.errors() if err.get("loc"))
        return ValidationError(f"Invalid parameters: {fields}")

    @classmethod
    def _parse_filters(cls, params: Mapping[str, Any]) -> QueryFilter:
        try:
            return QueryFilter(
                customer_id=get_param(params, "CustomerID"),
                product_id=get_param(params, "ProductID"),
            )
        except PydanticValidationError as e:
            raise cls._invalid(e) from e

    @classmethod
    def _parse_order_request(cls, params: Mapping[str, Any]) -> OrderRequest:
        customer_id = get_param(params, "CustomerID")
        product_id = get_param(params, "ProductID")

        if customer_id is None or product_id is None:
            raise ValidationError("Missing required parameters: CustomerID and ProductID")

        try:
            return OrderRequest(
                customer_id=customer_id,
                product_id=product_id,
                quantity=get_param(params, "Quantity"),
            )
        except PydanticValidationError as e:
            raise cls._invalid(e) from e

    # ------------------------------------------------------------------
    # Envelope helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _ok(data) -> RouterResponse:
        return RouterResponse(200, ResponseEnvelope.ok(data).to_dict())

    @staticmethod
    def _error(status_code: int, message: str, error: Optional[str] = None) -> RouterResponse:
        return RouterResponse(status_code, ResponseEnvelope.failure(message, error=error).to_dict())
