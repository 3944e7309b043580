"""
Operations API Endpoints
HTTP bindings for GetCustomers, GetProducts, GetOrders and TransactOrder

Two bindings of the same contract:
- one path per operation (GET /GetCustomers?CustomerID=..., POST /TransactOrder)
- a single payload endpoint (POST /invoke with {"action": ..., ...})

Routes are plain `def` functions: psycopg2 blocks, so FastAPI runs them in
its threadpool.

Author: TM3
Date: 2026-10-13
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from orderdesk.core.config import DatabaseConfig
from orderdesk.services.request_router import (
    GET_CUSTOMERS,
    GET_ORDERS,
    GET_PRODUCTS,
    TRANSACT_ORDER,
    RequestRouter,
    RouterResponse,
)

router = APIRouter()


def get_database_config(request: Request) -> DatabaseConfig:
    """FastAPI dependency: the DatabaseConfig resolved at startup"""
    return request.app.state.db_config


def get_request_router(
    request: Request,
    config: DatabaseConfig = Depends(get_database_config),
) -> RequestRouter:
    """FastAPI dependency: a RequestRouter bound to the startup config"""
    return RequestRouter.from_config(config, query_limit=request.app.state.settings.QUERY_LIMIT)


def _respond(result: RouterResponse) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body)


async def _json_body(request: Request) -> Dict[str, Any]:
    """Parse the JSON body; anything that is not a JSON object counts as empty"""
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


@router.get("/GetCustomers")
def get_customers(
    customer_id: Optional[str] = Query(None, alias="CustomerID", description="Return only this customer"),
    request_router: RequestRouter = Depends(get_request_router),
):
    """List customers (at most 100), or one customer by ID"""
    return _respond(request_router.dispatch(GET_CUSTOMERS, {"CustomerID": customer_id}))


@router.get("/GetProducts")
def get_products(
    product_id: Optional[str] = Query(None, alias="ProductID", description="Return only this product"),
    request_router: RequestRouter = Depends(get_request_router),
):
    """List products (at most 100), or one product by ID"""
    return _respond(request_router.dispatch(GET_PRODUCTS, {"ProductID": product_id}))


@router.get("/GetOrders")
def get_orders(
    customer_id: Optional[str] = Query(None, alias="CustomerID", description="Filter by customer"),
    product_id: Optional[str] = Query(None, alias="ProductID", description="Filter by product"),
    request_router: RequestRouter = Depends(get_request_router),
):
    """
    List orders with customer and product names, most recent first

    Filters are ANDed when both are given.
    """
    return _respond(request_router.dispatch(
        GET_ORDERS,
        {"CustomerID": customer_id, "ProductID": product_id},
    ))


@router.post("/TransactOrder")
def transact_order(
    body: Dict[str, Any] = Depends(_json_body),
    request_router: RequestRouter = Depends(get_request_router),
):
    """
    Create an order

    Body: {"CustomerID": "00001", "ProductID": "00001", "Quantity": 1}

    Returns 201 with orderId, 404 when the customer or product does not
    exist, 400 when CustomerID or ProductID is missing.
    """
    return _respond(request_router.dispatch(TRANSACT_ORDER, body))


@router.post("/invoke")
def invoke(
    payload: Dict[str, Any] = Depends(_json_body),
    request_router: RequestRouter = Depends(get_request_router),
):
    """
    Single-payload binding

    Body: {"action": "GetOrders", "customerId": "00001", "productId": "00002"}
    ("operation" is accepted in place of "action"; parameters may also be
    nested under "parameters")
    """
    operation = payload.get("action") or payload.get("operation")

    params = dict(payload)
    nested = payload.get("parameters")
    if isinstance(nested, dict):
        params.update(nested)

    return _respond(request_router.dispatch(operation, params))
