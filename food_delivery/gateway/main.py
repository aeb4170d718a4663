"""
API Gateway FastAPI Application.

Single public entry point of the food delivery system. Every ``/api/users*``
and ``/api/orders*`` route is relayed to the matching backend path (the
``/api/`` prefix becomes ``/``) on the Users or Orders service, with body and
query string forwarded verbatim. The gateway holds no state besides the two
service URLs.

Upstream failures become ``{"success": false, "message": ..., "error": ...}``.
The single-resource GETs keep the upstream status code; every other route
answers 500, unless ``GATEWAY_PROPAGATE_ALL_STATUS`` is set.

Attributes:
    app (FastAPI): The FastAPI application instance, API docs under /api-docs.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
import httpx
from fastapi import FastAPI, Depends, Request
from fastapi.responses import JSONResponse

from . import proxy
from .. import config
from ..errors import ServiceError, register_error_handlers
from ..server import iso_timestamp, serve

logger = logging.getLogger(__name__)

USER_BODY = {
    "type": "object",
    "required": ["name", "email", "phone", "address"],
    "properties": {
        "name": {"type": "string", "example": "Budi Santoso"},
        "email": {"type": "string", "example": "budi@example.com"},
        "phone": {"type": "string", "example": "081234567892"},
        "address": {"type": "string", "example": "Jl. Gatot Subroto No. 10, Jakarta"},
    },
}

ORDER_BODY = {
    "type": "object",
    "required": ["userId", "restaurantName", "items", "totalPrice"],
    "properties": {
        "userId": {"type": "integer", "example": 1},
        "restaurantName": {"type": "string", "example": "Sate Padang Ajo Ramon"},
        "items": {"type": "array", "items": {"type": "string"}, "example": ["Sate Padang", "Lontong", "Es Teh"]},
        "totalPrice": {"type": "integer", "example": 50000},
    },
}

ORDER_UPDATE_BODY = {
    "type": "object",
    "properties": {
        "status": {"type": "string", "enum": ["pending", "processing", "on_delivery", "delivered", "cancelled"]},
        "restaurantName": {"type": "string"},
        "items": {"type": "array", "items": {"type": "string"}},
        "totalPrice": {"type": "integer"},
    },
}

# Documented only, the query string is relayed untouched
USER_ID_FILTER = {
    "name": "userId",
    "in": "query",
    "required": False,
    "description": "Filter berdasarkan user ID",
    "schema": {"type": "integer"},
}


def json_body(schema: dict) -> dict:
    return {"requestBody": {"required": True, "content": {"application/json": {"schema": schema}}}}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Swagger UI available at /api-docs")
    logger.info("Connected to services:")
    logger.info(f"  - User Service: {config.USER_SERVICE_URL}")
    logger.info(f"  - Order Service: {config.ORDER_SERVICE_URL}")
    yield


app = FastAPI(
    title="Food Delivery System - API Gateway",
    version="2.0.0",
    description="API Gateway sebagai pintu masuk tunggal untuk Food Delivery System dengan SQLite Database",
    docs_url="/api-docs",
    openapi_url="/api-docs/openapi.json",
    redoc_url=None,
    lifespan=lifespan,
)
register_error_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    logger.info(f"[{iso_timestamp()}] {request.method} {url}")
    return await call_next(request)


async def relay(
    request: Request,
    base_url: str,
    message: str,
    transport: Optional[httpx.AsyncBaseTransport],
    propagate_status: bool = False,
) -> JSONResponse:
    """
    Forward the incoming request to a backend and mirror its answer.

    Args:
        request: Incoming gateway request
        base_url: Root URL of the backend service
        message: Failure summary for this route
        transport: Optional httpx transport (see proxy.get_transport)
        propagate_status: Keep the upstream status code on upstream errors

    Returns:
        JSONResponse with the upstream status and body

    Raises:
        ServiceError: When the upstream call fails
    """
    url = base_url + request.url.path.replace("/api/", "/", 1)
    body = await request.body() if request.method in ("POST", "PUT") else None
    try:
        response = await proxy.forward(
            request.method,
            url,
            params=request.url.query or None,
            content=body,
            content_type=request.headers.get("content-type"),
            transport=transport,
        )
        payload = response.json()
    except httpx.HTTPStatusError as e:
        keep_status = propagate_status or config.GATEWAY_PROPAGATE_ALL_STATUS
        status_code = e.response.status_code if keep_status else 500
        logger.warning(f"{request.method} {url} answered {e.response.status_code}")
        raise ServiceError(status_code, message, error=proxy.describe_failure(e))
    except httpx.HTTPError as e:
        logger.error(f"{request.method} {url} failed: {e!r}")
        raise ServiceError(500, message, error=proxy.describe_failure(e))
    except ValueError as e:
        logger.error(f"{request.method} {url} returned malformed JSON: {e}")
        raise ServiceError(500, message, error=f"Malformed JSON from upstream: {e}")
    return JSONResponse(status_code=response.status_code, content=payload)


@app.get("/health")
def health():
    """
    Health check of the gateway itself; the backends are not contacted.
    """
    return {
        "success": True,
        "message": "API Gateway is running",
        "timestamp": iso_timestamp(),
        "services": {
            "userService": config.USER_SERVICE_URL,
            "orderService": config.ORDER_SERVICE_URL,
        },
    }


# ===== USER SERVICE ROUTES =====

@app.get("/api/users", tags=["Users"], summary="Get all users (via User Service)")
async def list_users(request: Request, transport=Depends(proxy.get_transport)):
    return await relay(request, config.USER_SERVICE_URL, "Error fetching users", transport)


@app.get("/api/users/{user_id}", tags=["Users"], summary="Get user by ID (via User Service)")
async def get_user(user_id: int, request: Request, transport=Depends(proxy.get_transport)):
    return await relay(request, config.USER_SERVICE_URL, "Error fetching user", transport, propagate_status=True)


@app.post(
    "/api/users",
    tags=["Users"],
    summary="Create new user (via User Service)",
    status_code=201,
    openapi_extra=json_body(USER_BODY),
)
async def create_user(request: Request, transport=Depends(proxy.get_transport)):
    return await relay(request, config.USER_SERVICE_URL, "Error creating user", transport)


@app.put(
    "/api/users/{user_id}",
    tags=["Users"],
    summary="Update user (via User Service)",
    openapi_extra=json_body({k: v for k, v in USER_BODY.items() if k != "required"}),
)
async def update_user(user_id: int, request: Request, transport=Depends(proxy.get_transport)):
    return await relay(request, config.USER_SERVICE_URL, "Error updating user", transport)


@app.delete("/api/users/{user_id}", tags=["Users"], summary="Delete user (via User Service)")
async def delete_user(user_id: int, request: Request, transport=Depends(proxy.get_transport)):
    return await relay(request, config.USER_SERVICE_URL, "Error deleting user", transport)


# ===== ORDER SERVICE ROUTES =====

@app.get(
    "/api/orders",
    tags=["Orders"],
    summary="Get all orders (via Order Service)",
    openapi_extra={"parameters": [USER_ID_FILTER]},
)
async def list_orders(request: Request, transport=Depends(proxy.get_transport)):
    return await relay(request, config.ORDER_SERVICE_URL, "Error fetching orders", transport)


@app.get("/api/orders/{order_id}", tags=["Orders"], summary="Get order by ID (via Order Service)")
async def get_order(order_id: int, request: Request, transport=Depends(proxy.get_transport)):
    return await relay(request, config.ORDER_SERVICE_URL, "Error fetching order", transport, propagate_status=True)


@app.get(
    "/api/orders/{order_id}/with-user",
    tags=["Orders"],
    summary="Get order with user details (Service Integration)",
    description="Order Service memanggil User Service untuk melengkapi data pesanan",
)
async def get_order_with_user(order_id: int, request: Request, transport=Depends(proxy.get_transport)):
    return await relay(
        request, config.ORDER_SERVICE_URL, "Error fetching order with user", transport, propagate_status=True
    )


@app.post(
    "/api/orders",
    tags=["Orders"],
    summary="Create new order (via Order Service)",
    status_code=201,
    openapi_extra=json_body(ORDER_BODY),
)
async def create_order(request: Request, transport=Depends(proxy.get_transport)):
    return await relay(request, config.ORDER_SERVICE_URL, "Error creating order", transport)


@app.put(
    "/api/orders/{order_id}",
    tags=["Orders"],
    summary="Update order (via Order Service)",
    openapi_extra=json_body(ORDER_UPDATE_BODY),
)
async def update_order(order_id: int, request: Request, transport=Depends(proxy.get_transport)):
    return await relay(request, config.ORDER_SERVICE_URL, "Error updating order", transport)


@app.delete("/api/orders/{order_id}", tags=["Orders"], summary="Delete order (via Order Service)")
async def delete_order(order_id: int, request: Request, transport=Depends(proxy.get_transport)):
    return await relay(request, config.ORDER_SERVICE_URL, "Error deleting order", transport)


def run() -> None:
    serve("food_delivery.gateway.main:app", default_port=3000)


if __name__ == "__main__":
    run()
