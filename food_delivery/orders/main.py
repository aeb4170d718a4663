"""
Orders Service API

This module implements the orders microservice with full CRUD operations over
orders persisted in a SQLite file (``DB_PATH``), plus a composite read that
enriches an order with its user fetched from the Users service.

Endpoints:
    GET /orders: List orders newest first, optionally filtered by ?userId=
    GET /orders/{order_id}: Get a single order
    GET /orders/{order_id}/with-user: Get an order with its user details
    POST /orders: Create a new order (status pending)
    PUT /orders/{order_id}: Update status, restaurant, items or total
    DELETE /orders/{order_id}: Delete an order
    GET /health: Liveness check

Attributes:
    app (FastAPI): The FastAPI application instance, API docs under /api-docs.
"""
import logging
from contextlib import asynccontextmanager
from typing import Annotated, Optional
import httpx
from fastapi import FastAPI, Depends, Path, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import crud, database, models, schemas
from .clients import users_client
from .database import get_db
from .. import config
from ..errors import ServiceError, register_error_handlers, store_error
from ..server import iso_timestamp, serve

logger = logging.getLogger(__name__)

ORDER_NOT_FOUND = "Order tidak ditemukan"

OrderId = Annotated[int, Path(ge=models.MIN_INTEGER, le=models.MAX_INTEGER)]


@asynccontextmanager
async def lifespan(app: FastAPI):
    database.init_db()
    logger.info(f"Database: {database.DB_PATH}")
    logger.info(f"User Service: {config.USER_SERVICE_URL}")
    logger.info("Swagger UI available at /api-docs")
    yield
    database.engine.dispose()
    logger.info("Database connection closed")


app = FastAPI(
    title="Order Service API with SQLite",
    version="2.0.0",
    description="API untuk mengelola pesanan menggunakan SQLite database",
    docs_url="/api-docs",
    openapi_url="/api-docs/openapi.json",
    redoc_url=None,
    lifespan=lifespan,
)
register_error_handlers(app)


@app.get("/health", response_model=schemas.HealthResponse)
def health():
    """
    Health check endpoint for the orders service.

    Neither the store nor the Users service is contacted.
    """
    return {
        "success": True,
        "message": "Order Service is running",
        "timestamp": iso_timestamp(),
    }


@app.get("/orders", response_model=schemas.OrderListResponse)
def list_orders(
    user_id: Optional[int] = Query(
        default=None,
        alias="userId",
        ge=models.MIN_INTEGER,
        le=models.MAX_INTEGER,
        description="Filter berdasarkan user ID",
    ),
    db: Session = Depends(get_db),
):
    """
    List orders ordered by id descending.

    Args:
        user_id: Only orders of this user when given (query ``userId``)
        db: Database session (injected)

    Returns:
        Envelope with the list of orders
    """
    try:
        orders = crud.get_orders(db, user_id=user_id)
    except SQLAlchemyError as e:
        raise store_error("Error fetching orders", e)
    return {"success": True, "data": orders}


@app.get("/orders/{order_id}", response_model=schemas.OrderResponse)
def get_order(order_id: OrderId, db: Session = Depends(get_db)):
    """
    Get a single order by ID.

    Raises:
        ServiceError: 404 if order not found, 500 on store error
    """
    try:
        db_order = crud.get_order(db, order_id=order_id)
    except SQLAlchemyError as e:
        raise store_error("Error fetching order", e)
    if db_order is None:
        raise ServiceError(404, ORDER_NOT_FOUND)
    return {"success": True, "data": db_order}


@app.get("/orders/{order_id}/with-user", response_model=schemas.OrderWithUserResponse)
async def get_order_with_user(
    order_id: OrderId,
    db: Session = Depends(get_db),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(users_client.get_transport),
):
    """
    Get an order together with its user, fetched from the Users service.

    The order is read first; when it does not exist the Users service is not
    called at all. Otherwise one GET is issued to the Users service and its
    ``data`` object becomes ``userDetails``.

    Raises:
        ServiceError: 404 if order not found, 500 on store error or when the
            user cannot be fetched
    """
    try:
        db_order = crud.get_order(db, order_id=order_id)
    except SQLAlchemyError as e:
        raise store_error("Error fetching order", e)
    if db_order is None:
        raise ServiceError(404, ORDER_NOT_FOUND)

    order = schemas.Order.model_validate(db_order)
    try:
        user = await users_client.get_user(order.user_id, transport=transport)
    except users_client.UserServiceError as e:
        raise ServiceError(500, "Gagal mengambil data user", error=str(e))

    return {
        "success": True,
        "data": schemas.OrderWithUser(**order.model_dump(), user_details=user),
    }


@app.post("/orders", response_model=schemas.OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(order: schemas.OrderCreate, db: Session = Depends(get_db)):
    """
    Create a new order. Status always starts as pending.

    Args:
        order: userId, restaurantName, items and totalPrice, all required
        db: Database session (injected)

    Returns:
        Envelope with the created order

    Raises:
        ServiceError: 500 on store error
    """
    try:
        db_order = crud.create_order(db=db, order=order)
    except SQLAlchemyError as e:
        raise store_error("Error creating order", e)
    logger.info(f"Created order {db_order.id} for user {db_order.user_id}")
    return {"success": True, "data": db_order}


@app.put("/orders/{order_id}", response_model=schemas.OrderResponse)
def update_order(order_id: OrderId, order: schemas.OrderUpdate, db: Session = Depends(get_db)):
    """
    Update an existing order. Only the supplied fields are written.

    Raises:
        ServiceError: 400 if no updatable field is supplied, 404 if order not
            found, 500 on store error
    """
    values = crud.build_update_values(order)
    if not values:
        raise ServiceError(400, "Tidak ada field yang diupdate")

    try:
        db_order = crud.update_order(db, order_id=order_id, values=values)
    except SQLAlchemyError as e:
        raise store_error("Error updating order", e)
    if db_order is None:
        raise ServiceError(404, ORDER_NOT_FOUND)
    return {"success": True, "data": db_order}


@app.delete("/orders/{order_id}", response_model=schemas.MessageResponse)
def delete_order(order_id: OrderId, db: Session = Depends(get_db)):
    """
    Delete an order.

    Raises:
        ServiceError: 404 if order not found, 500 on store error
    """
    try:
        deleted = crud.delete_order(db, order_id=order_id)
    except SQLAlchemyError as e:
        raise store_error("Error deleting order", e)
    if not deleted:
        raise ServiceError(404, ORDER_NOT_FOUND)
    logger.info(f"Deleted order {order_id}")
    return {"success": True, "message": "Order berhasil dihapus"}


def run() -> None:
    serve("food_delivery.orders.main:app", default_port=3002)


if __name__ == "__main__":
    run()
