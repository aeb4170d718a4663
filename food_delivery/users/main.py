"""
Users Service FastAPI Application.

This module implements the users microservice with full CRUD operations over
customer records persisted in a SQLite file (``DB_PATH``).

Endpoints:
    GET /users: List all users ordered by id
    GET /users/{user_id}: Get a single user
    POST /users: Create a user
    PUT /users/{user_id}: Update a user
    DELETE /users/{user_id}: Delete a user
    GET /health: Liveness check

Attributes:
    app (FastAPI): The FastAPI application instance, API docs under /api-docs.
"""
import logging
from contextlib import asynccontextmanager
from typing import Annotated
from fastapi import FastAPI, Depends, Path, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import crud, database, models, schemas
from .database import get_db
from ..errors import ServiceError, register_error_handlers, store_error
from ..server import iso_timestamp, serve

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User tidak ditemukan"

UserId = Annotated[int, Path(ge=models.MIN_INTEGER, le=models.MAX_INTEGER)]


@asynccontextmanager
async def lifespan(app: FastAPI):
    database.init_db()
    logger.info(f"Database: {database.DB_PATH}")
    logger.info("Swagger UI available at /api-docs")
    yield
    database.engine.dispose()
    logger.info("Database connection closed")


app = FastAPI(
    title="User Service API with SQLite",
    version="2.0.0",
    description="API untuk mengelola data pengguna menggunakan SQLite database",
    docs_url="/api-docs",
    openapi_url="/api-docs/openapi.json",
    redoc_url=None,
    lifespan=lifespan,
)
register_error_handlers(app)


@app.get("/health", response_model=schemas.HealthResponse)
def health():
    """
    Health check endpoint for the users service.

    Does not touch the store; answering at all means the process is up.
    """
    return {
        "success": True,
        "message": "User Service is running",
        "timestamp": iso_timestamp(),
    }


@app.get("/users", response_model=schemas.UserListResponse)
def list_users(db: Session = Depends(get_db)):
    """
    List all users ordered by id ascending.

    Returns:
        Envelope with the list of users
    """
    try:
        users = crud.get_users(db)
    except SQLAlchemyError as e:
        raise store_error("Error fetching users", e)
    return {"success": True, "data": users}


@app.get("/users/{user_id}", response_model=schemas.UserResponse)
def get_user(user_id: UserId, db: Session = Depends(get_db)):
    """
    Get a single user by ID.

    Raises:
        ServiceError: 404 if user not found, 500 on store error
    """
    try:
        db_user = crud.get_user(db, user_id=user_id)
    except SQLAlchemyError as e:
        raise store_error("Error fetching user", e)
    if db_user is None:
        raise ServiceError(404, USER_NOT_FOUND)
    return {"success": True, "data": db_user}


@app.post("/users", response_model=schemas.UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(user: schemas.UserCreate, db: Session = Depends(get_db)):
    """
    Create a new user.

    Args:
        user: name, email, phone and address, all required
        db: Database session (injected)

    Returns:
        Envelope with the created user, including its id and created_at

    Raises:
        ServiceError: 500 on store error, including a duplicate email
    """
    try:
        db_user = crud.create_user(db, user=user)
    except SQLAlchemyError as e:
        raise store_error("Error creating user", e)
    logger.info(f"Created user {db_user.id} <{db_user.email}>")
    return {"success": True, "data": db_user}


@app.put("/users/{user_id}", response_model=schemas.UserResponse)
def update_user(user_id: UserId, user: schemas.UserUpdate, db: Session = Depends(get_db)):
    """
    Update an existing user. Fields left out of the body keep their value.

    Raises:
        ServiceError: 404 if user not found, 500 on store error
    """
    try:
        db_user = crud.update_user(db, user_id=user_id, user=user)
    except SQLAlchemyError as e:
        raise store_error("Error updating user", e)
    if db_user is None:
        raise ServiceError(404, USER_NOT_FOUND)
    return {"success": True, "data": db_user}


@app.delete("/users/{user_id}", response_model=schemas.MessageResponse)
def delete_user(user_id: UserId, db: Session = Depends(get_db)):
    """
    Delete a user.

    Raises:
        ServiceError: 404 if user not found, 500 on store error
    """
    try:
        deleted = crud.delete_user(db, user_id=user_id)
    except SQLAlchemyError as e:
        raise store_error("Error deleting user", e)
    if not deleted:
        raise ServiceError(404, USER_NOT_FOUND)
    logger.info(f"Deleted user {user_id}")
    return {"success": True, "message": "User berhasil dihapus"}


def run() -> None:
    serve("food_delivery.users.main:app", default_port=3001)


if __name__ == "__main__":
    run()
