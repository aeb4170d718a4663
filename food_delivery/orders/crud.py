"""
CRUD (Create, Read, Update, Delete) operations for the Orders service.

This module contains all database operations for order management. The
``items`` column holds a compact JSON array so files stay readable by other
implementations sharing the same schema.
"""
import json
import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from . import models, schemas

# Set up logging
logger = logging.getLogger(__name__)

SEED_ORDERS = [
    {
        "user_id": 1,
        "restaurant_name": "Nasi Goreng Kambing",
        "items": ["Nasi Goreng Kambing", "Es Teh Manis"],
        "total_price": 45000,
        "status": schemas.OrderStatus.DELIVERED.value,
    },
    {
        "user_id": 2,
        "restaurant_name": "Ayam Geprek Bensu",
        "items": ["Ayam Geprek Level 5", "Jus Alpukat"],
        "total_price": 35000,
        "status": schemas.OrderStatus.ON_DELIVERY.value,
    },
]


def encode_items(items: List[str]) -> str:
    return json.dumps(list(items), separators=(",", ":"), ensure_ascii=False)


def get_order(db: Session, order_id: int) -> Optional[models.Order]:
    """
    Retrieve a single order by ID.

    Args:
        db: Database session
        order_id: ID of the order to retrieve

    Returns:
        Order object or None if not found
    """
    return db.query(models.Order).filter(models.Order.id == order_id).first()


def get_orders(db: Session, user_id: Optional[int] = None) -> List[models.Order]:
    """
    Retrieve orders, newest id first.

    Args:
        db: Database session
        user_id: When given, only orders placed by this user

    Returns:
        List of Order objects ordered by id descending
    """
    query = db.query(models.Order)
    if user_id is not None:
        query = query.filter(models.Order.user_id == user_id)
    return query.order_by(models.Order.id.desc()).all()


def count_orders(db: Session) -> int:
    return db.query(models.Order).count()


def create_order(db: Session, order: schemas.OrderCreate) -> models.Order:
    """
    Create a new order in the database with status pending.

    The user is not checked against the Users service; user_id is stored as
    supplied.

    Args:
        db: Database session
        order: Order data to create

    Returns:
        Created Order object with its assigned id and created_at
    """
    db_order = models.Order(
        user_id=order.user_id,
        restaurant_name=order.restaurant_name,
        items=encode_items(order.items),
        total_price=order.total_price,
        status=schemas.OrderStatus.PENDING.value,
    )
    db.add(db_order)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_order)
    return db_order


def build_update_values(order: schemas.OrderUpdate) -> Dict[str, Any]:
    """
    Collect the column/value pairs an update body supplies.

    Args:
        order: Update body

    Returns:
        Mapping of storage column to new value; empty when nothing was supplied
    """
    # Schema field names are the storage column names
    values = order.model_dump(exclude_none=True, mode="json")
    if "items" in values:
        values["items"] = encode_items(values["items"])
    return values


def update_order(db: Session, order_id: int, values: Dict[str, Any]) -> Optional[models.Order]:
    """
    Apply a parameterized UPDATE to one order and return the post-update row.

    Args:
        db: Database session
        order_id: ID of the order to update
        values: Column/value pairs from build_update_values(), must not be empty

    Returns:
        Updated Order object or None if no row matched
    """
    try:
        matched = (
            db.query(models.Order)
            .filter(models.Order.id == order_id)
            .update(values, synchronize_session=False)
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    if matched == 0:
        return None
    return get_order(db, order_id)


def delete_order(db: Session, order_id: int) -> bool:
    """
    Delete an order from the database.

    Args:
        db: Database session
        order_id: ID of the order to delete

    Returns:
        True if order was deleted, False if not found
    """
    try:
        deleted = db.query(models.Order).filter(models.Order.id == order_id).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return deleted > 0


def seed_orders(db: Session) -> bool:
    """
    Insert the initial orders when the table is empty.

    Returns:
        True if rows were inserted
    """
    if count_orders(db) > 0:
        return False
    db.add_all([
        models.Order(**{**data, "items": encode_items(data["items"])})
        for data in SEED_ORDERS
    ])
    db.commit()
    logger.info(f"Seeded {len(SEED_ORDERS)} orders")
    return True
