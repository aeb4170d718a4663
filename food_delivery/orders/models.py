"""
SQLAlchemy ORM models for the Orders service.

Defines the database schema for order-related tables.
"""
from sqlalchemy import Column, Integer, String, DateTime, Text, func
from .database import Base

# SQLite INTEGER is a signed 64-bit value
MIN_INTEGER = -2**63
MAX_INTEGER = 2**63 - 1


class Order(Base):
    """
    Order model representing a customer order placed with a restaurant.

    Attributes:
        id (int): Primary key, auto-incremented order ID
        user_id (int): ID of the ordering user; not a foreign key, the user
            lives in the Users service
        restaurant_name (str): Restaurant the order is placed with
        items (str): Ordered item names, stored as a JSON array string
        total_price (int): Total amount in monetary units
        status (str): One of pending, processing, on_delivery, delivered, cancelled
        created_at (datetime): Set by the store at insertion time
    """
    __tablename__ = "orders"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False)
    restaurant_name = Column(String, nullable=False)
    items = Column(Text, nullable=False)
    total_price = Column(Integer, nullable=False)
    status = Column(String, nullable=False, server_default="pending")
    created_at = Column(DateTime, server_default=func.current_timestamp())
