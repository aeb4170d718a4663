"""
SQLAlchemy ORM models for the Users service.

Defines the database schema for user-related tables.
"""
from sqlalchemy import Column, Integer, String, DateTime, func
from .database import Base

# SQLite INTEGER is a signed 64-bit value
MIN_INTEGER = -2**63
MAX_INTEGER = 2**63 - 1


class User(Base):
    """
    User model representing a customer of the delivery platform.

    Attributes:
        id (int): Primary key, auto-incremented user ID
        name (str): User's full name
        email (str): User's email address (unique)
        phone (str): Contact phone number
        address (str): Delivery address
        created_at (datetime): Set by the store at insertion time
    """
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    phone = Column(String, nullable=False)
    address = Column(String, nullable=False)
    created_at = Column(DateTime, server_default=func.current_timestamp())
