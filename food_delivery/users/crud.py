"""
CRUD (Create, Read, Update, Delete) operations for the Users service.

This module contains all database operations for user management. Store
errors propagate as SQLAlchemy exceptions; the session is rolled back first.
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from . import models, schemas

SEED_USERS = [
    {"name": "John Doe", "email": "john@example.com", "phone": "081234567890", "address": "Jl. Sudirman No. 1, Jakarta"},
    {"name": "Jane Smith", "email": "jane@example.com", "phone": "081234567891", "address": "Jl. Thamrin No. 2, Jakarta"},
]

def get_user(db: Session, user_id: int) -> Optional[models.User]:
    """
    Retrieve a single user by ID.

    Args:
        db: Database session
        user_id: ID of the user to retrieve

    Returns:
        User object or None if not found
    """
    return db.query(models.User).filter(models.User.id == user_id).first()

def get_users(db: Session) -> List[models.User]:
    """
    Retrieve every user ordered by ID ascending.

    Args:
        db: Database session

    Returns:
        List of User objects
    """
    return db.query(models.User).order_by(models.User.id.asc()).all()

def count_users(db: Session) -> int:
    return db.query(models.User).count()

def create_user(db: Session, user: schemas.UserCreate) -> models.User:
    """
    Create a new user in the database.

    Args:
        db: Database session
        user: User data to create

    Returns:
        Created User object with its assigned id and created_at

    Raises:
        sqlalchemy.exc.IntegrityError: if the email is already used
    """
    db_user = models.User(**user.model_dump())
    db.add(db_user)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_user)
    return db_user

def update_user(db: Session, user_id: int, user: schemas.UserUpdate) -> Optional[models.User]:
    """
    Update an existing user.

    Args:
        db: Database session
        user_id: ID of the user to update
        user: Updated user data (only provided fields will be updated)

    Returns:
        Updated User object or None if not found
    """
    db_user = get_user(db, user_id)
    if db_user is None:
        return None

    update_data = user.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in update_data.items():
        setattr(db_user, key, value)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_user)
    return db_user

def delete_user(db: Session, user_id: int) -> bool:
    """
    Delete a user from the database.

    Orders referencing the user are owned by another service and are left
    untouched.

    Args:
        db: Database session
        user_id: ID of the user to delete

    Returns:
        True if user was deleted, False if not found
    """
    try:
        deleted = db.query(models.User).filter(models.User.id == user_id).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return deleted > 0

def seed_users(db: Session) -> bool:
    """
    Insert the initial users when the table is empty.

    Returns:
        True if rows were inserted
    """
    if count_users(db) > 0:
        return False
    db.add_all([models.User(**data) for data in SEED_USERS])
    db.commit()
    return True
