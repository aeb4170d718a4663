"""
Database configuration and session management for the Users service.

This module sets up the SQLite connection using SQLAlchemy, provides a session
factory for database operations, and prepares the users table on startup.
"""
import logging
import os
from typing import Optional
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .. import config

logger = logging.getLogger(__name__)

DB_PATH = config.get_db_path("./database/users.db")

engine = create_engine(
    f"sqlite:///{DB_PATH}",
    connect_args={"check_same_thread": False, "timeout": config.DB_TIMEOUT},
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    Dependency function that provides a database session.

    Yields:
        Session: SQLAlchemy database session

    Usage:
        Use as a FastAPI dependency to inject database sessions into route handlers.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ensure_db_dir(db_path: str) -> None:
    """Create the parent directory of a SQLite file if it does not exist."""
    db_dir = os.path.dirname(db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)


def init_db(bind: Optional[Engine] = None, session_factory: Optional[sessionmaker] = None) -> None:
    """
    Create the users table if absent and seed it when empty.

    Args:
        bind: Engine to create the table on, the module engine by default
        session_factory: Session factory bound to the same engine, SessionLocal by default
    """
    from . import crud, models

    bind = bind or engine
    session_factory = session_factory or SessionLocal

    if bind.url.database:
        ensure_db_dir(bind.url.database)
    models.Base.metadata.create_all(bind=bind)
    logger.info(f"Connected to SQLite database: {bind.url.database}")
    logger.info("Users table ready")

    db = session_factory()
    try:
        if crud.seed_users(db):
            logger.info("Initial data seeded")
    finally:
        db.close()
