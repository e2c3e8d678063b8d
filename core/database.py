import logging
import os
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from core.config import DATABASE_URL, DATA_DIR

logger = logging.getLogger(__name__)

if DATABASE_URL.startswith("sqlite:///"):
    os.makedirs(DATA_DIR, exist_ok=True)

# Create engine
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all models
Base = declarative_base()


@contextmanager
def get_db_context(session_factory=None):
    """
    Context manager for database sessions.
    Automatically closes session when done.

    Usage:
        with get_db_context() as db:
            row = db.get(KeyValueEntry, key)
    """
    db = (session_factory or SessionLocal)()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create all tables registered on Base."""
    # Register models on Base.metadata before create_all
    import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ensured at %s", (bind or engine).url)
