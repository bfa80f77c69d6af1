"""
Database connection and session management for the Account Service
"""
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool
from typing import Generator
from fastapi import Request
import logging

from .config import Settings

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def build_engine(settings: Settings) -> Engine:
    """
    Create the SQLAlchemy engine for the configured DATABASE_URL.

    In-memory SQLite shares a single connection so every thread sees the same
    data; other SQLite URLs only relax the same-thread check; server databases
    get a sized connection pool.
    """
    url = settings.DATABASE_URL
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if _is_memory_sqlite(url):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(
        url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
    )


class Database:
    """Engine plus session factory, built once per application."""

    def __init__(self, settings: Settings):
        self.engine = build_engine(settings)
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    def init_db(self) -> None:
        """
        Connect and create all tables (including the unique email index).
        Should be called on application startup; failures propagate.
        """
        try:
            # Import models to ensure they are registered with Base
            from . import models  # noqa: F401

            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            Base.metadata.create_all(bind=self.engine)
            logger.info("Database connected")
        except Exception as e:
            logger.error(f"Error connecting to database: {e}")
            raise

    def check_connection(self) -> bool:
        """
        Check if database connection is working.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            with self.SessionLocal() as db:
                db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database connection check failed: {e}")
            return False

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database connection closed")


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency function to get a database session.

    Yields:
        Session: SQLAlchemy database session bound to the app's engine
    """
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
