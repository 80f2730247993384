"""
Database session management for Stockroom.

Provides engine/session factories, table creation and the per-request
session dependency. The factory lives on `app.state` so tests can point
the app at their own database.
"""

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from .models import Base

log = logging.getLogger(__name__)


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """
    Create the database engine.

    SQLite engines are made usable from FastAPI's thread pool; an
    in-memory SQLite URL shares a single connection so every session sees
    the same database.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, echo=echo, **kwargs)
    else:
        engine = create_engine(url, echo=echo, pool_pre_ping=True)

    log.info(f"Created database engine for: {url.split('@')[-1]}")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to an engine."""
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


def init_db(engine: Engine) -> Engine:
    """
    Initialize the database by creating all tables.

    Args:
        engine: SQLAlchemy engine

    Returns:
        The engine used for initialization
    """
    Base.metadata.create_all(engine)
    log.info("Database tables created successfully")
    return engine


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a database session.

    Yields a session and ensures it's closed after the request.

    Usage:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...
    """
    session = request.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()
