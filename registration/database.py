"""Database configuration and session management."""

from collections.abc import Generator
from functools import lru_cache
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from registration.config import Settings, get_settings

Base: Any = declarative_base()


def create_db_engine(settings: Settings) -> Engine:
    """Build an engine for the configured database URL.

    SQLite gets ``check_same_thread`` disabled and no pool tuning; other
    backends get a bounded pool shared by every request.
    """
    if settings.is_sqlite:
        return create_engine(
            settings.database_url,
            connect_args={"check_same_thread": False},
            hide_parameters=True,
        )

    return create_engine(
        settings.database_url,
        pool_pre_ping=True,
        hide_parameters=True,
        pool_size=settings.db_pool_size,
        max_overflow=0,
        pool_recycle=settings.db_pool_recycle,
        connect_args={"connect_timeout": settings.db_connect_timeout},
    )


@lru_cache
def get_engine() -> Engine:
    """Get the process-wide engine, built on first use."""
    return create_db_engine(get_settings())


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    """Get the session factory bound to the process-wide engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine | None = None) -> None:
    """Initialize the database by creating all tables."""
    # Import all models here so they are registered with Base.metadata
    from registration import models  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())
