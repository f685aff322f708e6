"""Database connection and schema management."""

from typing import Any

from sqlalchemy import MetaData, create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from packinglist.config import Settings


class Base(DeclarativeBase):
    """Declarative base shared by all packing list models."""


def build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine described by the settings.

    In-memory SQLite databases are bound to a single shared connection so
    every session sees the same tables.
    """
    options: dict[str, Any] = {}

    if settings.is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
        if settings.DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool

    return create_engine(settings.DATABASE_URL, **options)


def build_session_maker(engine: Engine) -> sessionmaker[Session]:
    """Create the session factory used by the service container."""
    return sessionmaker(
        class_=Session,
        bind=engine,
        autoflush=True,
        expire_on_commit=False,
    )


def init_db(engine: Engine) -> None:
    """Initialize database tables.

    Only creates tables if they don't exist. Safe to call multiple times.
    """
    # Import all models to ensure they're registered with the metadata
    import packinglist.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def check_db_connection(engine: Engine) -> bool:
    """Check if database connection is working."""
    try:
        with engine.connect() as connection:
            return connection.execute(text("SELECT 1")).scalar() == 1
    except Exception:
        return False


def drop_all_tables(engine: Engine) -> None:
    """Drop all tables, including ones not known to the current models."""
    metadata = MetaData()
    metadata.reflect(bind=engine)
    metadata.drop_all(bind=engine)
