"""
SQLAlchemy engine and session factory construction.

Nothing here is created at import time: the application factory builds one
engine per app and hands the session factory to the slug store.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """Create an engine; SQLite connections may be used from worker threads."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    # expire_on_commit=False keeps returned mappings readable after the session closes
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


def init_db(engine: Engine) -> None:
    """Create tables (no-op for tables that already exist)."""
    # Import models so they are registered with Base
    from slug_shortener.models import UrlMapping  # noqa: F401

    Base.metadata.create_all(bind=engine)
