"""
Relational database wiring (SQLAlchemy).
"""

from .connection import Base, create_db_engine, create_session_factory, init_db

__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "init_db",
]
