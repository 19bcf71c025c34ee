"""
Factory for creating slug store instances.
"""

import logging
from enum import Enum

from .strategies import SlugStore, SQLAlchemySlugStore, InMemorySlugStore
from slug_shortener.config import Settings
from slug_shortener.database.connection import (
    create_db_engine,
    create_session_factory,
    init_db,
)

logger = logging.getLogger(__name__)


class SlugStoreBackend(Enum):
    """Available slug store backends"""
    SQLALCHEMY = "sqlalchemy"
    MEMORY = "memory"


class SlugStoreFactory:
    """
    Simple factory for creating slug stores.

    Returns a new instance on every call; the application factory creates
    one store at startup and injects it wherever it is needed.
    """

    @classmethod
    def create(cls, backend: SlugStoreBackend, settings: Settings) -> SlugStore:
        """
        Create a slug store.

        Args:
            backend: Type of store backend (from enum)
            settings: Settings providing the database URL

        Returns:
            Ready-to-use slug store (schema created for SQL backends)
        """
        if backend == SlugStoreBackend.SQLALCHEMY:
            engine = create_db_engine(settings.database_url)
            init_db(engine)
            logger.info("SQLAlchemy slug store initialized (%s)", engine.url.drivername)
            return SQLAlchemySlugStore(create_session_factory(engine))

        elif backend == SlugStoreBackend.MEMORY:
            logger.info("In-memory slug store initialized")
            return InMemorySlugStore()

        else:
            raise ValueError(f"Unknown store backend: {backend}")
