"""
Slug store strategies using Strategy Pattern.

Allows switching between storage backends:
- SQLAlchemy: any relational database with a unique index (SQLite, PostgreSQL)
- In-memory: development and testing
"""

import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from slug_shortener.models.url import UrlMapping
from .exceptions import DuplicateSlugError, StorageUnavailableError

logger = logging.getLogger(__name__)

# SQLite: "UNIQUE constraint failed", PostgreSQL: "duplicate key value", MySQL: "Duplicate entry"
_UNIQUE_VIOLATION_MARKERS = ("unique constraint", "duplicate key", "duplicate entry")


def _is_unique_violation(error: IntegrityError) -> bool:
    """True when the driver reports a unique index clash rather than e.g. NOT NULL."""
    message = str(error.orig).lower()
    return any(marker in message for marker in _UNIQUE_VIOLATION_MARKERS)


class SlugStore(ABC):
    """
    Abstract base class for slug stores.

    A store owns the slug -> URL records and enforces slug uniqueness itself.
    ``insert`` must be a single atomic constrained write: a ``find`` that
    returned None says nothing about whether a later ``insert`` succeeds.
    """

    @abstractmethod
    def find(self, slug: str) -> Optional[UrlMapping]:
        """
        Exact-match lookup.

        Args:
            slug: Slug to look up (not validated)

        Returns:
            The mapping, or None if no mapping exists

        Raises:
            StorageUnavailableError: backend failure
        """
        pass

    @abstractmethod
    def insert(self, mapping: UrlMapping) -> UrlMapping:
        """
        Persist a new mapping.

        Args:
            mapping: Unsaved mapping with ``slug`` and ``url`` set

        Returns:
            The stored mapping with storage-assigned fields populated

        Raises:
            DuplicateSlugError: the slug already exists
            StorageUnavailableError: backend failure
        """
        pass


class SQLAlchemySlugStore(SlugStore):
    """
    Relational slug store.

    Uniqueness comes from the unique index on ``urls.slug``: two racing
    inserts of one slug both reach the database and exactly one commits.
    Each operation uses its own short-lived session, so concurrent requests
    never share one.
    """

    def __init__(self, session_factory: sessionmaker):
        """
        Initialize SQLAlchemy store.

        Args:
            session_factory: Session factory bound to an engine whose
                schema has been created
        """
        self.session_factory = session_factory

    def find(self, slug: str) -> Optional[UrlMapping]:
        session = self.session_factory()
        try:
            return session.query(UrlMapping).filter(UrlMapping.slug == slug).first()
        except SQLAlchemyError as e:
            logger.error("Slug lookup failed for %r: %s", slug, e)
            raise StorageUnavailableError(f"Lookup failed: {e}") from e
        finally:
            session.close()

    def insert(self, mapping: UrlMapping) -> UrlMapping:
        session = self.session_factory()
        try:
            session.add(mapping)
            session.commit()
            session.refresh(mapping)
            return mapping
        except IntegrityError as e:
            session.rollback()
            if _is_unique_violation(e):
                raise DuplicateSlugError(mapping.slug) from e
            logger.error("Slug insert rejected for %r: %s", mapping.slug, e)
            raise StorageUnavailableError(f"Insert rejected: {e.orig}") from e
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Slug insert failed for %r: %s", mapping.slug, e)
            raise StorageUnavailableError(f"Insert failed: {e}") from e
        finally:
            session.close()


class InMemorySlugStore(SlugStore):
    """
    In-memory slug store using a Python dict.

    Pros:
    - No external dependencies
    - Fast, good for development and testing

    Cons:
    - Not persistent (lost on restart)
    - Not shared between processes

    The check-and-set in ``insert`` happens under a lock, which gives the
    same guarantee as a unique index within one process.
    """

    def __init__(self):
        self._mappings: Dict[str, UrlMapping] = {}
        self._lock = threading.Lock()
        self._next_id = 1

    def find(self, slug: str) -> Optional[UrlMapping]:
        return self._mappings.get(slug)

    def insert(self, mapping: UrlMapping) -> UrlMapping:
        with self._lock:
            if mapping.slug in self._mappings:
                raise DuplicateSlugError(mapping.slug)
            mapping.id = self._next_id
            if mapping.created_at is None:
                mapping.created_at = datetime.now(timezone.utc)
            self._next_id += 1
            self._mappings[mapping.slug] = mapping
        return mapping

    def __len__(self) -> int:
        return len(self._mappings)
