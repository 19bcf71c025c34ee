"""
Slug storage module.

Implements the Strategy Pattern for pluggable slug -> URL persistence.
"""

from .exceptions import StorageError, DuplicateSlugError, StorageUnavailableError
from .strategies import SlugStore, SQLAlchemySlugStore, InMemorySlugStore
from .factory import SlugStoreFactory, SlugStoreBackend

__all__ = [
    "StorageError",
    "DuplicateSlugError",
    "StorageUnavailableError",
    "SlugStore",
    "SQLAlchemySlugStore",
    "InMemorySlugStore",
    "SlugStoreFactory",
    "SlugStoreBackend",
]
