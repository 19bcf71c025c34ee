"""
Storage-specific exceptions.

The store translates backend errors into these so that callers never depend
on SQLAlchemy (or any other driver) exception types.
"""


class StorageError(Exception):
    """Base exception for slug store operations."""

    pass


class DuplicateSlugError(StorageError):
    """Raised when an insert violates the slug uniqueness constraint."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Slug already exists: {slug}")


class StorageUnavailableError(StorageError):
    """Raised when the backing store fails for any other reason."""

    pass
