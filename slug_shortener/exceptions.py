"""
Errors surfaced to API callers.

Each carries the HTTP status and the human-readable message the boundary
layer puts into the ``{success, message, stack}`` error body.
"""

from typing import Optional


class ShortenerError(Exception):
    """Base class for classified create/lookup failures."""

    status_code: int = 500
    default_message: str = "Something went wrong."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidUrlError(ShortenerError):
    status_code = 400
    default_message = "URL must be a valid absolute URL."


class InvalidSlugError(ShortenerError):
    status_code = 400
    default_message = "Slug must be 5-20 characters of letters, digits, '_' or '-'."


class SlugInUseError(ShortenerError):
    status_code = 409
    default_message = "Slug is in use."

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Slug is in use: {slug}")


class TooManyRequestsError(ShortenerError):
    """Raised by the create throttle, never by the resolver."""

    status_code = 429
    default_message = "You are sending too many requests. Try again later."

    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__(
            f"You are sending too many requests. Try again in {retry_after} seconds."
        )


class SlugGenerationError(ShortenerError):
    """Every generated slug collided; reported as a generic server error."""

    status_code = 500

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Could not generate a unique slug after {attempts} attempts")
