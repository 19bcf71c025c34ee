"""
Random slug generation.

Generation is a pure function of (length, alphabet); retrying on collision
is the resolver's job, not the generator's.
"""

import secrets
import string

# URL-safe alphabet: every character is also allowed in user-chosen slugs
URL_SAFE_ALPHABET = string.ascii_letters + string.digits + "_-"
DEFAULT_SLUG_LENGTH = 5


def generate_slug(length: int = DEFAULT_SLUG_LENGTH, alphabet: str = URL_SAFE_ALPHABET) -> str:
    """Generate a random slug of ``length`` characters drawn from ``alphabet``"""
    if length <= 0:
        raise ValueError(f"Slug length must be positive, got {length}")
    if not alphabet:
        raise ValueError("Alphabet must not be empty")
    return ''.join(secrets.choice(alphabet) for _ in range(length))
