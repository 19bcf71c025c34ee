"""
Database models for the slug shortener.

A single table: each row maps one slug to one target URL.
"""

from .url import UrlMapping

__all__ = ["UrlMapping"]
