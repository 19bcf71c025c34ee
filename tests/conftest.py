"""
Test configuration and fixtures for the slug shortener.
This centralizes all test setup, making individual tests clean.
"""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from slug_shortener.cache import NullCache
from slug_shortener.config import Settings
from slug_shortener.services.slug_resolver import SlugResolver
from slug_shortener.storage import SlugStoreFactory, SlugStoreBackend


@pytest.fixture(scope="function")
def test_settings(tmp_path):
    """
    Settings pointing at a fresh SQLite file per test.
    Rate limiting is off so tests can create as many mappings as they need.
    """
    return Settings(
        environment="development",
        store_backend="sqlalchemy",
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        cache_backend="null",
        rate_limit_enabled=False,
    )


@pytest.fixture(scope="function")
def slug_store(test_settings):
    """SQLAlchemy slug store with its schema created."""
    return SlugStoreFactory.create(SlugStoreBackend.SQLALCHEMY, test_settings)


@pytest.fixture(scope="function")
def resolver(slug_store, test_settings):
    return SlugResolver(store=slug_store, settings=test_settings)


@pytest.fixture(scope="function")
def client(test_settings, slug_store):
    """
    Create a test client for an app wired to the test store.
    This is the main fixture that API tests will use.
    """
    app = create_app(test_settings, slug_store=slug_store, cache=NullCache())

    with TestClient(app) as test_client:
        yield test_client
