"""
Tests for the access log middleware.
"""
import logging
import re

from fastapi.testclient import TestClient

from main import create_app
from slug_shortener.cache import NullCache
from slug_shortener.config import Settings
from slug_shortener.storage import InMemorySlugStore

ACCESS_LOGGER = "slug_shortener.access"
COMMON_LINE = re.compile(
    r'^(?P<client>\S+) - - \[[^\]]+\] "GET /api/v1/health HTTP/1\.1" 200 \d+$'
)


def _access_lines(caplog):
    return [r.getMessage() for r in caplog.records if r.name == ACCESS_LOGGER]


def _get_health(caplog, headers=None, **overrides):
    settings = Settings(
        store_backend="memory",
        cache_backend="null",
        rate_limit_enabled=False,
        **overrides,
    )
    app = create_app(settings, slug_store=InMemorySlugStore(), cache=NullCache())
    caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

    with TestClient(app) as client:
        response = client.get("/api/v1/health", headers=headers or {})
    assert response.status_code == 200
    return _access_lines(caplog)


def test_production_uses_common_log_format(caplog):
    lines = _get_health(caplog, environment="production")

    assert len(lines) == 1
    match = COMMON_LINE.match(lines[0])
    assert match is not None, lines[0]
    assert match.group("client") == "testclient"


def test_development_uses_dev_format(caplog):
    lines = _get_health(caplog, environment="development")

    assert len(lines) == 1
    assert re.match(r"^GET /api/v1/health 200 \d+\.\d{2} ms - testclient$", lines[0])


def test_forwarded_for_ignored_unless_trusted(caplog):
    lines = _get_health(caplog, headers={"X-Forwarded-For": "203.0.113.7"})

    assert lines[0].endswith("- testclient")
    assert "203.0.113.7" not in lines[0]


def test_logs_forwarded_client_behind_trusted_proxy(caplog):
    lines = _get_health(
        caplog,
        headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"},
        environment="production",
        trust_forwarded_for=True,
    )

    assert COMMON_LINE.match(lines[0]).group("client") == "203.0.113.7"
