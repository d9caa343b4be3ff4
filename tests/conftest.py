"""
Global test configuration and fixtures for Snippetbox

This module provides shared test fixtures: test settings, an application
wired to in-memory stores, an HTTP test client and a throwaway SQLite
database for the store tests.
"""

import os
import tempfile

import pytest
from fastapi.testclient import TestClient

from snippetbox.core.config import Settings
from snippetbox.core.limiter import limiter
from snippetbox.core.utils.session_store import MemorySessionStore
from snippetbox.db.init_db import init_database
from snippetbox.db.session import make_session_factory, open_db
from snippetbox.main import create_app
from tests.utils.mocks import MockSnippetModel, MockUserModel


# ============================================================================
# Test Environment Setup
# ============================================================================

@pytest.fixture(scope="function")
def test_settings():
    """Settings isolated from the environment and any .env file"""
    return Settings(
        _env_file=None,
        env="test",
        debug=False,
        db_dsn="sqlite://",
        session_store="memory",
        session_cleanup_interval=0,
        tls_enabled=False,
    )


@pytest.fixture(scope="function", autouse=True)
def reset_limiter():
    """Clear rate limit counters so tests cannot affect each other"""
    limiter.reset()
    yield
    limiter.reset()


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def test_db():
    """Create a test database for each test function and return its session factory"""
    db_fd, db_path = tempfile.mkstemp(suffix=".db")
    engine = open_db(f"sqlite:///{db_path}")
    init_database(engine)

    yield make_session_factory(engine)

    # Cleanup
    engine.dispose()
    os.close(db_fd)
    os.unlink(db_path)


# ============================================================================
# Application Client Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def make_app(test_settings):
    """Build an application; keyword arguments replace the default mock stores"""
    def _make(**overrides):
        stores = {
            "snippets": MockSnippetModel(),
            "users": MockUserModel(),
            "session_store": MemorySessionStore(),
        }
        stores.update(overrides)
        return create_app(test_settings, **stores)
    return _make


@pytest.fixture(scope="function")
def app(make_app):
    return make_app()


@pytest.fixture(scope="function")
def client(app):
    """Test client that does not follow redirects, so tests can inspect them"""
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client


# ============================================================================
# Test Markers and Configuration
# ============================================================================

def pytest_collection_modifyitems(config, items):
    """Add markers based on file location"""
    for item in items:
        path = str(item.fspath)
        if "security" in path:
            item.add_marker(pytest.mark.security)
        if "integration" in path:
            item.add_marker(pytest.mark.integration)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
