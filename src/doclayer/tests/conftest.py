"""
Core pytest configuration for the entire test suite.

This module provides only the essential database setup and core utilities
that are needed across ALL types of tests (repositories, services, connection, API, ...).

Domain-specific fixtures are located in:
- tests/test_fixtures/repository_fixtures.py
- tests/test_fixtures/database_fixtures.py

No MongoDB server is needed: collections come from mongomock-motor, an in-memory
implementation of the Motor API that enforces unique indexes like a real server.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import logging

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Set the level for noisy third-party loggers at import time (before importing modules that
# might initialize them). This prevents log spam during pytest collection.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "pymongo",
    "motor",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from mongomock_motor import AsyncMongoMockClient

from doclayer.config.settings import Settings
from doclayer.core.logging.builder import setup_logging, stop_queue_logging

logger = logging.getLogger(__name__)

TEST_DB_NAME = "doclayer_test"


def make_test_settings(**overrides) -> Settings:
    """
    Settings for tests: never read .env, log plain text to the console.
    """
    values = {
        "ENV": "testing",
        "TESTING": True,
        "TEST_DB_NAME": TEST_DB_NAME,
        "LOG_LEVEL": "INFO",
        "LOG_FORMAT": "text",
        "LOG_TO_STDOUT": True,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


# The `autouse=True` part means that this fixture will be automatically used by pytest
# without explicitly including it in your test function parameters.
@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install application logging for the entire test session.

    pytest's caplog handler is attached to the root logger per test, after this runs,
    so caplog.records keeps working. Tests that call setup_logging() themselves
    reconfigure the root logger for the rest of that test only.
    """
    setup_logging(make_test_settings())
    yield
    stop_queue_logging()


@pytest.fixture
def test_settings() -> Settings:
    return make_test_settings()


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture
async def mongo_client() -> AsyncMongoMockClient:
    """
    A fresh in-memory client per test, so no data leaks from one test to another.
    """
    return AsyncMongoMockClient()


@pytest.fixture
async def mongo_database(mongo_client):
    return mongo_client[TEST_DB_NAME]


# Repository / service fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402
    faker,
    users_collection,
    base_repo,
    user_service,
    sample_user_data,
    create_user,
    created_user,
    multiple_users,
)

# Connection fixtures
from .test_fixtures.database_fixtures import (  # noqa: E402
    fake_client_factory,
    db_settings,
)
