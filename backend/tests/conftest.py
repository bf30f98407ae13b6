"""
Shared test fixtures and configuration.

Environment variables are set BEFORE any app imports to prevent
accidental connections to real databases.
"""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests"
os.environ["ALGORITHM"] = "HS256"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "15"
os.environ["REFRESH_TOKEN_EXPIRE_DAYS"] = "1"
os.environ["MONGODB_URL"] = "mongodb://localhost:27017"
os.environ["DATABASE_NAME"] = "test_deadlines_dragons"

import pytest  # noqa: E402

from dragons.core.config import Settings  # noqa: E402
from dragons.models.user import User  # noqa: E402


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def student_user():
    return User(
        id="student-1",
        username="alice",
        email="alice@test.com",
        role="student",
    )


@pytest.fixture
def other_student():
    return User(
        id="student-2",
        username="bob",
        email="bob@test.com",
        role="student",
    )


@pytest.fixture
def admin_user():
    return User(
        id="admin-1",
        username="admin",
        email="admin@test.com",
        role="admin",
    )


@pytest.fixture
def mentor_user():
    return User(
        id="mentor-1",
        username="mentor",
        email="mentor@test.com",
        role="mentor",
    )


@pytest.fixture
def coordinator_user():
    return User(
        id="coord-1",
        username="coordinator",
        email="coordinator@test.com",
        role="coordinator",
    )
