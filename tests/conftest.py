"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- In-memory MongoDB (mongomock-motor) per test
- Repositories bound to that database
- FastAPI test client with the database dependency overridden
"""

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.db.mongo import get_database
from app.main import app
from app.services.job_data_repository import JobDataRepository
from app.services.user_repository import UserRepository


@pytest.fixture
def mongo_db():
    """
    Fresh in-memory database for each test.
    Nothing is shared between tests, so no teardown is needed.
    """
    client = AsyncMongoMockClient()
    return client["jatrackr_test"]


@pytest.fixture
def user_repository(mongo_db):
    return UserRepository(mongo_db)


@pytest.fixture
def job_data_repository(mongo_db, user_repository):
    return JobDataRepository(mongo_db, user_repository)


@pytest.fixture
def client(mongo_db):
    """
    FastAPI test client with overridden database dependency.

    The client is not entered as a context manager, so the lifespan hook
    (which would connect to a real server) does not run.
    """
    app.dependency_overrides[get_database] = lambda: mongo_db

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def sample_user_data():
    """Sample user payload for testing"""
    return {
        "username": "winston",
        "email": "winston@continental.org",
    }


@pytest.fixture
def sample_job_data():
    """Sample job application payload (userId is filled in by the test)"""
    return {
        "jobTitle": "Backend Engineer",
        "company": "Continental Holdings",
        "jobPostingId": "BE-2291",
    }
