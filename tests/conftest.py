"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- An in-memory repository per test
- A FastAPI application wired to that repository
- A TestClient for the application
"""

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tolet.adapters.repository.memory import InMemoryUserRepository
from tolet.api.dependencies import get_registration_service
from tolet.api.errors import register_exception_handlers
from tolet.api.routes import router
from tolet.domain.registration import RegistrationService

# Low bcrypt cost keeps the suite fast; hashes are still real bcrypt
TEST_BCRYPT_COST = 4

VALID_PAYLOAD = {
    "name": "Ana",
    "email": "ana@x.com",
    "password": "secret1",
    "password_confirmation": "secret1",
}


@pytest.fixture
def valid_payload() -> dict[str, str]:
    """Registration payload that passes every rule."""
    return dict(VALID_PAYLOAD)


@pytest.fixture
def repository() -> InMemoryUserRepository:
    """Fresh in-memory repository for each test."""
    return InMemoryUserRepository()


@pytest.fixture
def app(repository: InMemoryUserRepository) -> Generator[FastAPI, None, None]:
    """Create test FastAPI application backed by the in-memory repository."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router)
    test_app.state.repository = repository

    test_app.dependency_overrides[get_registration_service] = lambda: RegistrationService(
        repository=repository, bcrypt_cost=TEST_BCRYPT_COST
    )
    yield test_app
    test_app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client for the application."""
    return TestClient(app)
