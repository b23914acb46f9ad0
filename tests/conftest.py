"""Pytest fixtures for the task list API tests."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tasklist.config import Settings
from tasklist.main import create_app
from tasklist.store import TaskStore

from .fakes import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture
def settings() -> Settings:
    return Settings(health_message="Backend is running")


@pytest.fixture
def app(settings: Settings, store: TaskStore) -> FastAPI:
    return create_app(settings, store)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client for the API backed by a fresh store."""
    return TestClient(app)
