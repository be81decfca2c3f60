import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskboard.adapters.memory.task_repo import InMemoryTaskRepository
from taskboard.api.http.app import create_app
from taskboard.config import Settings
from taskboard.services.task_service import TaskService


@pytest.fixture
def test_settings() -> Settings:
    return Settings(STORE_BACKEND="memory", AUDITOR="api-tester", LOG_LEVEL="DEBUG")


@pytest.fixture
def task_service(test_settings: Settings) -> TaskService:
    return TaskService(InMemoryTaskRepository())


@pytest.fixture
def test_app(test_settings: Settings, task_service: TaskService) -> FastAPI:
    return create_app(test_settings, service=task_service)


@pytest.fixture
def client(test_app: FastAPI) -> TestClient:
    return TestClient(test_app)
