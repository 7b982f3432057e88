"""
Pytest fixtures. Each API test gets a fresh job store and demo repository.
"""

from __future__ import annotations

import pytest

from fraudscope.models import ModelVote


@pytest.fixture
def job_store():
    from fraudscope.services.job_store import InMemoryJobStore

    return InMemoryJobStore()


@pytest.fixture
def demo_repository():
    from fraudscope.services.repository import DemoRepository

    return DemoRepository()


@pytest.fixture
def client(job_store, demo_repository):
    """FastAPI TestClient wired to the per-test stores."""
    from fastapi.testclient import TestClient

    from fraudscope.main import app, get_job_store, get_repository

    app.dependency_overrides[get_job_store] = lambda: job_store
    app.dependency_overrides[get_repository] = lambda: demo_repository
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_votes() -> list[ModelVote]:
    return [
        ModelVote("OpenAI GPT-4 Classifier", 0.78, 1.0),
        ModelVote("Anthropic Claude Detector", 0.82, 1.0),
        ModelVote("Specialized Fraud Detector", 0.93, 1.5),
    ]

