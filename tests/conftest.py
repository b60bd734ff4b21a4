"""Pytest configuration and fixtures."""

import json
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from langchain_core.language_models import FakeListChatModel

from meal_tracker_api.api.dependencies import get_estimation_service, get_uow
from meal_tracker_api.main import create_app
from meal_tracker_api.services.estimation import EstimationService
from meal_tracker_api.services.model_catalog import ModelCatalog, get_model_catalog

USER_ID = "user-123"


def as_json(payload: dict) -> str:
    """Serialize a fake model reply."""
    return json.dumps(payload)


def fake_llm(*replies: dict | str) -> FakeListChatModel:
    """
    Chat model double answering with the given replies in order.

    Dicts are sent as JSON; strings are sent verbatim.
    """
    return FakeListChatModel(
        responses=[reply if isinstance(reply, str) else as_json(reply) for reply in replies]
    )


def make_estimator(*replies: dict | str) -> EstimationService:
    """EstimationService backed by a scripted chat model."""
    return EstimationService(fake_llm(*replies))


@pytest.fixture
def uow() -> MagicMock:
    """Unit of Work whose repositories are async mocks."""
    mock = MagicMock()
    mock.meals = AsyncMock()
    mock.recipes = AsyncMock()
    mock.weekly_targets = AsyncMock()
    mock.user_settings = AsyncMock()
    mock.user_settings.get.return_value = None
    return mock


@pytest.fixture
def llm_replies() -> list:
    """Replies the API's chat model double will give, in order."""
    return []


@pytest.fixture
async def client(uow, llm_replies) -> AsyncGenerator[AsyncClient, None]:
    """
    Create async test client with the database and model replaced.

    Usage:
        async def test_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    app = create_app()
    app.dependency_overrides[get_uow] = lambda: uow
    app.dependency_overrides[get_estimation_service] = lambda: (
        make_estimator(*llm_replies) if llm_replies else EstimationService(None)
    )
    app.dependency_overrides[get_model_catalog] = lambda: ModelCatalog(
        api_url="http://models.test", api_key=""
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"X-User-Id": USER_ID},
    ) as ac:
        yield ac
