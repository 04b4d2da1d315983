from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from gestao_colaboradores.config import Settings
from gestao_colaboradores.main import create_app
from gestao_colaboradores.services.colaborador import InMemoryColaboradorStore

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI


@pytest.fixture
def settings() -> Settings:
    """Test settings with a generous rate limit so API tests never hit it."""
    return Settings(environment="test", rate_limit_max=10_000, rate_limit_cleanup_probability=0.0)


@pytest.fixture
def store() -> InMemoryColaboradorStore:
    return InMemoryColaboradorStore()


@pytest.fixture
def app(settings: Settings, store: InMemoryColaboradorStore) -> FastAPI:
    return create_app(settings=settings, store=store)


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client bound to a fresh application and store."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
