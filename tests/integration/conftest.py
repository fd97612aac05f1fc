"""Shared fixtures for integration tests.

The application is exercised in-process through ``httpx.AsyncClient`` over
``ASGITransport``. The transport does not run the lifespan, so fixtures put
the weight table on ``app.state`` themselves and replace the tax record
repository with an in-memory one.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.api.main import create_app
from src.core.config import ObservabilityConfig, Settings
from src.domain.weights import WeightTable
from src.infrastructure.database.dependencies import get_tax_record_repository
from tests.integration.fakes import InMemoryTaxRecords


@pytest.fixture
def test_settings() -> Settings:
    """Settings with tracing disabled."""
    return Settings(observability_config=ObservabilityConfig(enable_tracing=False))


@pytest.fixture
def tax_records() -> InMemoryTaxRecords:
    return InMemoryTaxRecords()


@pytest.fixture
def weight_table() -> WeightTable:
    return WeightTable.from_mapping({"A": 1.0, "B": 3.0})


@pytest.fixture
def app(
    test_settings: Settings,
    tax_records: InMemoryTaxRecords,
    weight_table: WeightTable,
) -> FastAPI:
    """Application wired to in-memory collaborators."""
    application = create_app(test_settings)
    application.state.weight_table = weight_table
    application.dependency_overrides[get_tax_record_repository] = lambda: tax_records
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client bound to the application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    """Authorization header for the demo identity."""
    response = await client.post("/api/login")
    return {"Authorization": f"Bearer {response.json()['token']}"}
