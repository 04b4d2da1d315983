from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from httpx import AsyncClient


async def test_root_banner(async_client: AsyncClient) -> None:
    response = await async_client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["version"] == "1.0.0"
    assert data["baseUrl"] == "http://test"
    assert data["endpoints"]["colaboradores"] == "http://test/api/colaboradores"
    assert data["environment"] == "test"
    assert data["uptime"].endswith("s")


async def test_health_returns_200(async_client: AsyncClient) -> None:
    response = await async_client.get("/health")
    assert response.status_code == 200


async def test_health_response_body(async_client: AsyncClient) -> None:
    response = await async_client.get("/health")
    data = response.json()
    assert data["status"] == "OK"
    assert data["version"] == "1.0.0"
    assert data["environment"] == "test"
    assert data["memory"]["rss"] > 0


async def test_health_response_schema(async_client: AsyncClient) -> None:
    response = await async_client.get("/health")
    data = response.json()
    assert set(data.keys()) == {"status", "timestamp", "uptime", "memory", "environment", "version"}


async def test_api_status(async_client: AsyncClient) -> None:
    response = await async_client.get("/api/status")
    assert response.status_code == 200
    data = response.json()
    assert data["ambiente"] == "test"
    assert data["status"] == "API funcionando corretamente"
    assert data["port"] == 3000
    assert {"pythonVersion", "plataforma", "memoria", "uptime", "timestamp"} <= data.keys()


async def test_api_info(async_client: AsyncClient) -> None:
    response = await async_client.get("/api/info")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "API Gestão de Colaboradores"
    assert data["version"] == "1.0.0"
    assert data["endpoints"]["colaboradores"] == "/api/colaboradores"
    assert data["contact"]["email"] == "suporte@empresa.com"
