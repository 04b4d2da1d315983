from __future__ import annotations

import os
import platform
import sys
import time
from datetime import UTC, datetime
from typing import Literal

import psutil
from fastapi import APIRouter, Request

from gestao_colaboradores.api.deps import SettingsDep
from gestao_colaboradores.schemas.base import CamelModel

router = APIRouter(tags=["health"])


class MemoryUsage(CamelModel):
    """Memory figures for the current process, in bytes."""

    rss: int
    vms: int


class EndpointLinks(CamelModel):
    health: str
    status: str
    info: str
    colaboradores: str


class RootResponse(CamelModel):
    success: bool = True
    message: str
    timestamp: datetime
    version: str
    base_url: str
    endpoints: EndpointLinks
    documentation: str
    environment: str
    uptime: str


class HealthResponse(CamelModel):
    """Health check response."""

    status: Literal["OK"] = "OK"
    timestamp: datetime
    uptime: str
    memory: MemoryUsage
    environment: str
    version: str


class StatusResponse(CamelModel):
    ambiente: str
    timestamp: datetime
    python_version: str
    plataforma: str
    memoria: MemoryUsage
    uptime: str
    port: int
    status: str = "API funcionando corretamente"


class Contact(CamelModel):
    name: str
    email: str


class InfoResponse(CamelModel):
    name: str
    version: str
    description: str
    environment: str
    endpoints: dict[str, str]
    contact: Contact


def _uptime(request: Request) -> str:
    started_at: float = request.app.state.started_at
    return f"{time.monotonic() - started_at:.2f}s"


def _memory_usage() -> MemoryUsage:
    info = psutil.Process(os.getpid()).memory_info()
    return MemoryUsage(rss=info.rss, vms=info.vms)


@router.get("/", response_model=RootResponse)
async def root(request: Request, settings: SettingsDep) -> RootResponse:
    """Service banner with absolute links to the main endpoints."""
    base_url = str(request.base_url).rstrip("/")
    return RootResponse(
        message=f"{settings.app_name} - Online!",
        timestamp=datetime.now(UTC),
        version=settings.app_version,
        base_url=base_url,
        endpoints=EndpointLinks(
            health=f"{base_url}/health",
            status=f"{base_url}/api/status",
            info=f"{base_url}/api/info",
            colaboradores=f"{base_url}/api/colaboradores",
        ),
        documentation=settings.documentation_url,
        environment=settings.environment,
        uptime=_uptime(request),
    )


@router.get("/health", response_model=HealthResponse)
async def health(request: Request, settings: SettingsDep) -> HealthResponse:
    """Return the health status of the API service."""
    return HealthResponse(
        timestamp=datetime.now(UTC),
        uptime=_uptime(request),
        memory=_memory_usage(),
        environment=settings.environment,
        version=settings.app_version,
    )


@router.get("/api/status", response_model=StatusResponse)
async def api_status(request: Request, settings: SettingsDep) -> StatusResponse:
    """Runtime details of the running process."""
    return StatusResponse(
        ambiente=settings.environment,
        timestamp=datetime.now(UTC),
        python_version=platform.python_version(),
        plataforma=sys.platform,
        memoria=_memory_usage(),
        uptime=_uptime(request),
        port=settings.port,
    )


@router.get("/api/info", response_model=InfoResponse)
async def api_info(settings: SettingsDep) -> InfoResponse:
    return InfoResponse(
        name=settings.app_name,
        version=settings.app_version,
        description=settings.description,
        environment=settings.environment,
        endpoints={
            "root": "/",
            "colaboradores": "/api/colaboradores",
            "health": "/health",
            "status": "/api/status",
            "info": "/api/info",
        },
        contact=Contact(name=settings.contact_name, email=settings.support_email),
    )
