# ruff: noqa: TC001, TC003
from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from gestao_colaboradores.schemas.base import CamelModel
from gestao_colaboradores.services.colaborador import Colaborador


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class CreateColaboradorRequest(CamelModel):
    """Request body for creating an employee."""

    model_config = ConfigDict(extra="ignore")

    nome: str = Field(min_length=2)
    cargo: str = Field(min_length=2)
    departamento: str = Field(min_length=2)
    email: str
    telefone: str | None = None
    data_admissao: date | None = None

    @field_validator("telefone", "data_admissao", mode="before")
    @classmethod
    def _empty_optional_is_none(cls, value: Any) -> Any:
        return _blank_to_none(value)


class UpdateColaboradorRequest(CamelModel):
    """Partial update; only the keys sent by the client are applied.

    An empty ``telefone`` or ``dataAdmissao`` clears the stored value.
    """

    model_config = ConfigDict(extra="ignore")

    nome: str | None = None
    cargo: str | None = None
    departamento: str | None = None
    email: str | None = None
    telefone: str | None = None
    data_admissao: date | None = None
    ativo: bool | None = None

    @field_validator("telefone", "data_admissao", mode="before")
    @classmethod
    def _empty_optional_is_none(cls, value: Any) -> Any:
        return _blank_to_none(value)


class ColaboradorResponse(CamelModel):
    """Single employee envelope."""

    success: bool = True
    message: str | None = None
    data: Colaborador


class ColaboradorListResponse(CamelModel):
    """List of employees with total count."""

    success: bool = True
    data: list[Colaborador]
    total: int
    timestamp: datetime


class ColaboradorDepartamentoResponse(ColaboradorListResponse):
    departamento: str


class DeleteColaboradorResponse(CamelModel):
    success: bool = True
    message: str
