from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Path, Request

from gestao_colaboradores.config import Settings
from gestao_colaboradores.exceptions import ClientInputError, MalformedBodyError
from gestao_colaboradores.services.colaborador import ColaboradorStore
from gestao_colaboradores.services.security import sanitize_input
from gestao_colaboradores.services.validation import validate_id


def get_settings_dep(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_colaborador_store(request: Request) -> ColaboradorStore:
    """FastAPI dependency for the employee store owned by the application."""
    return request.app.state.colaborador_store


SettingsDep = Annotated[Settings, Depends(get_settings_dep)]
StoreDep = Annotated[ColaboradorStore, Depends(get_colaborador_store)]


async def get_json_body(request: Request) -> dict[str, Any]:
    """Parse the request body as a JSON object and sanitize its string fields."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = await request.json()
    except ValueError:
        raise MalformedBodyError() from None
    if not isinstance(body, dict):
        raise ClientInputError("Dados de entrada inválidos", ["O corpo da requisição deve ser um objeto JSON"])
    return sanitize_input(body)


JsonBodyDep = Annotated[dict[str, Any], Depends(get_json_body)]


async def valid_colaborador_id(colaborador_id: Annotated[str, Path()]) -> str:
    """Reject blank path identifiers with 400."""
    error = validate_id(colaborador_id)
    if error is not None:
        raise ClientInputError(error)
    return colaborador_id


ColaboradorIdDep = Annotated[str, Depends(valid_colaborador_id)]
