from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, status
from pydantic import ValidationError

from gestao_colaboradores.api.deps import ColaboradorIdDep, JsonBodyDep, SettingsDep, StoreDep
from gestao_colaboradores.exceptions import ClientInputError, NotFoundError
from gestao_colaboradores.schemas.colaborador import (
    ColaboradorDepartamentoResponse,
    ColaboradorListResponse,
    ColaboradorResponse,
    CreateColaboradorRequest,
    DeleteColaboradorResponse,
    UpdateColaboradorRequest,
)
from gestao_colaboradores.services.validation import validate_colaborador_payload

logger = logging.getLogger(__name__)

INVALID_PAYLOAD = "Dados de entrada inválidos"

colaboradores_router = APIRouter(
    prefix="/api/colaboradores",
    tags=["colaboradores"],
)


def _not_found(colaborador_id: str) -> NotFoundError:
    return NotFoundError(
        "Colaborador não encontrado",
        detail=f"Colaborador com ID {colaborador_id} não existe",
    )


def _schema_errors(exc: ValidationError) -> list[str]:
    return [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()]


@colaboradores_router.get(
    "",
    response_model=ColaboradorListResponse,
    response_model_exclude_none=True,
)
async def list_colaboradores(store: StoreDep) -> ColaboradorListResponse:
    """List every employee in insertion order."""
    colaboradores = store.list_all()
    return ColaboradorListResponse(
        data=colaboradores,
        total=len(colaboradores),
        timestamp=datetime.now(UTC),
    )


@colaboradores_router.get(
    "/departamento/{departamento}",
    response_model=ColaboradorDepartamentoResponse,
    response_model_exclude_none=True,
)
async def list_colaboradores_by_departamento(departamento: str, store: StoreDep) -> ColaboradorDepartamentoResponse:
    """List employees of a department, ignoring case. Always 200."""
    colaboradores = store.find_by_department(departamento)
    return ColaboradorDepartamentoResponse(
        data=colaboradores,
        total=len(colaboradores),
        departamento=departamento,
        timestamp=datetime.now(UTC),
    )


@colaboradores_router.get(
    "/{colaborador_id}",
    response_model=ColaboradorResponse,
    response_model_exclude_none=True,
)
async def get_colaborador(colaborador_id: ColaboradorIdDep, store: StoreDep) -> ColaboradorResponse:
    colaborador = store.find_by_id(colaborador_id)
    if colaborador is None:
        raise _not_found(colaborador_id)
    return ColaboradorResponse(data=colaborador)


@colaboradores_router.post(
    "",
    response_model=ColaboradorResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_colaborador(body: JsonBodyDep, store: StoreDep, settings: SettingsDep) -> ColaboradorResponse:
    """Create an employee after checking the whole payload."""
    errors = validate_colaborador_payload(body, strict=settings.strict_validation)
    if errors:
        raise ClientInputError(INVALID_PAYLOAD, errors)
    try:
        payload = CreateColaboradorRequest.model_validate(body)
    except ValidationError as exc:
        raise ClientInputError(INVALID_PAYLOAD, _schema_errors(exc)) from None

    colaborador = store.create(payload.model_dump())
    logger.info("Created colaborador %s", colaborador.id)
    return ColaboradorResponse(message="Colaborador criado com sucesso", data=colaborador)


@colaboradores_router.put(
    "/{colaborador_id}",
    response_model=ColaboradorResponse,
    response_model_exclude_none=True,
)
async def update_colaborador(
    colaborador_id: ColaboradorIdDep,
    body: JsonBodyDep,
    store: StoreDep,
    settings: SettingsDep,
) -> ColaboradorResponse:
    """Merge the provided fields onto an existing employee."""
    errors = validate_colaborador_payload(body, strict=settings.strict_validation, partial=True)
    if errors:
        raise ClientInputError(INVALID_PAYLOAD, errors)
    try:
        payload = UpdateColaboradorRequest.model_validate(body)
    except ValidationError as exc:
        raise ClientInputError(INVALID_PAYLOAD, _schema_errors(exc)) from None

    colaborador = store.update(colaborador_id, payload.model_dump(exclude_unset=True))
    if colaborador is None:
        raise _not_found(colaborador_id)
    logger.info("Updated colaborador %s", colaborador_id)
    return ColaboradorResponse(message="Colaborador atualizado com sucesso", data=colaborador)


@colaboradores_router.delete(
    "/{colaborador_id}",
    response_model=DeleteColaboradorResponse,
)
async def delete_colaborador(colaborador_id: ColaboradorIdDep, store: StoreDep) -> DeleteColaboradorResponse:
    if not store.delete(colaborador_id):
        raise _not_found(colaborador_id)
    logger.info("Deleted colaborador %s", colaborador_id)
    return DeleteColaboradorResponse(message="Colaborador excluído com sucesso")
