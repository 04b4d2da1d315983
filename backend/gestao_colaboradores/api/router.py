from fastapi import APIRouter

from gestao_colaboradores.api.colaboradores import colaboradores_router

api_router = APIRouter()
api_router.include_router(colaboradores_router)
