from __future__ import annotations

import logging
import traceback
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gestao_colaboradores.schemas.base import CamelModel
from gestao_colaboradores.services.security import apply_security_headers

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET /",
    "GET /health",
    "GET /api/status",
    "GET /api/info",
    "GET /api/colaboradores",
    "GET /api/colaboradores/:id",
    "POST /api/colaboradores",
    "PUT /api/colaboradores/:id",
    "DELETE /api/colaboradores/:id",
    "GET /api/colaboradores/departamento/:departamento",
]


class ErrorResponse(CamelModel):
    """Standard error envelope."""

    success: bool = False
    error: str
    message: str | None = None
    details: list[str] | None = None
    retry_after: int | None = None
    available_endpoints: list[str] | None = None
    path: str | None = None
    timestamp: datetime
    stack: str | None = None


class AppError(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        *,
        detail: str | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.detail = detail
        super().__init__(self.message)


class ClientInputError(AppError):
    """Missing or malformed fields in the request."""

    def __init__(self, message: str, details: list[str] | None = None, *, detail: str | None = None) -> None:
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
        self.details = details


class MalformedBodyError(ClientInputError):
    """The request body could not be parsed as JSON."""

    def __init__(self) -> None:
        super().__init__("JSON malformado", detail="O corpo da requisição contém JSON malformado")


class NotFoundError(AppError):
    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class RateLimitExceeded(AppError):
    def __init__(self, retry_after: int | None = None) -> None:
        super().__init__(
            "Muitas requisições. Tente novamente mais tarde.",
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        )
        self.retry_after = retry_after


class InternalError(AppError):
    def __init__(self, message: str = "Erro interno do servidor") -> None:
        super().__init__(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _is_development(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return settings is not None and settings.is_development


def error_response(request: Request, exc: AppError) -> JSONResponse:
    """Render an AppError as the standard error envelope."""
    body = ErrorResponse(
        error=exc.message,
        message=exc.detail,
        details=getattr(exc, "details", None),
        retry_after=getattr(exc, "retry_after", None),
        path=request.url.path,
        timestamp=datetime.now(UTC),
    )
    headers = None
    if isinstance(exc, RateLimitExceeded) and exc.retry_after is not None:
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers=headers,
    )


async def _app_exception_handler(request: Request, exc: AppError) -> JSONResponse:
    level = logging.ERROR if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logging.WARNING
    logger.log(
        level,
        "Request failed with %s on %s %s: %s",
        exc.status_code,
        request.method,
        request.url.path,
        exc.message,
    )
    return error_response(request, exc)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        logger.warning("Route not found: %s %s", request.method, request.url.path)
        body = ErrorResponse(
            error=f"Rota não encontrada - {request.method} {request.url.path}",
            available_endpoints=AVAILABLE_ENDPOINTS,
            path=request.url.path,
            timestamp=datetime.now(UTC),
        )
    else:
        body = ErrorResponse(
            error=str(exc.detail),
            path=request.url.path,
            timestamp=datetime.now(UTC),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()]
    return error_response(request, ClientInputError("Dados de entrada inválidos", details))


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    client = request.client.host if request.client else None
    logger.error(
        "Unhandled exception on %s %s",
        request.method,
        request.url,
        exc_info=exc,
        extra={"method": request.method, "path": request.url.path, "client": client},
    )
    body = ErrorResponse(
        error=InternalError().message,
        path=request.url.path,
        timestamp=datetime.now(UTC),
    )
    if _is_development(request):
        body.stack = "".join(traceback.format_exception(exc))
    response = JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )
    # Sent by ServerErrorMiddleware, outside the request pipeline.
    apply_security_headers(response.headers)
    return response


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the application."""
    app.add_exception_handler(AppError, _app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_exception_handler)
