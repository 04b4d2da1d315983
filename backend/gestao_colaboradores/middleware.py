from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING

from fastapi.middleware.cors import CORSMiddleware

from gestao_colaboradores.exceptions import RateLimitExceeded, error_response
from gestao_colaboradores.services.security import RateLimiter, apply_security_headers

if TYPE_CHECKING:
    from fastapi import FastAPI, Request, Response

    from gestao_colaboradores.config import Settings

logger = logging.getLogger("gestao_colaboradores.requests")

PipelineStep = Callable[["Request"], Awaitable["Response | None"]]
CallNext = Callable[["Request"], Awaitable["Response"]]


def client_key(request: Request) -> str:
    """Key used to identify the client for rate limiting."""
    return request.client.host if request.client else "unknown"


def rate_limit_step(limiter: RateLimiter) -> PipelineStep:
    """Build a step that rejects clients over their request budget."""

    async def _check(request: Request) -> Response | None:
        decision = limiter.check(client_key(request))
        if decision.allowed:
            return None
        return error_response(request, RateLimitExceeded(decision.retry_after))

    return _check


class RequestPipeline:
    """Run ordered steps before routing.

    Each step returns None to continue or a response to stop the chain. The
    first response wins and the route is never called. Security headers are
    set on whatever response comes out, and every request is logged.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self.steps = list(steps)

    async def __call__(self, request: Request, call_next: CallNext) -> Response:
        start = time.perf_counter()
        response: Response | None = None
        try:
            response = await self._run_steps(request)
            if response is None:
                response = await call_next(request)
        finally:
            # an exception here becomes a 500 in ServerErrorMiddleware
            self._log(request, response.status_code if response is not None else 500, start)
        apply_security_headers(response.headers)
        return response

    async def _run_steps(self, request: Request) -> Response | None:
        for step in self.steps:
            response = await step(request)
            if response is not None:
                return response
        return None

    @staticmethod
    def _log(request: Request, status_code: int, start: float) -> None:
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        extra = {
            "method": request.method,
            "path": request.url.path,
            "status": status_code,
            "duration_ms": duration_ms,
            "client": client_key(request),
        }
        level = logging.WARNING if status_code >= 400 else logging.INFO
        logger.log(
            level,
            "%s %s -> %s (%sms)",
            request.method,
            request.url.path,
            status_code,
            duration_ms,
            extra=extra,
        )


def build_rate_limiter(settings: Settings) -> RateLimiter:
    return RateLimiter(
        window_seconds=settings.rate_limit_window_ms / 1000,
        max_requests=settings.rate_limit_max,
        cleanup_probability=settings.rate_limit_cleanup_probability,
        max_entries=settings.rate_limit_max_entries,
    )


def setup_middleware(app: FastAPI, settings: Settings, rate_limiter: RateLimiter | None = None) -> None:
    """Configure application middleware."""
    steps: list[PipelineStep] = []
    if rate_limiter is not None:
        steps.append(rate_limit_step(rate_limiter))
    app.middleware("http")(RequestPipeline(steps))

    app.add_middleware(
        CORSMiddleware,  # ty: ignore[invalid-argument-type]
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
