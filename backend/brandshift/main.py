"""Brandshift API application.

Every request gets an X-Request-ID, which is echoed in the structured error
bodies ({"error", "code", "request_id"}) so a failing call can be matched
to its log lines. The generation endpoint keeps its own
{"success", "message"} envelope.
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from brandshift.api import router as api_router
from brandshift.core.config import get_settings
from brandshift.core.database import db_manager
from brandshift.core.logging import get_logger, setup_logging
from brandshift.integrations.openai import close_openai, init_openai

setup_logging()
logger = get_logger(__name__)

REDACTED_KEYS = frozenset(
    {"password", "token", "secret", "api_key", "apikey", "authorization"}
)
BODYLESS_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


def sanitize_body(body: Any) -> Any:
    """Return a copy of a JSON body with credential-like keys masked."""
    if isinstance(body, dict):
        return {
            key: "****" if key.lower() in REDACTED_KEYS else sanitize_body(value)
            for key, value in body.items()
        }
    if isinstance(body, list):
        return [sanitize_body(item) for item in body]
    return body


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def _outcome(status_code: int) -> tuple[int, str]:
    if status_code >= 500:
        return logging.ERROR, "Request failed"
    if status_code >= 400:
        return logging.WARNING, "Request rejected"
    return logging.INFO, "Request completed"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags each request with an ID and logs it once on the way out."""

    async def dispatch(self, request: Request, call_next: Any) -> Any:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.monotonic()

        if request.method not in BODYLESS_METHODS and logger.isEnabledFor(
            logging.DEBUG
        ):
            await self._log_body(request, request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        level, message = _outcome(response.status_code)
        logger.log(
            level,
            message,
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "query": str(request.query_params) or None,
                "status_code": response.status_code,
                "duration_ms": round((time.monotonic() - start_time) * 1000, 2),
            },
        )
        return response

    @staticmethod
    async def _log_body(request: Request, request_id: str) -> None:
        body = await request.body()
        if not body:
            return
        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.debug(
                "Request body (non-JSON)",
                extra={"request_id": request_id, "body_length": len(body)},
            )
            return
        logger.debug(
            "Request body",
            extra={"request_id": request_id, "body": sanitize_body(payload)},
        )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 with every failing field flattened into one message."""
    request_id = _request_id(request)
    errors = exc.errors()
    error_msg = "; ".join(
        f"{'.'.join(str(part) for part in e['loc'])}: {e['msg']}" for e in errors
    )
    logger.warning(
        "Validation error",
        extra={
            "request_id": request_id,
            "error_count": len(errors),
            "error_message": error_msg,
        },
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": error_msg,
            "code": "VALIDATION_ERROR",
            "request_id": request_id,
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = _request_id(request)
    logger.error(
        "Unhandled exception",
        extra={
            "request_id": request_id,
            "error_type": type(exc).__name__,
            "error_message": str(exc),
        },
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "An internal error occurred. Please try again later.",
            "code": "INTERNAL_ERROR",
            "request_id": request_id,
        },
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    """Open the database and the generation client; close both on shutdown.

    A missing OPENAI_API_KEY does not stop startup. Generation requests then
    fail with a 500 until the key is configured.
    """
    settings = get_settings()
    logger.info(
        "Starting Brandshift",
        extra={"version": settings.app_version, "environment": settings.environment},
    )

    db_manager.init_db()
    openai_client = await init_openai()
    if not openai_client.available:
        logger.warning("Color scheme generation disabled until OPENAI_API_KEY is set")

    yield

    await close_openai()
    await db_manager.close()
    logger.info("Brandshift stopped")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # CORS is added last, so it wraps this and answers preflights itself
    app.add_middleware(RequestLoggingMiddleware)

    cors_origins = [settings.frontend_url] if settings.frontend_url else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/health/db", tags=["Health"])
    async def database_health() -> dict[str, str | bool]:
        is_healthy = await db_manager.check_connection()
        return {"status": "ok" if is_healthy else "error", "database": is_healthy}

    @app.get("/health/integrations", tags=["Health"])
    async def integrations_health() -> dict[str, Any]:
        """Generation provider configuration. The key itself is never returned."""
        current = get_settings()
        return {
            "openai": {
                "api_key_set": bool(current.openai_api_key),
                "model": current.openai_model,
                "base_url": current.openai_base_url,
                "strict_validation": current.color_scheme_strict_validation,
            },
        }

    app.include_router(api_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "brandshift.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
