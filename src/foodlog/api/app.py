"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from foodlog.api.auth import router as auth_router
from foodlog.api.days import router as days_router
from foodlog.api.foods import router as foods_router
from foodlog.app_logging import configure_logging
from foodlog.config import parse_cors_origins
from foodlog.containers import AppContainer
from foodlog.errors import FoodLogError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="FoodLog API", lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(FoodLogError)
    async def handle_app_error(request: Request, exc: FoodLogError) -> JSONResponse:
        if exc.status_code >= 500:  # noqa: PLR2004
            logger.error(
                "%s on %s %s: %s",
                type(exc).__name__,
                request.method,
                request.url.path,
                exc.message,
            )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400, content={"error": _validation_message(exc)}
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error on %s %s", request.method, request.url.path
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    app.include_router(auth_router)
    app.include_router(days_router)
    app.include_router(foods_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"name": "FoodLog API", "status": "running"}

    @app.get("/health")
    async def health() -> dict[str, bool]:
        """Simple health check endpoint."""
        return {"ok": True}

    return app


def _validation_message(exc: RequestValidationError) -> str:
    """Summarize the first request validation error."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(
        str(part) for part in first.get("loc", ()) if part not in {"body", "query", "path"}
    )
    message = first.get("msg", "invalid value")
    return f"Invalid {location}: {message}" if location else f"Invalid request: {message}"
