"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from clubsite.api.accounts import router as accounts_router
from clubsite.api.admin import router as admin_router
from clubsite.api.content import router as content_router
from clubsite.api.gallery import router as gallery_router
from clubsite.api.joker_draw import router as joker_draw_router
from clubsite.api.messages import router as messages_router
from clubsite.api.schemas import envelope
from clubsite.api.social import router as social_router
from clubsite.app_logging import configure_logging
from clubsite.containers import AppContainer
from clubsite.domain.errors import (
    AuthError,
    AuthorizationError,
    ClubError,
    NotFoundError,
    RepositoryError,
    StorageError,
    ValidationError,
)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"

_ERROR_STATUS: tuple[tuple[type[ClubError], int], ...] = (
    (ValidationError, 422),
    (AuthError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (StorageError, 502),
    (RepositoryError, 502),
)


def error_status(exc: ClubError) -> int:
    """Return the HTTP status for a domain error."""
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 400


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Club site API", lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(ClubError)
    async def handle_club_error(request: Request, exc: ClubError) -> JSONResponse:
        status_code = error_status(exc)
        if status_code >= 500:
            logger.warning(
                "Request failed",
                extra={"path": request.url.path, "error": type(exc).__name__},
            )
        return JSONResponse(
            status_code=status_code,
            content=envelope(message=exc.message, success=False),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Rejected inputs may not be JSON-encodable, e.g. NaN.
        errors = [
            {key: value for key, value in error.items() if key != "input"}
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=422,
            content=envelope(
                data=jsonable_encoder(errors),
                message=ValidationError.default_message,
                success=False,
            ),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return JSONResponse(
            status_code=500,
            content=envelope(
                message=_unexpected_message(container, exc), success=False
            ),
        )

    app.include_router(accounts_router)
    app.include_router(gallery_router)
    app.include_router(content_router)
    app.include_router(social_router)
    app.include_router(messages_router)
    app.include_router(joker_draw_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _unexpected_message(container: AppContainer, exc: Exception) -> str:
    """Return the generic error message, with debug detail when running locally."""
    if container.settings.is_local:
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{UNEXPECTED_ERROR_MESSAGE} (debug: {detail})"
    return UNEXPECTED_ERROR_MESSAGE
