"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from doodle_mail.api.admin import router as admin_router
from doodle_mail.api.messages import router as messages_router
from doodle_mail.api.rooms import router as rooms_router
from doodle_mail.api.socket import router as socket_router
from doodle_mail.app_logging import configure_logging
from doodle_mail.config import parse_allowed_origins
from doodle_mail.containers import AppContainer
from doodle_mail.domain.errors import DoodleMailError, StoreError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting doodle-mail (%s)", container.settings.environment)
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="doodle-mail", lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["origin", "X-requested-with", "Content-Type", "Accept"],
    )

    app.include_router(rooms_router)
    app.include_router(messages_router)
    app.include_router(admin_router)
    app.include_router(socket_router)

    @app.exception_handler(DoodleMailError)
    async def doodle_mail_error(request: Request, exc: DoodleMailError) -> JSONResponse:
        if isinstance(exc, StoreError):
            logger.error("Store failure on %s %s", request.method, request.url.path)
        else:
            logger.info(
                "Rejected %s %s: %s", request.method, request.url.path, exc.message
            )
        return JSONResponse(
            status_code=exc.status_code, content={"detail": exc.message}
        )

    @app.get("/", response_class=PlainTextResponse)
    async def welcome() -> str:
        """Greeting used by clients to check the server is up."""
        return "Welcome to doodle-mail!"

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
