"""FastAPI application factory. No business logic; only wiring and middleware."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session, sessionmaker

from amnii.api import router as api_router
from amnii.core.config import Settings, get_settings
from amnii.core.database import build_session_factory
from amnii.core.errors import first_violation_message
from amnii.core.security import TokenService

logger = logging.getLogger(__name__)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report only the first violated field, as a 400."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": first_violation_message(exc.errors())},
    )


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker[Session] | None = None,
) -> FastAPI:
    """
    Build the application.

    The token service is created here, once, from the signing secret; a blank
    secret raises before any route is mounted.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Amnii API",
        version="1.0.0",
        description="API documentation for amnii application",
        docs_url="/api-docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.token_service = TokenService.from_settings(settings)
    app.state.session_factory = session_factory or build_session_factory(
        settings.DATABASE_URL, echo=settings.DEBUG
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Authorization"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Amnii API"}

    logger.debug("Application created (env=%s)", settings.APP_ENV)
    return app
