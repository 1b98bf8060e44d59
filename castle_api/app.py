from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from castle_api.core.config import Settings, get_settings
from castle_api.core.image_host import CloudinaryImageHost
from castle_api.core.logger import get_logger
from castle_api.core.mailer import SMTPMailer
from castle_api.repositories.sql_repository import SQLRepository
from castle_api.routers import auth as auth_router
from castle_api.routers import mail as mail_router
from castle_api.routers import products as products_router
from castle_api.services.auth_service import AuthService
from castle_api.services.catalog_service import CatalogService
from castle_api.services.receipt_service import ReceiptService

logger = get_logger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers on every JSON response."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def _check_database(repository: SQLRepository) -> bool:
    try:
        repository.ping()
    except Exception as exc:
        logger.error("DB_CONNECTION_FAILED", extra={"error": str(exc)})
        return False
    logger.info("DB_CONNECTION_OK")
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    state = app.state
    _check_database(state.repository)
    state.auth_service.seed_admin()
    logger.info("SERVER_STARTED", extra={"app_env": state.settings.app_env, "port": state.settings.port})
    yield
    logger.info("SERVER_SHUTDOWN")


def create_app(
    settings: Settings | None = None,
    *,
    repository: SQLRepository | None = None,
    image_host=None,
    mailer=None,
) -> FastAPI:
    """Factory compatible with uvicorn (``--factory``).

    Process-wide resources are built once here and stored on ``app.state``;
    tests pass fakes for the image host and the mailer.
    """
    settings = settings or get_settings()
    repository = repository or SQLRepository()

    app = FastAPI(title="Castle Clothing API", lifespan=lifespan)
    app.state.settings = settings
    app.state.repository = repository
    app.state.auth_service = AuthService(settings=settings, repository=repository)
    app.state.catalog_service = CatalogService(image_host or CloudinaryImageHost(settings), repository=repository)
    app.state.receipt_service = ReceiptService(mailer or SMTPMailer(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    app.include_router(auth_router.router)
    app.include_router(products_router.router)
    app.include_router(mail_router.router)
    return app
