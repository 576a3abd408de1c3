from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from contatos.core.config import get_settings
from contatos.core.log_config import configure_logging
from contatos.db.create_tables import create_all
from contatos.routers import account as account_router
from contatos.routers import addresses as addresses_router
from contatos.routers import auth as auth_router
from contatos.routers import contacts as contacts_router
from contatos.services.address_service import AddressService
from contatos.services.contact_service import ContactService
from contatos.services.errors import ServiceError

API_PREFIX = "/api"

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (anti clickjacking, nosniff, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Cache-Control", "no-store")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


async def _service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    headers = {"Retry-After": str(exc.retry_after)} if getattr(exc, "retry_after", None) else None
    return JSONResponse(
        {"ok": False, "error": exc.code, "message": exc.message}, status_code=exc.status_code, headers=headers
    )


@asynccontextmanager
async def _lifespan(app: FastAPI):
    create_all()
    yield


def create_app(
    *,
    contact_service: Optional[ContactService] = None,
    address_service: Optional[AddressService] = None,
) -> FastAPI:
    """Factory compatível com uvicorn/gunicorn (uvicorn contatos.app:create_app --factory)."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Contatos API", lifespan=_lifespan)

    allowed_cors = set(settings.cors_origins)
    if settings.app_env != "prod":
        allowed_cors.update({"http://localhost:5173", "http://127.0.0.1:5173"})
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    app.add_exception_handler(ServiceError, _service_error_handler)

    app.state.contact_service = contact_service or ContactService()
    app.state.address_service = address_service or AddressService()

    app.include_router(auth_router.router, prefix=API_PREFIX)
    app.include_router(contacts_router.router, prefix=API_PREFIX)
    app.include_router(addresses_router.router, prefix=API_PREFIX)
    app.include_router(account_router.router, prefix=API_PREFIX)
    return app
