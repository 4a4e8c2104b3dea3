"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from compliance_api import __version__
from compliance_api.config import get_settings
from compliance_api.exceptions import ComplianceAPIError
from compliance_api.middleware.error_handler import (
    compliance_exception_handler,
    generic_exception_handler,
    http_exception_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)
from compliance_api.routers import (
    dashboard,
    documents,
    emergency_contacts,
    employees,
    expiring,
    inductions,
    licenses,
)

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Responses carry personal data
        if "Cache-Control" not in response.headers:
            response.headers["Cache-Control"] = "no-store, max-age=0"
        return response


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_settings()

    app = FastAPI(
        title=config.app_name,
        version=__version__,
        description="Workforce compliance records API",
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )

    # Sanitized error handlers; domain errors keep their stable codes
    app.add_exception_handler(ComplianceAPIError, compliance_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    allowed_origins = []
    for origin in config.cors_origins_list:
        if origin == "*":
            raise ValueError(
                "CORS_ORIGINS cannot contain '*' wildcard when allow_credentials=True. "
                "Specify explicit origins."
            )
        if origin.startswith("http://") or origin.startswith("https://"):
            allowed_origins.append(origin)

    app.add_middleware(SecurityHeadersMiddleware)
    # CORS middleware - added last so it runs first on incoming requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-Requested-With"],
    )

    app.include_router(employees.router, prefix="/api/v1/employees", tags=["Employees"])
    app.include_router(licenses.router, prefix="/api/v1", tags=["Licenses"])
    app.include_router(inductions.router, prefix="/api/v1", tags=["Inductions"])
    app.include_router(
        emergency_contacts.router,
        prefix="/api/v1",
        tags=["Emergency Contacts"],
    )
    app.include_router(documents.router, prefix="/api/v1", tags=["Documents"])
    app.include_router(expiring.router, prefix="/api/v1/expiring", tags=["Expiring"])
    app.include_router(dashboard.router, prefix="/api/v1/dashboard", tags=["Dashboard"])

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    logger.info("Application created (environment=%s)", config.environment)
    return app


app = create_app()
