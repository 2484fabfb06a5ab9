"""
Certifica FastAPI Application

HTTP entry point for certificate generation. The platform posts a
completion record and receives the PDF as a download.

Example usage:
    # Start the server
    uvicorn app:app --host 0.0.0.0 --port 8000 --reload

    # Health check
    curl http://localhost:8000/health
"""

import os
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core import __version__
from core.errors import (
    CertificateError, MissingRequiredFieldError,
    generation_error_response, validation_error_response,
)
from core.logging import RequestLoggingMiddleware, get_logger, setup_logging

from api.routes.certificates import router as certificates_router

setup_logging()
logger = get_logger(__name__)

CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report invalid certificate records as 400 with readable messages."""
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        errors.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return validation_error_response(errors)


async def certificate_error_handler(request: Request, exc: CertificateError) -> JSONResponse:
    if isinstance(exc, MissingRequiredFieldError):
        return generation_error_response(exc, code=400)
    return generation_error_response(exc)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application with logging middleware,
                 error handlers and certificate routes
    """
    app = FastAPI(
        title="Certifica",
        description="Generate course completion certificates",
        version=__version__,
        docs_url="/api-docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(CertificateError, certificate_error_handler)

    app.include_router(certificates_router)

    @app.get("/health", tags=["health"])
    async def health_check() -> Dict[str, Any]:
        """
        Health check endpoint for monitoring and load balancer readiness.

        Example:
            >>> # GET /health
            >>> {"status": "healthy", "service": "certifica", "version": "0.1.0"}
        """
        return {
            "status": "healthy",
            "service": "certifica",
            "version": __version__,
        }

    return app


app = create_app()
