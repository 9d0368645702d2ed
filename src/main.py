"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from src.api import auth, tasks, users
from src.config import get_settings
from src.logging_config import configure_logging
from src.schemas.errors import ErrorResponse, field_violations
from src.services.errors import InternalFailure, ServiceError, ValidationFailed

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"Starting Task Management API ({settings.environment})")
    yield


app = FastAPI(
    title="Task Management API",
    description="Multi-user task tracking with per-user ownership",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Translate a service error kind into its HTTP response."""
    errors = exc.violations if isinstance(exc, ValidationFailed) and exc.violations else None
    body = ErrorResponse(detail=exc.message, errors=errors)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report invalid request fields as a 400 with one entry per field."""
    return await service_error_handler(
        request, ValidationFailed(violations=field_violations(exc.errors()))
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    """Log unexpected failures and hide their detail from the client."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return await service_error_handler(request, InternalFailure())


# Register routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(tasks.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}


@app.get("/hello", response_class=PlainTextResponse)
async def hello():
    """Unauthenticated greeting."""
    return "Hello, user!"
