"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from promptjson import __version__
from promptjson.api.router import api_router
from promptjson.config import get_settings
from promptjson.exceptions import (
    EmptyInputError,
    ModelServiceError,
    OperationFailedError,
    PersistenceWriteError,
    StaleResultError,
)
from promptjson.logging_config import setup_logging
from promptjson.middleware.rate_limit import limiter
from promptjson.models.failure import ClassifiedError, ErrorCategory
from promptjson.services.error_classifier import classify_exception

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# HTTP status per classified error category
CATEGORY_STATUS = {
    ErrorCategory.INVALID_CREDENTIALS: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.QUOTA_EXCEEDED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorCategory.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCategory.OTHER_BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.UNKNOWN: status.HTTP_502_BAD_GATEWAY,
}


def classified_error_response(error: ClassifiedError) -> JSONResponse:
    """Build the response for a classified model service failure."""
    headers = None
    if error.retry_after_seconds is not None:
        headers = {"Retry-After": str(error.retry_after_seconds)}

    return JSONResponse(
        status_code=CATEGORY_STATUS[error.category],
        content={"detail": error.model_dump(mode="json")},
        headers=headers,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    settings = get_settings()

    # Setup logging with sensitive data filtering
    setup_logging(settings)

    if not settings.gemini_api_key:
        logging.getLogger(__name__).warning(
            "No Gemini API key configured; model calls will fail until one is set"
        )

    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        description="Turn natural-language prompts into structured JSON with Gemini",
        lifespan=lifespan,
    )

    # Add rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "Cache-Control"],
        max_age=3600,
    )

    # Global exception handlers
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle all unhandled exceptions."""
        logger = logging.getLogger(__name__)
        logger.error(
            f"Unhandled exception: {type(exc).__name__}",
            exc_info=exc,
            extra={
                "path": request.url.path,
                "method": request.method,
            },
        )

        if settings.debug:
            # Development: Return detailed error
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "detail": str(exc),
                    "type": type(exc).__name__,
                },
            )
        else:
            # Production: Return generic error
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "detail": "An internal error occurred.",
                },
            )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions - safe to expose."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle validation errors."""
        logger = logging.getLogger(__name__)
        logger.warning(
            f"Validation error: {exc.errors()}",
            extra={
                "path": request.url.path,
                "method": request.method,
            },
        )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": jsonable_errors(exc)},
        )

    @app.exception_handler(EmptyInputError)
    async def empty_input_handler(request: Request, exc: EmptyInputError):
        """Reject empty inputs before any model call."""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": {"category": "empty_input", "message": str(exc)}},
        )

    @app.exception_handler(ModelServiceError)
    async def model_service_error_handler(request: Request, exc: ModelServiceError):
        """Classify raw model service failures; the raw failure is only logged."""
        logger = logging.getLogger(__name__)
        logger.warning(f"Model service failure on {request.url.path}: {exc.failure.model_dump()}")
        return classified_error_response(classify_exception(exc))

    @app.exception_handler(OperationFailedError)
    async def operation_failed_handler(request: Request, exc: OperationFailedError):
        """Return an already classified failure."""
        return classified_error_response(exc.error)

    @app.exception_handler(StaleResultError)
    async def stale_result_handler(request: Request, exc: StaleResultError):
        """Report a result discarded because a newer request superseded it."""
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": "Superseded by a newer request"},
        )

    @app.exception_handler(PersistenceWriteError)
    async def persistence_write_handler(request: Request, exc: PersistenceWriteError):
        """Report a failed local write; the stores stay usable."""
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": str(exc), "notice": True},
        )

    # Include routers
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Validation errors without non-serializable context values."""
    return [
        {key: value for key, value in error.items() if key in ("type", "loc", "msg")}
        for error in exc.errors()
    ]


app = create_app()
