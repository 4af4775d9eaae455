"""
FastAPI application entry point.

Sets up the FastAPI app, registers routes, middleware, and exception handlers.
"""

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from archsim import __version__
from archsim.infrastructure.api.middleware import (
    ErrorHandlerMiddleware,
    LoggingMiddleware,
    MetricsMiddleware,
    RateLimitMiddleware,
)
from archsim.infrastructure.api.routes import health, simulations, topology
from archsim.infrastructure.api.schemas.error_schema import ProblemDetails, status_text
from archsim.infrastructure.observability import (
    configure_logging,
    get_logger,
    instrument_fastapi_app,
    setup_tracing,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Startup:
    - Configure observability (logging, tracing)

    Shutdown:
    - Flush pending spans
    """
    configure_logging()
    provider = setup_tracing()
    logger.info("Application started", version=__version__)

    yield

    if provider is not None:
        provider.shutdown()
    logger.info("Application stopped")


def _problem_response(
    request: Request, status_code: int, detail: str
) -> JSONResponse:
    correlation_id = getattr(request.state, "correlation_id", None) or str(uuid.uuid4())

    problem = ProblemDetails(
        type="about:blank",
        title=status_text(status_code),
        status=status_code,
        detail=detail,
        instance=request.url.path,
        correlation_id=correlation_id,
    )

    return JSONResponse(
        status_code=status_code,
        content=problem.model_dump(exclude_none=True),
        media_type="application/problem+json",
        headers={"X-Correlation-ID": correlation_id},
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        # Drop the leading "body" segment; callers care about their own fields
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "Validation failed: " + "; ".join(messages)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="Architecture Simulation API",
        description=(
            "Analytical capacity, latency and failure-injection simulator for "
            "system-design architecture sketches."
        ),
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,  # Cannot use credentials with wildcard origins
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Order matters: last added = first executed
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)  # Outermost: catches all errors

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(simulations.router, prefix="/api/v1")
    app.include_router(topology.router, prefix="/api/v1")

    # Spans go through the global provider once setup_tracing() installs it
    instrument_fastapi_app(app)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Convert HTTPException to RFC 7807 Problem Details."""
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return _problem_response(request, exc.status_code, detail)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Convert Pydantic validation errors to RFC 7807 Problem Details."""
        return _problem_response(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            _format_validation_errors(exc),
        )

    @app.get("/", status_code=status.HTTP_200_OK, include_in_schema=False)
    async def root():
        """Root endpoint - API information."""
        return {
            "name": "Architecture Simulation API",
            "version": __version__,
            "status": "operational",
            "docs": "/docs",
        }

    return app


# Create app instance
app = create_app()
