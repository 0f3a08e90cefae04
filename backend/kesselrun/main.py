"""
KesselRun API
Main FastAPI Application
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.httpsredirect import HTTPSRedirectMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.sessions import SessionMiddleware
import time
import logging

from kesselrun.core.config import settings
from kesselrun.core.rate_limit import limiter
from kesselrun.api.errors import domain_exception_handler, request_validation_exception_handler
from kesselrun.api.versioning import (
    SUPPORTED_VERSIONS_HEADER,
    include_versioned_routers,
    supported_versions_header,
)
from kesselrun.infrastructure.di.providers import get_configured_container
from kesselrun.infrastructure.di.container import Container
from kesselrun.infrastructure.observability import (
    ObservabilityMiddleware,
    RequestLoggingMiddleware,
    METRICS_CONTENT_TYPE,
    render_metrics,
    configure_structlog,
    setup_tracing,
)
from kesselrun.shared_kernel.exceptions import DomainException

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    force=True,
)
logger = logging.getLogger(__name__)
app_logger = logging.getLogger("kesselrun")
app_logger.setLevel(settings.LOG_LEVEL)

configure_structlog(settings.LOG_LEVEL, json_output=settings.STRUCTURED_LOGGING_ENABLED)
if settings.TRACING_ENABLED:
    setup_tracing(settings.PROJECT_NAME)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Wire the container and handler table before serving requests."""
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    logger.info(f"Environment: {settings.APP_ENV}")
    logger.info(f"API versions: {', '.join(settings.API_VERSIONS)}")

    container = get_configured_container()
    app.state.container = container

    yield

    Container.reset()
    logger.info(f"Shutting down {settings.PROJECT_NAME}")


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Command and query API",
    docs_url="/api/docs" if settings.docs_enabled else None,
    redoc_url="/api/redoc" if settings.docs_enabled else None,
    openapi_url="/api/openapi.json" if settings.docs_enabled else None,
    lifespan=lifespan,
)

# Add rate limiter state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(DomainException, domain_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

# Middleware, innermost first

# Request timing middleware (innermost)
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    response.headers[SUPPORTED_VERSIONS_HEADER] = supported_versions_header(settings.API_VERSIONS)
    return response


app.add_middleware(RequestLoggingMiddleware)

if settings.OBSERVABILITY_ENABLED:
    app.add_middleware(ObservabilityMiddleware)

if settings.SESSION_ENABLED:
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY,
        max_age=settings.SESSION_MAX_AGE,
        https_only=settings.HTTPS_REDIRECT_ENABLED,
    )

if settings.HTTPS_REDIRECT_ENABLED:
    app.add_middleware(HTTPSRedirectMiddleware)

# Trusted Host Middleware (optional, for production)
if not settings.DEBUG:
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=settings.ALLOWED_HOSTS
    )

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Correlation-ID", SUPPORTED_VERSIONS_HEADER],
)


# Exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions"""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}",
        exc_info=True,
        extra={
            "method": request.method,
            "url": str(request.url),
            "client_host": request.client.host if request.client else None,
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "An internal error occurred",
            "error": str(exc) if settings.DEBUG else None,
            "type": type(exc).__name__ if settings.DEBUG else None
        }
    )


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "environment": settings.APP_ENV
    }


if settings.METRICS_ENABLED:
    @app.get(settings.METRICS_PATH, tags=["Metrics"])
    async def metrics():
        return Response(content=render_metrics(), media_type=METRICS_CONTENT_TYPE)


# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint"""
    return {
        "message": "KesselRun API",
        "version": settings.VERSION,
        "api_versions": settings.API_VERSIONS,
        "docs": "/api/docs" if settings.docs_enabled else None
    }


# Include versioned API routers
include_versioned_routers(app, settings.API_VERSIONS)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "kesselrun.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
