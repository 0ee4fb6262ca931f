"""
FastAPI application for the Customer API.

Provides REST API for:
- User registration and login (bcrypt + JWT bearer tokens)
- Customer read/update/delete/list/search
- Health monitoring and Prometheus metrics
"""

from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta

from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from customer_api.auth.passwords import PasswordHasher
from customer_api.auth.service import AuthService
from customer_api.auth.tokens import TokenService
from customer_api.config import Settings, get_settings
from customer_api.dependencies import get_database
from customer_api.errors import AuthError, ServiceError
from customer_api.observability.logging import configure_logging, get_logger
from customer_api.observability.logging_middleware import (
    SlowRequestLogger,
    StructuredLoggingMiddleware,
)
from customer_api.observability.metrics import generate_metrics, track_error
from customer_api.observability.middleware import PrometheusMiddleware, normalize_endpoint
from customer_api.routers import auth_router, customers_router
from customer_api.storage.customers import CustomerStore
from customer_api.storage.database import Database
from customer_api.storage.users import UserStore

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Internal Server Error"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Opens the shared database connection before serving. If the database
    cannot be opened the error propagates and the server exits.
    """
    database: Database = app.state.database

    logger.info("=== Customer API Starting ===")

    try:
        await database.initialize()
        logger.info("✓ Database connected", path=str(database.db_path))
    except Exception as e:
        logger.error(f"Startup failed: {e}", exc_info=True)
        raise

    logger.info("=== Service Ready ===")

    try:
        yield
    finally:
        logger.info("=== Shutting down ===")
        database.close()
        logger.info("✓ Database connection closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application and its process-scoped services.

    Args:
        settings: Configuration (defaults to the global settings)

    Returns:
        FastAPI: Configured application
    """
    settings = settings or get_settings()

    configure_logging(
        log_level=settings.logging.level,
        json_output=settings.logging.json_output,
        colorized=settings.logging.colorized,
        service_name=settings.logging.service_name,
        service_version=settings.logging.service_version,
        environment=settings.logging.environment,
    )
    settings.validate_configuration()

    app = FastAPI(
        title="Customer API",
        description="Credential management and customer resource access",
        version=settings.logging.service_version,
        lifespan=lifespan,
    )

    # Process-scoped state, injected into handlers via dependencies
    database = Database(db_path=settings.database.path)
    token_service = TokenService(
        secret=settings.jwt.secret,
        algorithm=settings.jwt.algorithm,
        expires_in=timedelta(minutes=settings.jwt.expires_minutes),
    )
    app.state.settings = settings
    app.state.database = database
    app.state.token_service = token_service
    app.state.customer_store = CustomerStore(database)
    app.state.auth_service = AuthService(
        users=UserStore(database),
        hasher=PasswordHasher(rounds=settings.password.bcrypt_rounds),
        tokens=token_service,
    )

    cors_origins = settings.cors.origins_list
    if "*" in cors_origins:
        logger.warning("CORS allows ALL origins (*) - configure CORS_ALLOWED_ORIGINS for production")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.methods_list,
        allow_headers=settings.cors.headers_list,
        max_age=settings.cors.max_age,
    )

    # Processed in reverse order of registration:
    # StructuredLoggingMiddleware (outermost) sets request context first
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(
        SlowRequestLogger,
        warning_threshold_ms=settings.logging.slow_request_warning_ms,
        error_threshold_ms=settings.logging.slow_request_error_ms,
    )
    app.add_middleware(StructuredLoggingMiddleware)

    app.include_router(auth_router)
    app.include_router(customers_router)

    register_exception_handlers(app)
    register_system_routes(app)

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Map every failure to a 4xx/5xx response at the handler boundary."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        endpoint = normalize_endpoint(request.url.path)
        track_error(error_type=type(exc).__name__, endpoint=endpoint)

        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                path=request.url.path,
                method=request.method,
                error=exc.message,
            )
            return JSONResponse(
                status_code=exc.status_code,
                content={"success": False, "message": exc.message},
            )

        headers = None
        if isinstance(exc, AuthError) and exc.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        logger.info(
            "Request rejected",
            path=request.url.path,
            status_code=exc.status_code,
            reason=exc.message,
        )
        return PlainTextResponse(exc.message, status_code=exc.status_code, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        track_error(error_type="validation", endpoint=normalize_endpoint(request.url.path))
        return PlainTextResponse("Invalid request body", status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled error",
            path=request.url.path,
            method=request.method,
            exc_info=exc,
        )
        track_error(error_type="internal", endpoint=normalize_endpoint(request.url.path))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": GENERIC_ERROR_MESSAGE},
        )


def register_system_routes(app: FastAPI) -> None:
    """Health, metrics and root endpoints."""

    @app.get("/health", tags=["System"])
    async def health(response: Response, database: Database = Depends(get_database)):
        """
        Health check.

        Returns 503 if the database does not answer a trivial query.
        """
        healthy = await database.ping()
        if not healthy:
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

        return {
            "status": "healthy" if healthy else "unhealthy",
            "database": healthy,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    @app.get("/metrics", tags=["System"])
    async def metrics():
        """Prometheus scrape endpoint."""
        payload, content_type = generate_metrics()
        return Response(content=payload, media_type=content_type)

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": "Customer API",
            "version": app.version,
            "docs": "/docs",
            "health": "/health",
        }


app = create_app()


def run() -> None:
    """Console entry point: serve with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "customer_api.main:app",
        host=settings.service.host,
        port=settings.service.port,
        reload=settings.service.reload,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    run()
