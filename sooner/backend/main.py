"""
Sooner Backend - FastAPI Application

This is the main entry point for the REST API: accounts, tasks and the
task-picking assistant.

Usage:
    uvicorn sooner.backend.main:app --host 127.0.0.1 --port 3000 --reload

    Or run directly:
    sooner-api
"""

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

# Load .env file before anything else
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from sooner import PROJECT_ROOT, __version__
from sooner.assistant import AssistantProvider, AssistantService, build_provider
from sooner.config import Settings, load_settings
from sooner.errors import SoonerError
from sooner.logging_config import bind_request_context, setup_logging
from sooner.security import build_resolver

from .models import ErrorResponse, HealthCheck
from .routes import api_router
from .store import DocumentStore


logger = logging.getLogger(__name__)


def resolve_data_file(settings: Settings) -> Path:
    """Relative data paths are taken from the project root."""
    path = Path(settings.store.data_file).expanduser()
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting Sooner backend...")
    app.state.started_at = datetime.now()

    settings: Settings = app.state.settings
    store: DocumentStore = app.state.store
    logger.info(
        f"Data file {store.path} (strict={store.strict}), auth mode {settings.auth.mode}, "
        f"assistant provider {app.state.assistant.provider.name}"
    )

    yield

    logger.info("Shutting down Sooner backend...")


def create_app(
    settings: Settings | None = None,
    store: DocumentStore | None = None,
    provider: AssistantProvider | None = None,
    configure_logging: bool = True,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Defaults to load_settings()
        store: Defaults to a DocumentStore on settings.store.data_file
        provider: Assistant provider; defaults to the configured one
        configure_logging: Install the structlog handlers on the root logger
    """
    if configure_logging:
        setup_logging()

    settings = settings or load_settings()
    store = store or DocumentStore(resolve_data_file(settings), strict=settings.store.strict)
    provider = provider or build_provider(settings.assistant)

    app = FastAPI(
        title="Sooner API",
        description="Personal task tracking with an optional task-picking assistant",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = store
    app.state.identity_resolver = build_resolver(settings.auth)
    app.state.assistant = AssistantService(provider, timeout_seconds=settings.assistant.timeout_seconds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def tag_request_logs(request: Request, call_next):
        """Tag every log line of a request with a request id."""
        bind_request_context(request_id=uuid.uuid4().hex[:12], method=request.method, path=request.url.path)
        return await call_next(request)

    register_exception_handlers(app)

    # =========================================================================
    # Health Check Endpoint
    # =========================================================================

    @app.get("/health", response_model=HealthCheck, tags=["health"])
    async def health_check(request: Request):
        """Check that the data file is readable."""
        # File read under the store lock; keep it off the event loop
        store_ok = await run_in_threadpool(request.app.state.store.is_healthy)
        services = {
            "store": "healthy" if store_ok else "unhealthy",
            "assistant": request.app.state.assistant.provider.name,
        }
        overall = "healthy" if services["store"] == "healthy" else "degraded"
        return HealthCheck(status=overall, version=__version__, timestamp=datetime.now(), services=services)

    app.include_router(api_router)

    return app


# =============================================================================
# Error Handlers
# =============================================================================


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(SoonerError)
    async def sooner_error_handler(request: Request, exc: SoonerError):
        """Translate domain errors to status + {error, code}."""
        if exc.status_code >= 500:
            logger.error(f"{exc.code}: {exc.message}", exc_info=exc.__cause__ is not None)
        else:
            logger.info(f"{exc.code}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=exc.message, code=exc.code).model_dump(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions with consistent format."""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=str(exc.detail), code=f"HTTP_{exc.status_code}").model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error="Internal server error", code="INTERNAL_ERROR").model_dump(),
        )


# =============================================================================
# Main Entry Point
# =============================================================================

app = create_app()


def run() -> None:
    import uvicorn

    settings: Settings = app.state.settings
    uvicorn.run(
        "sooner.backend.main:app",
        host=settings.server.host,
        port=settings.server.port,
        log_level="info",
    )


if __name__ == "__main__":
    run()
