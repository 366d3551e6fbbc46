# Main application entry point
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .api import (
    health_router,
    notes_router,
    notifications_router,
    realtime_router,
    shares_router,
)
from .config import get_settings
from .core.exceptions import NoteCollabError, TransientStoreError
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.redis_client import get_redis_client
from .database import create_tables, dispose_engine
from .realtime import CollaborationGateway, SessionManager

logger = get_logger("main")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Starting NoteCollab application",
        extra={"version": __version__, "environment": settings.environment, "debug": settings.debug},
    )

    # Redis only backs the unread-count cache, so the app runs without it
    redis_client = get_redis_client()
    try:
        await redis_client.connect()
    except Exception as e:
        logger.warning(f"Redis connection failed: {e}. Continuing without Redis...")

    # Tests create their own schema on SQLite
    if os.getenv("NOTECOLLAB_SKIP_LIFESPAN_DB") == "1":
        logger.info("Skipping DB table creation due to NOTECOLLAB_SKIP_LIFESPAN_DB=1")
    else:
        try:
            await create_tables()
        except Exception as e:
            logger.error("Failed to create database tables", exc_info=e)
            raise

    yield

    logger.info("Shutting down NoteCollab application")
    await redis_client.disconnect()
    await dispose_engine()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Every error leaves the API as ``{"error": message}``."""

    @app.exception_handler(NoteCollabError)
    async def notecollab_error_handler(request: Request, exc: NoteCollabError):
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(400, _validation_message(exc))

    @app.exception_handler(OperationalError)
    @app.exception_handler(InterfaceError)
    async def store_unavailable_handler(request: Request, exc: Exception):
        logger.error(f"Database unavailable on {request.url.path}", exc_info=exc)
        error = TransientStoreError()
        return _error(error.status_code, error.message)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}", exc_info=exc)
        return _error(500, "Internal server error")


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title="NoteCollab",
        description="Collaborative notes: sharing, version history, notifications and live co-editing",
        version=__version__,
        lifespan=lifespan,
    )

    # One room registry per app instance
    app.state.session_manager = SessionManager()
    app.state.collaboration_gateway = CollaborationGateway(app.state.session_manager)

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(notes_router, prefix="/api")
    app.include_router(shares_router, prefix="/api")
    app.include_router(notifications_router, prefix="/api")
    app.include_router(health_router, prefix="/api")
    app.include_router(realtime_router, prefix="/api")

    @app.get("/")
    async def root():
        return {"message": "NoteCollab API", "version": __version__}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("notecollab.main:app", host=settings.host, port=settings.port, reload=settings.reload)
