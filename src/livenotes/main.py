# Main application entry point
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api import auth_router, health_router, live_router, notes_router
from .config import Settings, get_settings
from .core.errors import InvalidInputError, LiveNotesError
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.schemas.common import ErrorResponse
from .state import build_state

logger = get_logger("main")


def _error_response(exc: LiveNotesError) -> JSONResponse:
    body = ErrorResponse(error=exc.category, message=exc.message, details=exc.details)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))


async def livenotes_error_handler(request: Request, exc: LiveNotesError) -> JSONResponse:
    """Turn a domain error into its status code and ErrorResponse body."""
    logger.info(
        "Request failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error": exc.category,
            "error_message": exc.message,
        },
    )
    return _error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or mistyped fields are InvalidInput like any other bad input."""
    fields = [".".join(str(part) for part in err["loc"] if part != "body") for err in exc.errors()]
    named = [f for f in fields if f]
    message = "invalid or missing fields: " + ", ".join(named) if named else "request body required"
    error = InvalidInputError(message, {"fields": named})
    return await livenotes_error_handler(request, error)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build an app with its own empty stores."""
    settings = settings or get_settings()
    state = build_state(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        logger.info(
            "Starting LiveNotes application",
            extra={
                "version": __version__,
                "environment": settings.environment,
                "debug": settings.debug,
                "socket_auth_policy": settings.socket_auth_policy,
            },
        )
        if settings.uses_insecure_secret:
            logger.warning(
                "SECRET_KEY not set; using the insecure development default. "
                "Do not run this configuration in production."
            )

        yield

        logger.info(
            "Shutting down LiveNotes application",
            extra={"subscribers": state.hub.subscriber_count()},
        )

    app = FastAPI(
        title="LiveNotes",
        description="Real-time collaborative note store",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.livenotes = state

    # Add logging middleware
    app.add_middleware(LoggingMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    app.add_exception_handler(LiveNotesError, livenotes_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Include routers
    app.include_router(auth_router, prefix="/api")
    app.include_router(notes_router, prefix="/api")
    app.include_router(live_router, prefix="/api")
    app.include_router(health_router, prefix="/api")

    @app.get("/api/")
    async def api_root():
        return {
            "message": "LiveNotes API",
            "version": __version__,
            "endpoints": {
                "authentication": "/api/auth/",
                "notes": "/api/notes",
                "live": "/api/live/notes",
                "health": "/api/health",
            },
        }

    return app


# Setup logging first
setup_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "livenotes.main:app", host=_settings.host, port=_settings.port, reload=_settings.reload
    )
