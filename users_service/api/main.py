"""
FastAPI app assembly: logging, store lifespan, error rendering and router wiring.
"""
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)

from users_service.api.users import router as users_router
from users_service.db.store import UserStore
from users_service.utils.config import Settings, get_settings

INVALID_PAYLOAD = "Invalid request payload"


def error_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=headers)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the record store before serving; a failed connect aborts startup."""
    owns_store = app.state.store is None
    if owns_store:
        settings = app.state.settings or get_settings()
        # StoreUnavailableError propagates: the service cannot start without storage
        app.state.store = UserStore.connect(settings.database_url)
    logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)
    try:
        yield
    finally:
        if owns_store and app.state.store is not None:
            app.state.store.close()
            app.state.store = None


def create_app(settings: Optional[Settings] = None, store: Optional[UserStore] = None) -> FastAPI:
    """Build the service. An injected ``store`` is used as-is and never closed."""
    app = FastAPI(
        title="Users Service",
        description="API for managing user records stored as JSON documents.",
        version="1.0.0",
        lifespan=lifespan,
    )
    # Avoid implicit trailing-slash redirects for predictable URLs
    app.router.redirect_slashes = False
    app.state.settings = settings
    app.state.store = store

    @app.exception_handler(RequestValidationError)
    async def invalid_payload_handler(request: Request, exc: RequestValidationError):
        return error_response(status.HTTP_400_BAD_REQUEST, INVALID_PAYLOAD)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(users_router)
    return app


app = create_app()


def run_server(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Launch the service with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_level=logging.getLevelName(LOG_LEVEL).lower(),
    )


if __name__ == "__main__":
    run_server()
