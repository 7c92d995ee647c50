"""Main FastAPI application for the chat backend."""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, RedirectResponse

from chat_backend import __version__
from chat_backend.config import Settings, get_settings
from chat_backend.db.store import ChatStore
from chat_backend.errors import register_error_handlers
from chat_backend.middleware.cors import add_cors_middleware
from chat_backend.routers import chats_router, upload_router
from chat_backend.services.upload_service import UploadCredentialIssuer, build_upload_issuer
from chat_backend.utils.logger import get_logger, setup_logging

app_logger = get_logger("chat_backend")

DEMO_COOKIE_MAX_AGE = 24 * 60 * 60  # one day, in seconds


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the store on startup, release it on shutdown."""
    store: ChatStore = app.state.store
    if not store.connect():
        app_logger.warning(
            "Starting without a store connection; chat routes will answer 503",
            last_error=store.last_error,
        )
    app_logger.info("Application startup complete", version=__version__)
    try:
        yield
    finally:
        store.disconnect()


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[ChatStore] = None,
    upload_issuer: Optional[UploadCredentialIssuer] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; read from the environment when omitted
        store: Chat store; built from settings.database_url when omitted
        upload_issuer: Upload credential issuer; built from the ImageKit
            settings when omitted (None if ImageKit is not configured)
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Chat Backend API",
        description="Persists chat conversations and issues image upload credentials",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store or ChatStore(settings.database_url)
    app.state.upload_issuer = upload_issuer or build_upload_issuer(settings)

    add_cors_middleware(app, settings)
    register_error_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Liveness check."""
        return "Backend is running"

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint, including the store connection state."""
        store_health = request.app.state.store.health()
        return {
            "status": "healthy" if store_health["connected"] else "degraded",
            "version": __version__,
            "store": store_health,
        }

    app.include_router(upload_router, prefix="/api")  # /api/upload
    app.include_router(chats_router, prefix="/api")  # /api/chats, /api/userchats

    @app.get("/set-cookie", response_class=PlainTextResponse)
    async def set_cookie():
        """Demo endpoint: sets a cross-site session cookie."""
        response = PlainTextResponse("Cookie set!")
        response.set_cookie(
            "sessionId",
            "abc123",
            max_age=DEMO_COOKIE_MAX_AGE,
            path="/",
            secure=True,
            httponly=True,
            samesite="none",
        )
        return response

    # Must stay last: catches every GET no other route matched
    @app.get("/{full_path:path}", include_in_schema=False)
    async def fallback(full_path: str):
        return RedirectResponse(settings.fallback_redirect_url)

    return app


app = create_app()
