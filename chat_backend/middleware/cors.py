"""CORS configuration for the web client."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chat_backend.config import Settings

logger = logging.getLogger(__name__)

# Local development origins
DEV_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


def allowed_origins(settings: Settings) -> list:
    if settings.is_production:
        return [settings.client_url] if settings.client_url else []
    origins = list(DEV_ORIGINS)
    if settings.client_url and settings.client_url not in origins:
        origins.append(settings.client_url)
    return origins


def add_cors_middleware(app: FastAPI, settings: Settings) -> None:
    """Allow the configured client origin, with credentials (session cookies)."""
    origins = allowed_origins(settings)
    logger.info(f"CORS allowed origins: {origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
