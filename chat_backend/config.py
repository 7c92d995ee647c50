"""Application settings for the chat backend."""
from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv


load_dotenv()


def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    """Settings loaded from environment variables.

    Keep all credentials and config centralized here.
    """

    def __init__(self, **overrides):
        env = os.environ
        self.port: int = int(env.get("PORT", "3000"))
        self.environment: str = env.get("ENVIRONMENT", "development")
        self.client_url: str = env.get("CLIENT_URL", "http://localhost:5173")
        self.database_url: str = env.get("DATABASE_URL", "sqlite:///./chat_backend.db")

        # ImageKit
        self.image_kit_endpoint: str = env.get("IMAGE_KIT_ENDPOINT", "")
        self.image_kit_public_key: str = env.get("IMAGE_KIT_PUBLIC_KEY", "")
        self.image_kit_private_key: str = env.get("IMAGE_KIT_PRIVATE_KEY", "")

        # Identity provider session tokens
        self.auth_jwt_key: str = env.get("AUTH_JWT_KEY", "")
        self.auth_jwt_algorithms: List[str] = _split(env.get("AUTH_JWT_ALGORITHMS", "RS256"))
        self.auth_jwt_issuer: Optional[str] = env.get("AUTH_JWT_ISSUER") or None
        self.auth_jwt_audience: Optional[str] = env.get("AUTH_JWT_AUDIENCE") or None
        self.auth_session_cookie: str = env.get("AUTH_SESSION_COOKIE", "__session")

        self.fallback_redirect_url: str = env.get(
            "FALLBACK_REDIRECT_URL", "https://chat-alpha-ai.vercel.app"
        )
        self.log_level: str = env.get("LOG_LEVEL", "INFO")

        for name, value in overrides.items():
            if not hasattr(self, name):
                raise TypeError(f"Unknown setting: {name}")
            setattr(self, name, value)

    @property
    def image_kit_configured(self) -> bool:
        return bool(
            self.image_kit_endpoint
            and self.image_kit_public_key
            and self.image_kit_private_key
        )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
