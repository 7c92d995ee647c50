"""Session token authentication for FastAPI routes."""
import logging
from typing import Optional

from fastapi import Request
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel

from chat_backend.config import Settings
from chat_backend.errors import UnauthenticatedError

logger = logging.getLogger(__name__)


class CurrentUser(BaseModel):
    """Identity resolved from the identity provider's session token."""
    user_id: str
    session_id: Optional[str] = None


def extract_token(request: Request, cookie_name: str) -> Optional[str]:
    """Bearer token from the Authorization header, else the session cookie."""
    auth_header = request.headers.get("authorization")
    if auth_header:
        if not auth_header.startswith("Bearer "):
            return None
        return auth_header[7:].strip() or None
    return request.cookies.get(cookie_name) or None


def verify_token(token: str, settings: Settings) -> CurrentUser:
    """
    Validate a session token and extract the caller's identity.

    Args:
        token: Encoded JWT
        settings: Verification key, algorithms and optional issuer/audience

    Returns:
        CurrentUser with user_id taken from the ``sub`` claim

    Raises:
        UnauthenticatedError: If the token is invalid, expired or has no subject
    """
    if not settings.auth_jwt_key:
        logger.warning("AUTH_JWT_KEY is not set; rejecting all session tokens")
        raise UnauthenticatedError(reason="Token verification key not configured")

    try:
        payload = jwt.decode(
            token,
            settings.auth_jwt_key,
            algorithms=settings.auth_jwt_algorithms,
            audience=settings.auth_jwt_audience,
            issuer=settings.auth_jwt_issuer,
            options={"verify_aud": settings.auth_jwt_audience is not None},
        )
    except ExpiredSignatureError:
        raise UnauthenticatedError(reason="Token has expired")
    except JWTError as e:
        raise UnauthenticatedError(reason=f"Invalid token: {str(e)}")

    user_id = payload.get("sub")
    if not user_id:
        raise UnauthenticatedError(reason="Invalid token: missing user ID")

    return CurrentUser(user_id=user_id, session_id=payload.get("sid"))


async def get_current_user(request: Request) -> CurrentUser:
    """
    Identity gate for protected routes.

    Runs before the handler body; a request without a valid credential never
    reaches handler logic.
    """
    settings: Settings = request.app.state.settings
    token = extract_token(request, settings.auth_session_cookie)
    logger.debug(
        "Auth on %s: authorization header=%s session cookie=%s",
        request.url.path,
        "authorization" in request.headers,
        settings.auth_session_cookie in request.cookies,
    )
    if not token:
        raise UnauthenticatedError(reason="Missing or invalid credentials")
    return verify_token(token, settings)
