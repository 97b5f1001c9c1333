import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import jwt  # PyJWT

from content_studio.core.config import Settings, get_settings
from content_studio.models.user import User, UserType
from content_studio.services.access_control import Identity, effective_user_type

logger = logging.getLogger(__name__)

GOOGLE_JWKS_URL = "https://www.googleapis.com/oauth2/v3/certs"
GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")


class InvalidTokenError(Exception):
    """Raised when a session or Google token cannot be verified."""


def session_lifetime(settings: Settings) -> timedelta:
    return timedelta(days=settings.session_max_age_days)


def create_session_token(user: User, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user.id,
        "email": user.email,
        "name": user.name,
        "picture": user.image,
        "user_type": effective_user_type(user).value,
        "iat": now,
        "exp": now + session_lifetime(settings),
    }
    return jwt.encode(payload, settings.session_secret, algorithm=settings.session_algorithm)


def decode_session_token(token: str, settings: Optional[Settings] = None) -> Identity:
    """Verify a session token and return the identity it carries."""
    settings = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.session_secret,
            algorithms=[settings.session_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise InvalidTokenError("Session expired")
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError(f"Invalid session token: {e}")

    email = payload.get("email")
    if not email:
        raise InvalidTokenError("Token missing email claim")

    try:
        user_type = UserType(payload.get("user_type") or UserType.BASIC)
    except ValueError:
        user_type = UserType.BASIC

    return Identity(
        user_id=payload["sub"],
        email=email,
        name=payload.get("name"),
        image=payload.get("picture"),
        user_type=user_type,
    )


@lru_cache
def _google_jwks_client() -> jwt.PyJWKClient:
    # PyJWKClient caches the key set between calls
    return jwt.PyJWKClient(GOOGLE_JWKS_URL)


def verify_google_id_token(id_token: str, settings: Optional[Settings] = None) -> Identity:
    """
    Verify a Google ID token (RS256, signed with Google's published keys)
    and return the identity it carries.
    """
    settings = settings or get_settings()
    if not settings.google_client_id:
        raise RuntimeError("GOOGLE_CLIENT_ID is not configured")

    try:
        signing_key = _google_jwks_client().get_signing_key_from_jwt(id_token)
        payload = jwt.decode(
            id_token,
            signing_key.key,
            algorithms=["RS256"],
            audience=settings.google_client_id,
            options={"verify_aud": True, "verify_iss": False},
        )
    except jwt.PyJWKClientError as e:
        logger.error(f"Could not fetch Google signing keys: {e}")
        raise InvalidTokenError("Could not verify Google token")
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError(f"Invalid Google token: {e}")

    if payload.get("iss") not in GOOGLE_ISSUERS:
        raise InvalidTokenError("Invalid Google token issuer")
    if not payload.get("email"):
        raise InvalidTokenError("Google token missing email claim")
    if payload.get("email_verified") is False:
        raise InvalidTokenError("Google account email is not verified")

    return Identity(
        user_id=None,
        email=payload["email"],
        name=payload.get("name"),
        image=payload.get("picture"),
    )
