import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from content_studio.core.config import Settings, get_settings
from content_studio.models.user import User, UserType
from content_studio.services.access_control import Identity, check_access, effective_user_type, resolve_user
from content_studio.stores import Store, get_store
from content_studio.utils.auth import InvalidTokenError, decode_session_token

logger = logging.getLogger(__name__)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_identity(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> Identity:
    """
    Verify the session token from the Authorization header.
    Every failure is a 401; the caller is never told why a token was rejected
    beyond a short reason.
    """
    if not authorization:
        raise _unauthorized("Missing authorization header")

    if not authorization.startswith("Bearer "):
        raise _unauthorized("Invalid header format. Expected 'Bearer <token>'")

    token = authorization[len("Bearer "):].strip()
    # Frontends sometimes send the literal string of an unset variable
    if not token or token.lower() in ("null", "undefined", "none"):
        raise _unauthorized("Missing token")

    try:
        return decode_session_token(token, settings)
    except InvalidTokenError as e:
        logger.info(f"Rejected session token: {e}")
        raise _unauthorized(str(e))


def get_current_user(
    identity: Identity = Depends(get_current_identity),
    store: Store = Depends(get_store),
) -> User:
    """Stored user for the caller. Users are created on first sight."""
    return resolve_user(store, identity)


def require_user_types(*required_types: UserType):
    """Dependency factory: only lets through users whose type is in ``required_types``."""

    def dependency(user: User = Depends(get_current_user)) -> User:
        if not check_access(effective_user_type(user), required_types):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Your plan does not give access to this resource",
            )
        return user

    return dependency
