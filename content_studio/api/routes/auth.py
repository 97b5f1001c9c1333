import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from content_studio.core.config import Settings, get_settings
from content_studio.dependencies.auth import get_current_user
from content_studio.models.user import User
from content_studio.schemas.auth import AuthLogEvent, GoogleSignInRequest, TokenResponse
from content_studio.schemas.user import SessionUser
from content_studio.services.access_control import effective_user_type, resolve_user
from content_studio.services.profile_service import is_first_login, is_profile_complete
from content_studio.stores import Store, get_store
from content_studio.utils.auth import (
    InvalidTokenError,
    create_session_token,
    session_lifetime,
    verify_google_id_token,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def to_session_user(user: User) -> SessionUser:
    return SessionUser(
        id=user.id,
        email=user.email,
        name=user.name,
        image=user.image,
        user_type=effective_user_type(user),
        is_profile_complete=is_profile_complete(user),
        is_first_login=is_first_login(user),
    )


@router.post("/google", response_model=TokenResponse)
def sign_in_with_google(
    payload: GoogleSignInRequest,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Exchange a Google ID token for a session token."""
    if not settings.google_client_id:
        logger.error("Google sign-in attempted but GOOGLE_CLIENT_ID is not configured")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Google sign-in is not configured",
        )

    try:
        identity = verify_google_id_token(payload.id_token, settings)
    except InvalidTokenError as e:
        logger.warning(f"Google sign-in rejected: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Google credentials",
        )

    user = resolve_user(store, identity, sync_profile=True)
    logger.info("User signed in", extra={"user_id": user.id, "email": user.email, "action": "login"})

    return {
        "access_token": create_session_token(user, settings),
        "token_type": "bearer",
        "expires_in": int(session_lifetime(settings).total_seconds()),
        "user": to_session_user(user),
    }


@router.get("/session", response_model=SessionUser)
def get_session(user: User = Depends(get_current_user)):
    """Current session user with the derived profile flags."""
    return to_session_user(user)


@router.post("/log")
def log_auth_event(event: AuthLogEvent, request: Request):
    """Record an auth event reported by the frontend (sign-in errors, callbacks)."""
    context = {
        "auth_event": event.type,
        "url": event.url,
        "host": request.headers.get("host"),
        "referer": request.headers.get("referer"),
        "user_agent": request.headers.get("user-agent"),
    }
    if event.error:
        context["error_type"] = event.error.type
        logger.error(f"[auth] {event.error.type or 'Error'}: {event.error.message or 'Unknown error'}", extra=context)
    else:
        logger.info(f"[auth] {event.type or 'Info'}", extra=context)
    return {"success": True}
