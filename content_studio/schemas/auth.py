from typing import Any, Dict, Optional

from pydantic import BaseModel

from content_studio.schemas.user import SessionUser


class GoogleSignInRequest(BaseModel):
    id_token: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str
    expires_in: int  # seconds
    user: SessionUser


class AuthLogError(BaseModel):
    type: Optional[str] = None
    message: Optional[str] = None

    class Config:
        extra = "allow"


class AuthLogEvent(BaseModel):
    """Auth event reported by the frontend (sign-in errors, redirects...)."""
    type: Optional[str] = None
    url: Optional[str] = None
    error: Optional[AuthLogError] = None

    class Config:
        extra = "allow"
