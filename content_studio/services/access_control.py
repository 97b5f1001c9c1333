"""
Maps an authenticated identity to a stored user and answers tier checks.
resolve_user is the only place new users are created.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from content_studio.models.user import User, UserType
from content_studio.stores.base import Store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Verified claims of the caller (from a session token or a Google ID token)."""
    user_id: Optional[str]
    email: str
    name: Optional[str] = None
    image: Optional[str] = None
    user_type: Optional[UserType] = None


def effective_user_type(user: Optional[User]) -> UserType:
    if user is None or not user.user_type:
        return UserType.BASIC
    return UserType(user.user_type)


def resolve_user(store: Store, identity: Identity, sync_profile: bool = False) -> User:
    """
    Return the stored user for ``identity``, creating it on first sight.

    With ``sync_profile`` (used on sign-in) the display name and avatar from
    the identity provider are written even when the user already exists.
    """
    if not identity.email:
        raise ValueError("identity email is required")

    existing = store.find_user_by_email(identity.email)
    if existing and not sync_profile:
        return existing

    user = store.upsert_user(identity.email, name=identity.name, image=identity.image)
    if existing is None:
        logger.info(
            f"Created user {user.id}",
            extra={"user_id": user.id, "email": user.email, "action": "signup"},
        )
    return user


def check_access(user_type: Union[UserType, str, None], required_types: Iterable[UserType]) -> bool:
    if user_type is None:
        return False
    try:
        return UserType(user_type) in set(required_types)
    except ValueError:
        return False
