import logging
from typing import Optional

from content_studio.models.user import User, UserType
from content_studio.schemas.user import ProfileUpdate, UserResponse, UserSettings, UserSettingsUpdate
from content_studio.services.profile_service import is_first_login, is_profile_complete
from content_studio.stores.base import Store

logger = logging.getLogger(__name__)


def get_user_by_email(store: Store, email: str) -> Optional[User]:
    return store.find_user_by_email(email)


def update_user_profile(store: Store, user_id: str, data: ProfileUpdate) -> Optional[User]:
    """Apply the fields present in ``data``; fields left out keep their stored value."""
    fields = data.model_dump(exclude_unset=True)
    if not fields:
        return store.find_user_by_id(user_id)
    return store.update_user_fields(user_id, **fields)


def settings_for(user: Optional[User]) -> UserSettings:
    """Stored settings merged over the defaults."""
    if not user or not user.settings:
        return UserSettings()
    return UserSettings(**{**UserSettings().model_dump(), **user.settings})


def validate_user_settings(current: UserSettings, update: UserSettingsUpdate) -> UserSettings:
    """Merge a partial settings update over the current settings."""
    changes = {key: value for key, value in update.model_dump().items() if value is not None}
    return current.model_copy(update=changes)


def update_user_settings(store: Store, user_id: str, update: UserSettingsUpdate) -> Optional[UserSettings]:
    user = store.find_user_by_id(user_id)
    if not user:
        return None
    settings = validate_user_settings(settings_for(user), update)
    store.update_user_fields(user_id, settings=settings.model_dump())
    return settings


def set_user_type(store: Store, user_id: str, user_type: UserType) -> Optional[User]:
    user = store.update_user_fields(user_id, user_type=user_type)
    if user:
        logger.info(
            f"User type changed to {user_type.value}",
            extra={"user_id": user_id, "user_type": user_type.value, "action": "user_type_change"},
        )
    return user


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        image=user.image,
        user_type=user.user_type or UserType.BASIC,
        phone=user.phone,
        address=user.address,
        city=user.city,
        state=user.state,
        postal_code=user.postal_code,
        document=user.document,
        birth_date=user.birth_date,
        settings=settings_for(user),
        is_profile_complete=is_profile_complete(user),
        is_first_login=is_first_login(user),
        created_at=user.created_at,
    )
