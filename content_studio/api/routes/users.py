import logging

from fastapi import APIRouter, Depends, HTTPException, status

from content_studio.core.plan_limits import get_user_limits
from content_studio.dependencies.auth import get_current_identity, get_current_user
from content_studio.models.user import User
from content_studio.schemas.usage import UsageResponse
from content_studio.schemas.user import ProfileUpdate, UserResponse, UserSettings, UserSettingsUpdate
from content_studio.services.access_control import Identity, effective_user_type
from content_studio.services.usage_service import get_remaining_usage, get_user_usage
from content_studio.services.user_service import (
    get_user_by_email,
    settings_for,
    to_user_response,
    update_user_profile,
    update_user_settings,
)
from content_studio.stores import Store, get_store

logger = logging.getLogger(__name__)

router = APIRouter()


def _user_not_found(identity: Identity) -> HTTPException:
    logger.warning("User not found", extra={"email": identity.email})
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="User not found",
    )


@router.get("/profile", response_model=UserResponse)
def get_profile(
    identity: Identity = Depends(get_current_identity),
    store: Store = Depends(get_store),
):
    """Get current user profile"""
    user = get_user_by_email(store, identity.email)
    if not user:
        raise _user_not_found(identity)
    return to_user_response(user)


@router.put("/profile", response_model=UserResponse)
def update_profile(
    profile_data: ProfileUpdate,
    identity: Identity = Depends(get_current_identity),
    store: Store = Depends(get_store),
):
    """Update user profile information. Fields left out of the body are kept."""
    user = get_user_by_email(store, identity.email)
    if not user:
        raise _user_not_found(identity)

    updated = update_user_profile(store, user.id, profile_data)
    if not updated:
        raise _user_not_found(identity)

    logger.info("Profile updated", extra={"user_id": user.id, "fields": sorted(profile_data.model_dump(exclude_unset=True))})
    return to_user_response(updated)


@router.get("/settings", response_model=UserSettings)
def get_settings_for_user(user: User = Depends(get_current_user)):
    return settings_for(user)


@router.put("/settings", response_model=UserSettings)
def update_settings(
    settings_data: UserSettingsUpdate,
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    settings = update_user_settings(store, user.id, settings_data)
    if settings is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return settings


@router.get("/usage", response_model=UsageResponse)
def get_usage(
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    """Limits of the user's plan, what was used this month and what is left."""
    user_type = effective_user_type(user)
    usage = get_user_usage(store, user.id)

    return {
        "user_type": user_type,
        "month": usage.month,
        "year": usage.year,
        "limits": get_user_limits(user_type).to_dict(),
        "used": {
            "scripts_used": usage.scripts_used,
            "titles_used": usage.titles_used,
            "images_used": usage.images_used,
            "audios_used": usage.audios_used,
        },
        "usage": get_remaining_usage(store, user.id, user_type),
    }
