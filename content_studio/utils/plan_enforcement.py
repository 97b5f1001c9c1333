"""
HTTP-facing quota enforcement. Raises HTTPException when the Quota Gate
denies a request, with a message the frontend can show as-is.
"""
from datetime import datetime
from typing import Optional

from fastapi import HTTPException, status

from content_studio.core.plan_limits import get_user_limits, is_script_length_exceeded
from content_studio.models.user import UserType
from content_studio.services.usage_service import RESOURCE_FIELDS, ResourceKind, can_use_resource
from content_studio.stores.base import Store

RESOURCE_LABELS = {
    ResourceKind.SCRIPT: "scripts",
    ResourceKind.TITLE: "titles",
    ResourceKind.IMAGE: "images",
    ResourceKind.AUDIO: "audio files",
}


def enforce_resource_quota(
    store: Store,
    user_id: str,
    user_type: UserType,
    resource: ResourceKind,
    now: Optional[datetime] = None,
) -> bool:
    """
    Check if the user can perform one more ``resource`` action this month.
    Raises HTTPException 403 if the plan has no access or the monthly limit is reached.
    """
    if can_use_resource(store, user_id, user_type, resource, now):
        return True

    limits = get_user_limits(user_type)
    label = RESOURCE_LABELS[resource]
    _, limit_field = RESOURCE_FIELDS[resource]
    limit = getattr(limits, limit_field)

    if limit == 0:
        message = f"Your {user_type.value} plan does not include {label}. Upgrade to unlock it."
    else:
        message = (
            f"You have reached the limit of {limit} {label} per month for your {user_type.value} plan. "
            f"Upgrade to create more."
        )

    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail={"error": message, "limit": limit},
    )


def _script_too_large(subject: str, max_length: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        detail={
            "error": f"{subject} exceeds the limit for your plan ({max_length} characters)",
            "max_length": max_length,
        },
    )


def enforce_script_length(user_type: UserType, requested_length: Optional[int]) -> bool:
    """Raises HTTPException 413 if the requested script length is over the plan's maximum."""
    max_length = get_user_limits(user_type).max_script_length
    if requested_length and requested_length > max_length:
        raise _script_too_large("The requested length", max_length)
    return True


def enforce_script_content(user_type: UserType, content: str) -> bool:
    """Raises HTTPException 413 if a generated script is longer than the plan allows."""
    if is_script_length_exceeded(user_type, content):
        raise _script_too_large("The generated script", get_user_limits(user_type).max_script_length)
    return True
