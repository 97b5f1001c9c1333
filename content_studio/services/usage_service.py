"""
Monthly usage tracking and quota checks.

Usage is counted per calendar month (UTC). Callers check first, run the
protected action, and only then increment, so failed actions are never
counted. Two concurrent requests may both pass the check before either
increments; limits are therefore enforced softly, by at most the number of
in-flight requests.
"""
import logging
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Union

from content_studio.core.plan_limits import get_user_limits, has_reached_limit
from content_studio.models.user import UserType
from content_studio.models.user_usage import UserUsage
from content_studio.stores.base import Store

logger = logging.getLogger(__name__)


class ResourceKind(str, Enum):
    SCRIPT = "script"
    TITLE = "title"
    IMAGE = "image"
    AUDIO = "audio"


# resource -> (usage counter column, monthly limit field)
RESOURCE_FIELDS: Dict[ResourceKind, tuple] = {
    ResourceKind.SCRIPT: ("scripts_used", "max_scripts_per_month"),
    ResourceKind.TITLE: ("titles_used", "max_titles_per_month"),
    ResourceKind.IMAGE: ("images_used", "max_images_per_month"),
    ResourceKind.AUDIO: ("audios_used", "max_audios_per_month"),
}


def usage_period(now: Optional[datetime] = None) -> tuple:
    """(month, year) of the usage period containing ``now``."""
    now = now or datetime.utcnow()
    return now.month, now.year


def get_user_usage(store: Store, user_id: str, now: Optional[datetime] = None) -> UserUsage:
    """Get or create the usage record for the current month."""
    if not user_id:
        raise ValueError("user_id is required")
    month, year = usage_period(now)
    return store.get_or_create_usage(user_id, month, year)


def can_use_resource(
    store: Store,
    user_id: str,
    user_type: Union[UserType, str],
    resource: Union[ResourceKind, str],
    now: Optional[datetime] = None,
) -> bool:
    """Check whether the user may perform one more ``resource`` action this month. Read-only."""
    resource = ResourceKind(resource)
    limits = get_user_limits(user_type)

    if resource is ResourceKind.IMAGE and not limits.has_access_to_images:
        return False
    if resource is ResourceKind.AUDIO and not limits.has_access_to_audio:
        return False

    usage = get_user_usage(store, user_id, now)
    counter, limit_field = RESOURCE_FIELDS[resource]
    return not has_reached_limit(user_type, limit_field, getattr(usage, counter))


def increment_resource_usage(
    store: Store,
    user_id: str,
    resource: Union[ResourceKind, str],
    now: Optional[datetime] = None,
) -> None:
    """Count one completed ``resource`` action for the current month."""
    resource = ResourceKind(resource)
    month, year = usage_period(now)
    counter, _ = RESOURCE_FIELDS[resource]
    store.increment_usage(user_id, month, year, counter)
    logger.info(
        f"Incremented {counter} for user {user_id}",
        extra={"user_id": user_id, "resource": resource.value, "month": month, "year": year},
    )


def get_remaining_usage(
    store: Store,
    user_id: str,
    user_type: Union[UserType, str],
    now: Optional[datetime] = None,
) -> Dict[str, int]:
    usage = get_user_usage(store, user_id, now)
    limits = get_user_limits(user_type)

    return {
        "remaining_scripts": max(0, limits.max_scripts_per_month - usage.scripts_used),
        "remaining_titles": max(0, limits.max_titles_per_month - usage.titles_used),
        "remaining_images": max(0, limits.max_images_per_month - usage.images_used),
        "remaining_audios": max(0, limits.max_audios_per_month - usage.audios_used),
    }
