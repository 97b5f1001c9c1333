from dataclasses import asdict, dataclass, fields
from typing import Dict, Union

from content_studio.models.user import UserType

# Admin quotas: large enough to never be reached in practice while keeping
# every numeric field comparable across tiers.
UNLIMITED = 999_999

MONTHLY_LIMIT_FIELDS = (
    "max_scripts_per_month",
    "max_titles_per_month",
    "max_images_per_month",
    "max_audios_per_month",
)


@dataclass(frozen=True)
class UserLimits:
    max_scripts_per_month: int
    max_titles_per_month: int
    max_images_per_month: int
    max_audios_per_month: int
    max_script_length: int  # characters
    has_access_to_images: bool
    has_access_to_audio: bool
    has_access_to_complete_package: bool

    def to_dict(self) -> dict:
        return asdict(self)


# Plan limits configuration
USER_LIMITS: Dict[UserType, UserLimits] = {
    UserType.BASIC: UserLimits(
        max_scripts_per_month=5,
        max_titles_per_month=10,
        max_images_per_month=0,
        max_audios_per_month=0,
        max_script_length=2000,
        has_access_to_images=False,
        has_access_to_audio=False,
        has_access_to_complete_package=False,
    ),
    UserType.PREMIUM: UserLimits(
        max_scripts_per_month=20,
        max_titles_per_month=40,
        max_images_per_month=20,
        max_audios_per_month=20,
        max_script_length=5000,
        has_access_to_images=True,
        has_access_to_audio=True,
        has_access_to_complete_package=False,
    ),
    UserType.ADMIN: UserLimits(
        max_scripts_per_month=UNLIMITED,
        max_titles_per_month=UNLIMITED,
        max_images_per_month=UNLIMITED,
        max_audios_per_month=UNLIMITED,
        max_script_length=10000,
        has_access_to_images=True,
        has_access_to_audio=True,
        has_access_to_complete_package=True,
    ),
}

LIMIT_FIELD_NAMES = frozenset(f.name for f in fields(UserLimits))


def _coerce_user_type(user_type: Union[UserType, str, None]) -> UserType:
    if isinstance(user_type, UserType):
        return user_type
    try:
        return UserType(user_type)
    except ValueError:
        return UserType.BASIC


def get_user_limits(user_type: Union[UserType, str, None]) -> UserLimits:
    """Get the limits for a user type. Unknown or missing types get Basic limits."""
    return USER_LIMITS[_coerce_user_type(user_type)]


def check_user_access(user_type: Union[UserType, str, None], field: str) -> bool:
    """
    Check whether a user type has access to a feature.
    Boolean flags are returned as-is; numeric limits grant access when > 0.
    """
    if field not in LIMIT_FIELD_NAMES:
        return False
    value = getattr(get_user_limits(user_type), field)
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value > 0
    return False


def has_reached_limit(user_type: Union[UserType, str, None], field: str, current_usage: int) -> bool:
    """Check if the monthly limit for ``field`` has been reached."""
    if field not in MONTHLY_LIMIT_FIELDS:
        raise ValueError(f"{field!r} is not a monthly limit")
    return current_usage >= getattr(get_user_limits(user_type), field)


def is_script_length_exceeded(user_type: Union[UserType, str, None], script_content: str) -> bool:
    return len(script_content) > get_user_limits(user_type).max_script_length


def plan_catalog() -> Dict[str, dict]:
    """Limits of every plan, keyed by user type value."""
    return {user_type.value: limits.to_dict() for user_type, limits in USER_LIMITS.items()}
