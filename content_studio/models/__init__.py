from content_studio.models.user import User, UserType
from content_studio.models.user_usage import UserUsage

__all__ = [
    "User",
    "UserType",
    "UserUsage",
]
