"""
Persistence interface shared by the SQL and in-memory backends.
"""
from abc import ABC, abstractmethod
from typing import Optional

from content_studio.models.user import User
from content_studio.models.user_usage import UserUsage

USAGE_COUNTERS = ("scripts_used", "titles_used", "images_used", "audios_used")

# Profile columns a user may change through update_user_fields
UPDATABLE_USER_FIELDS = frozenset({
    "name",
    "image",
    "user_type",
    "phone",
    "address",
    "city",
    "state",
    "postal_code",
    "document",
    "birth_date",
    "settings",
})


class Store(ABC):
    @abstractmethod
    def find_user_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    def find_user_by_id(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    def upsert_user(self, email: str, name: Optional[str] = None, image: Optional[str] = None) -> User:
        """
        Create the user with Basic type and default settings, or refresh the
        name/image of an existing one. Missing name/image never overwrite
        stored values.
        """

    @abstractmethod
    def update_user_fields(self, user_id: str, **fields) -> Optional[User]:
        """Apply a partial update. Returns None if the user does not exist."""

    @abstractmethod
    def get_or_create_usage(self, user_id: str, month: int, year: int) -> UserUsage:
        """Fetch the usage row for the month, inserting a zeroed one if absent."""

    @abstractmethod
    def increment_usage(self, user_id: str, month: int, year: int, counter: str) -> None:
        """Add one to ``counter``, creating the row with that counter at 1 if absent."""


def check_counter(counter: str) -> None:
    if counter not in USAGE_COUNTERS:
        raise ValueError(f"Unknown usage counter: {counter!r}")


def check_user_fields(fields: dict) -> None:
    unknown = set(fields) - UPDATABLE_USER_FIELDS
    if unknown:
        raise ValueError(f"Cannot update user fields: {sorted(unknown)}")
