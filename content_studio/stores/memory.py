"""
Process-local backend for development and tests.
Every operation holds one lock, which gives the same atomicity the SQL
backend gets from its upserts. Data is lost when the process exits.
"""
import threading
from datetime import datetime
from typing import Dict, Optional, Tuple

from content_studio.models.user import User, UserType, new_user_id
from content_studio.models.user_usage import UserUsage
from content_studio.schemas.user import UserSettings
from content_studio.stores.base import USAGE_COUNTERS, Store, check_counter, check_user_fields


def _clone(instance):
    """Detached copy, so callers never hold the stored object."""
    values = {column.key: getattr(instance, column.key) for column in instance.__table__.columns}
    if isinstance(values.get("settings"), dict):
        values["settings"] = dict(values["settings"])
    return type(instance)(**values)


class MemoryStore(Store):
    def __init__(self):
        self._lock = threading.Lock()
        self._users: Dict[str, User] = {}
        self._user_ids_by_email: Dict[str, str] = {}
        self._usage: Dict[Tuple[str, int, int], UserUsage] = {}

    def find_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user_id = self._user_ids_by_email.get(email.strip().lower())
            return _clone(self._users[user_id]) if user_id else None

    def find_user_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return _clone(user) if user else None

    def upsert_user(self, email: str, name: Optional[str] = None, image: Optional[str] = None) -> User:
        email = email.strip().lower()
        now = datetime.utcnow()
        with self._lock:
            user_id = self._user_ids_by_email.get(email)
            if user_id:
                user = self._users[user_id]
                if name is not None:
                    user.name = name
                if image is not None:
                    user.image = image
                if name is not None or image is not None:
                    user.updated_at = now
                return _clone(user)

            user = User(
                id=new_user_id(),
                email=email,
                name=name,
                image=image,
                user_type=UserType.BASIC,
                settings=UserSettings().model_dump(),
                created_at=now,
                updated_at=now,
            )
            self._users[user.id] = user
            self._user_ids_by_email[email] = user.id
            return _clone(user)

    def update_user_fields(self, user_id: str, **fields) -> Optional[User]:
        check_user_fields(fields)
        with self._lock:
            user = self._users.get(user_id)
            if not user:
                return None
            for key, value in fields.items():
                setattr(user, key, value)
            user.updated_at = datetime.utcnow()
            return _clone(user)

    def _new_usage(self, user_id: str, month: int, year: int) -> UserUsage:
        now = datetime.utcnow()
        usage = UserUsage(
            user_id=user_id,
            month=month,
            year=year,
            created_at=now,
            updated_at=now,
            **{counter: 0 for counter in USAGE_COUNTERS},
        )
        self._usage[(user_id, month, year)] = usage
        return usage

    def get_or_create_usage(self, user_id: str, month: int, year: int) -> UserUsage:
        with self._lock:
            usage = self._usage.get((user_id, month, year))
            if usage is None:
                usage = self._new_usage(user_id, month, year)
            return _clone(usage)

    def increment_usage(self, user_id: str, month: int, year: int, counter: str) -> None:
        check_counter(counter)
        with self._lock:
            usage = self._usage.get((user_id, month, year))
            if usage is None:
                usage = self._new_usage(user_id, month, year)
            setattr(usage, counter, getattr(usage, counter) + 1)
            usage.updated_at = datetime.utcnow()

    def usage_row_count(self) -> int:
        with self._lock:
            return len(self._usage)
