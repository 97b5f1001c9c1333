"""
SQLAlchemy backend.

Rows that may be created by concurrent requests (users on first sign-in,
monthly usage rows) are written with INSERT ... ON CONFLICT so that two
requests racing on the same key never produce a duplicate-key error or lose
an increment.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from content_studio.models.user import User, UserType, new_user_id
from content_studio.models.user_usage import UserUsage
from content_studio.schemas.user import UserSettings
from content_studio.stores.base import USAGE_COUNTERS, Store, check_counter, check_user_fields

logger = logging.getLogger(__name__)

USAGE_KEY = ("user_id", "month", "year")

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SqlStore(Store):
    def __init__(self, db: Session):
        self.db = db

    def _insert(self, model):
        dialect = self.db.get_bind().dialect.name
        try:
            insert = _INSERT_BY_DIALECT[dialect]
        except KeyError:
            raise NotImplementedError(f"Upserts are not supported for the {dialect!r} dialect")
        return insert(model.__table__)

    def _execute(self, stmt) -> None:
        try:
            self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def find_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def upsert_user(self, email: str, name: Optional[str] = None, image: Optional[str] = None) -> User:
        email = email.strip().lower()
        now = datetime.utcnow()
        stmt = self._insert(User).values(
            id=new_user_id(),
            email=email,
            name=name,
            image=image,
            user_type=UserType.BASIC,
            settings=UserSettings().model_dump(),
            created_at=now,
            updated_at=now,
        )

        updates = {key: value for key, value in (("name", name), ("image", image)) if value is not None}
        if updates:
            updates["updated_at"] = now
            stmt = stmt.on_conflict_do_update(index_elements=["email"], set_=updates)
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=["email"])

        self._execute(stmt)
        return self.find_user_by_email(email)

    def update_user_fields(self, user_id: str, **fields) -> Optional[User]:
        check_user_fields(fields)
        user = self.find_user_by_id(user_id)
        if not user:
            return None

        for key, value in fields.items():
            setattr(user, key, value)
        user.updated_at = datetime.utcnow()

        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user

    def _find_usage(self, user_id: str, month: int, year: int) -> Optional[UserUsage]:
        return self.db.query(UserUsage).filter(
            UserUsage.user_id == user_id,
            UserUsage.month == month,
            UserUsage.year == year,
        ).first()

    def get_or_create_usage(self, user_id: str, month: int, year: int) -> UserUsage:
        usage = self._find_usage(user_id, month, year)
        if usage:
            return usage

        now = datetime.utcnow()
        stmt = self._insert(UserUsage).values(
            user_id=user_id,
            month=month,
            year=year,
            created_at=now,
            updated_at=now,
            **{counter: 0 for counter in USAGE_COUNTERS},
        ).on_conflict_do_nothing(index_elements=list(USAGE_KEY))
        self._execute(stmt)
        logger.debug("Usage row ensured", extra={"user_id": user_id, "month": month, "year": year})
        return self._find_usage(user_id, month, year)

    def increment_usage(self, user_id: str, month: int, year: int, counter: str) -> None:
        check_counter(counter)
        now = datetime.utcnow()
        initial = {name: 0 for name in USAGE_COUNTERS}
        initial[counter] = 1

        table = UserUsage.__table__
        stmt = self._insert(UserUsage).values(
            user_id=user_id,
            month=month,
            year=year,
            created_at=now,
            updated_at=now,
            **initial,
        ).on_conflict_do_update(
            index_elements=list(USAGE_KEY),
            set_={counter: table.c[counter] + 1, "updated_at": now},
        )
        self._execute(stmt)
