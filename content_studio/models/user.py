import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Column, Date, DateTime, JSON, String, Enum as SQLEnum

from content_studio.db.base import Base


class UserType(str, Enum):
    """Subscription level controlling quotas and feature access."""
    BASIC = "basic"
    PREMIUM = "premium"
    ADMIN = "admin"


def new_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_user_id)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=True)
    image = Column(String, nullable=True)  # Avatar URL from Google
    user_type = Column(
        SQLEnum(UserType, values_callable=lambda enum: [member.value for member in enum]),
        default=UserType.BASIC,
        nullable=False,
    )

    # Extended profile, filled in by the user after first sign-in
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    postal_code = Column(String, nullable=True)
    document = Column(String, nullable=True)  # Tax/identity document number
    birth_date = Column(Date, nullable=True)

    settings = Column(JSON, nullable=True)  # Notification and theme preferences

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, user_type={self.user_type})>"
