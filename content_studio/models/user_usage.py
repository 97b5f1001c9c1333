"""
Monthly usage counters per user.
One row per (user, calendar month); a new month starts from a fresh row, so
there is no reset job.
"""
from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String

from content_studio.db.base import Base


class UserUsage(Base):
    __tablename__ = "user_usage"
    __table_args__ = (
        CheckConstraint("month BETWEEN 1 AND 12", name="ck_user_usage_month"),
    )

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, nullable=False)
    month = Column(Integer, primary_key=True, nullable=False)  # 1-12
    year = Column(Integer, primary_key=True, nullable=False)
    scripts_used = Column(Integer, default=0, nullable=False)
    titles_used = Column(Integer, default=0, nullable=False)
    images_used = Column(Integer, default=0, nullable=False)
    audios_used = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return (
            f"<UserUsage(user_id={self.user_id}, {self.year}-{self.month:02d}, scripts={self.scripts_used}, "
            f"titles={self.titles_used}, images={self.images_used}, audios={self.audios_used})>"
        )
