from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base


Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UserDocument(Base):
    """One JSON document per (collection, user)."""

    __tablename__ = "documents"

    collection = Column(String(64), primary_key=True)
    user_id = Column(String(128), primary_key=True)
    payload = Column(Text, nullable=False, default="null")
    last_updated = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<UserDocument {self.collection}/{self.user_id}>"
