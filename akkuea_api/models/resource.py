"""Resource model definitions."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from akkuea_api.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Resource(Base):
    """Represents a piece of educational content owned by its creator."""
    __tablename__ = "resources"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False, default="")
    language = Column(String, nullable=False, default="")
    format = Column(String, nullable=False, default="")
    creator_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)
