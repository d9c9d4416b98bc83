from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, JSON, Text
from sqlalchemy.orm import relationship

from devmatch.database import Base


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Message(Base):
    __tablename__ = "messages"
    __table_args__ = (Index("ix_messages_project_created", "project_id", "created_at"),)

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)

    # Stored as list[int] of user ids that have seen the message
    read_by = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), default=_utc_now, nullable=False)

    project = relationship("Project", back_populates="messages")
    sender = relationship("User")
